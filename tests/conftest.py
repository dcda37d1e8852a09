# File: tests/conftest.py
import asyncio
import threading
from collections.abc import AsyncIterator, Callable
from typing import Dict, Tuple, Union

import pytest
from aiohttp import web

from link_scout.config import ScannerConfig
from link_scout.logger import configure

#: path -> body (200) or (status, body)
Pages = Dict[str, Union[str, Tuple[int, str]]]


def links_page(*hrefs: str) -> str:
    """HTML page with one anchor per href."""
    anchors = "".join(f'<a href="{h}">link</a>' for h in hrefs)
    return f"<html><body>{anchors}</body></html>"


def make_app(pages: Pages) -> web.Application:
    """Build an aiohttp app serving *pages*; unknown paths answer 404."""
    app = web.Application()

    def handler_for(page):
        status, body = page if isinstance(page, tuple) else (200, page)

        async def handle(_):
            return web.Response(text=body, status=status, content_type="text/html")

        return handle

    for path, page in pages.items():
        app.router.add_get(path, handler_for(page))
    return app


async def serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


class ThreadedServer:
    """Runs an aiohttp app on its own loop so synchronous code can call it."""

    def __init__(self, app_factory: Callable[[], web.Application], port: int) -> None:
        self.app_factory = app_factory
        self.port = port
        self.loop = asyncio.new_event_loop()
        self._ready = threading.Event()
        self._thread = threading.Thread(target=self._run, daemon=True)

    @property
    def url(self) -> str:
        return f"http://localhost:{self.port}"

    def _run(self) -> None:
        asyncio.set_event_loop(self.loop)
        runner = web.AppRunner(self.app_factory())
        self.loop.run_until_complete(runner.setup())
        site = web.TCPSite(runner, "localhost", self.port)
        self.loop.run_until_complete(site.start())
        self._ready.set()
        self.loop.run_forever()
        self.loop.run_until_complete(runner.cleanup())
        self.loop.close()

    def start(self) -> "ThreadedServer":
        self._thread.start()
        if not self._ready.wait(5):
            raise RuntimeError("test server did not start")
        return self

    def stop(self) -> None:
        self.loop.call_soon_threadsafe(self.loop.stop)
        self._thread.join(5)


@pytest.fixture(autouse=True)
def reset_logger():
    """Rebind the project logger to the streams of the current test."""
    configure(level="DEBUG")
    yield
    configure(level="INFO")


@pytest.fixture()
def no_memory_pressure() -> Callable[[], int]:
    return lambda: 0


@pytest.fixture()
def basic_config() -> ScannerConfig:
    """Return a basic valid ScannerConfig for crawler tests."""
    return ScannerConfig(
        timeout=2.0,
        user_agent="TestAgent/1.0",
        memory_limit="1G",
    )


@pytest.fixture()
def threaded_server(unused_tcp_port: int):
    """Factory: start a ThreadedServer for the given pages; stopped on teardown."""
    servers = []

    def _start(pages: Pages) -> ThreadedServer:
        server = ThreadedServer(lambda: make_app(pages), unused_tcp_port).start()
        servers.append(server)
        return server

    yield _start
    for server in servers:
        server.stop()
