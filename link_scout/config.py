# === FILE: link_scout/config.py ===
"""
Loading and validation of the LinkScout scanner configuration.
Pydantic describes the schema and checks the data.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Literal, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)

from link_scout.utils import parse_size

__all__ = ["ScannerConfig", "load_config", "restriction_base"]


class ScannerConfig(BaseModel):
    """Configuration for a single scan run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    url: str = Field("", description="Seed URL the scan starts from.")
    host: str = Field("", description="Restriction host; empty means the seed URL itself.")
    max_scan: int = Field(0, ge=0, description="Maximum number of accepted links, 0 = unlimited.")
    memory_limit: Optional[Union[int, str]] = Field(
        "512M", description="Memory budget (e.g. 128M, 1G); -1 or null means unbounded."
    )
    timeout: float = Field(10.0, gt=0, description="Timeout for a single request (seconds).")
    user_agent: str = Field("LinkScout/1.0", min_length=1, description="User-Agent header.")
    verify_ssl: bool = Field(True, description="Validate TLS certificates.")
    order: Literal["dfs", "bfs"] = Field("dfs", description="Worklist discipline.")
    output_dir: Optional[Path] = Field(None, description="Directory for persisted scan results.")

    @field_validator("url", "host", mode="before")
    def _strip_blanks(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("memory_limit")
    def _check_memory_limit(cls, v: Any) -> Any:
        parse_size(v)
        return v

    @property
    def memory_budget(self) -> Optional[int]:
        """Memory budget in bytes, ``None`` when unbounded."""
        return parse_size(self.memory_limit)


def restriction_base(url: str, host: str) -> str:
    """Restriction prefix: the host with an ``https://`` default, or the seed URL when no host is set."""
    if not host:
        return url
    if "://" in host:
        return host
    return f"https://{host}"


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> ScannerConfig:
    """
    Read YAML or JSON and return a validated ScannerConfig.
    Without a path, configs/default.yaml is used when present, otherwise defaults.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return ScannerConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    return ScannerConfig(**data)
