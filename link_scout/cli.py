# === FILE: link_scout/cli.py ===
#!/usr/bin/env python3
"""
Command-line entry point for the LinkScout broken-link scanner.

Commands:
  scan      Crawl a site and print/save the results
  config    Show the effective configuration

Global options:
  --config PATH       YAML/JSON config (default: configs/default.yaml if present)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stdout only when omitted)
  --log-format FORMAT Logging format string

scan options:
  URL                 Seed URL (overrides `url` from the config)
  --host HOST         Restriction host (default: the seed URL)
  --max-scan N        Maximum number of links to accept, 0 = unlimited
  --memory-limit SIZE Memory budget, e.g. 256M
  --timeout SEC       Per-request timeout
  --order dfs|bfs     Traversal order
  --insecure          Do not validate TLS certificates
  --output DIR        Save broken/scanned/visited link lists and errors
  --json PATH         Save the JSON summary to a file
  --pretty            Indent JSON output
  --scan-timeout SEC  Timeout for the whole scan

Example:
  link-scout scan https://example.com --max-scan 200 --output results --pretty
"""
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from link_scout import __version__
from link_scout.aggregator import aggregate_results
from link_scout.config import ScannerConfig, load_config
from link_scout.engine import Engine, ScannerError
from link_scout.logger import DEFAULT_FORMAT, configure
from link_scout.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='LinkScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON configuration file.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file (stdout when omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Format string for log records'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """LinkScout command group."""
    configure(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Failed to load configuration: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('scan', context_settings=CONTEXT_SETTINGS)
@click.argument('url', required=False)
@click.option('--host', default=None, help='Restriction host (default: the seed URL)')
@click.option('--max-scan', 'max_scan', type=click.IntRange(min=0), default=None,
              help='Maximum number of links to accept, 0 = unlimited')
@click.option('--memory-limit', 'memory_limit', default=None, help='Memory budget, e.g. 256M')
@click.option('--timeout', type=float, default=None, help='Per-request timeout (seconds)')
@click.option('--order', type=click.Choice(['dfs', 'bfs']), default=None, help='Traversal order')
@click.option('--insecure', is_flag=True, help='Do not validate TLS certificates')
@click.option(
    '--output', '-o', 'output_dir',
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help='Directory for broken/scanned/visited link lists and errors'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the JSON summary to a file'
)
@click.option('--pretty', is_flag=True, help='Indent JSON output (2 spaces)')
@click.option(
    '--scan-timeout', 'scan_timeout',
    type=float,
    default=0,
    help='Timeout for the whole scan (seconds, 0 = none)'
)
@click.pass_context
def scan(ctx, url, host, max_scan, memory_limit, timeout, order, insecure,
         output_dir, json_output, pretty, scan_timeout):
    """Crawl a site and report broken links."""
    cfg = ctx.obj['config']
    overrides = {
        'url': url, 'host': host, 'max_scan': max_scan, 'memory_limit': memory_limit,
        'timeout': timeout, 'order': order, 'output_dir': output_dir,
    }
    update = {k: v for k, v in overrides.items() if v is not None}
    if insecure:
        update['verify_ssl'] = False
    try:
        cfg = ScannerConfig(**{**cfg.model_dump(), **update})
    except ValidationError as e:
        print_error(f'Invalid options: {e}')

    click.echo(f'Starting scan: {cfg.url}', err=True)
    engine = Engine.from_config(cfg)
    try:
        engine.wait(scan_timeout)
    except ScannerError as e:
        print_error(f'Scan failed: {e}')

    report = aggregate_results(engine.state, seed=cfg.url)

    if json_output:
        saved = render_json(report, json_output, pretty=pretty)
        click.echo(f'JSON report: {saved}', err=True)
    else:
        click.echo(report.json(pretty=pretty))

    if not engine.count:
        sys.exit(1)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the effective configuration as JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
