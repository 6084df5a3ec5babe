#!/usr/bin/env python3
"""
Command-line entry point for SitemapService.

Commands:
  crawl URL   Crawl a site once and print/save its sitemap
  serve       Run the job-control HTTP API
  config      Show the effective configuration

Common options:
  --config PATH       Path to a YAML/JSON config (default: configs/default.yaml)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (console only when omitted)
  --log-format FORMAT Logging format string

crawl options:
  --json PATH         Save the sitemap as JSON
  --pretty            Indent JSON output by 2 spaces
  --max-links N       Override max_links
  --max-depth N       Override max_depth

Example:
  sitemap-service crawl example.com --pretty --max-links 20
"""
import asyncio
import json
import sys
from pathlib import Path

import click

from sitemap_service import __version__
from sitemap_service.config import load_config
from sitemap_service.engine import Engine, start_crawl
from sitemap_service.logger import configure as configure_logging
from sitemap_service.registry import OperationRegistry
from sitemap_service.report.json_report import render_json
from sitemap_service.web import run_server

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SitemapService, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to the configuration file (configs/default.yaml if present).'
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
    help='Log file (console only when omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """SitemapService command group."""
    configure_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Failed to load configuration: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the sitemap to a JSON file'
)
@click.option('--pretty', is_flag=True, help='Indent JSON output (2 spaces)')
@click.option('--max-links', 'max_links', type=click.IntRange(min=1), default=None,
              help='Override max_links')
@click.option('--max-depth', 'max_depth', type=click.IntRange(min=1), default=None,
              help='Override max_depth')
@click.pass_context
def crawl(ctx, url, json_output, pretty, max_links, max_depth):
    """Crawl URL and output its sitemap."""
    cfg = ctx.obj['config']
    overrides = {k: v for k, v in (('max_links', max_links), ('max_depth', max_depth)) if v is not None}
    if overrides:
        cfg = cfg.model_copy(update=overrides)

    try:
        root = asyncio.run(start_crawl(cfg, url))
    except Exception as e:
        print_error(f'Crawl failed: {e}')

    if json_output:
        try:
            saved = render_json(root, json_output, pretty=pretty)
            click.echo(f'JSON sitemap: {saved}')
        except OSError as e:
            print_error(f'Failed to save JSON: {e}')
        return

    click.echo(json.dumps(root.to_dict(), ensure_ascii=False, indent=2 if pretty else None))


@cli.command('serve', context_settings=CONTEXT_SETTINGS)
@click.option('--host', default=None, help='Bind address (overrides config)')
@click.option('--port', default=None, type=click.IntRange(1, 65535), help='Port (overrides config)')
@click.pass_context
def serve(ctx, host, port):
    """Run the job-control HTTP API."""
    cfg = ctx.obj['config']
    engine = Engine(cfg, OperationRegistry())
    run_server(engine, host or cfg.host, port or cfg.port)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Print the effective configuration as JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
