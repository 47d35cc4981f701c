"""wisp CLI - resolve and load JSON documents from the shell.

Relative references resolve against the current working directory.
"""

import asyncio
import logging
import sys
from pathlib import Path

import click

from . import __version__
from .console import console
from .console import error_console
from .errors import WispError
from .loading import DEFAULT_TYPE
from .loading import load
from .loading import load_sync
from .logging_setup import init_json_logging
from .resolution import CallerResolver
from .utils.error_format import escape_markup
from .utils.error_format import format_error_message

logger = logging.getLogger(__name__)


def _cwd_base() -> str:
    return Path.cwd().as_uri() + "/"


def _fail(error: Exception) -> None:
    error_console.print(f"[red]Error:[/red] {escape_markup(format_error_message(error))}", soft_wrap=True)
    sys.exit(1)


@click.group(invoke_without_command=True)
@click.version_option(__version__, prog_name="wisp")
@click.option("--log-file", type=click.Path(dir_okay=False), help="Write JSONL logs to this file")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Log level for --log-file (default: WISP_LOG_LEVEL or INFO)",
)
@click.pass_context
def cli(ctx: click.Context, log_file: str | None, log_level: str | None):
    """Load JSON documents relative to a location."""
    init_json_logging(log_file, log_level)
    if ctx.invoked_subcommand is None:
        click.echo("\n" + ctx.get_help())
        ctx.exit()


@cli.command(name="resolve")
@click.argument("reference")
@click.option("--url", "as_url", is_flag=True, help="Print a file:// URL instead of a path")
def resolve_cmd(reference: str, as_url: bool):
    """Show where REFERENCE resolves to."""
    resolver = CallerResolver(Path.cwd())
    try:
        resolved = resolver.resolve_url(reference) if as_url else resolver.resolve_path(reference)
    except WispError as e:
        _fail(e)
        return

    console.print(f"[cyan]{escape_markup(resolved)}[/cyan]", soft_wrap=True)
    if not as_url and not Path(resolved).exists():
        console.print("[dim]Status: does not exist[/dim]")


@cli.command(name="load")
@click.argument("reference")
@click.option("--fallback", help="Reference to load if REFERENCE cannot be loaded")
@click.option("--type", "declared_type", default=DEFAULT_TYPE, show_default=True, help="Declared document type")
@click.option("--sync", "use_sync", is_flag=True, help="Use the blocking loader (direct file read only)")
def load_cmd(reference: str, fallback: str | None, declared_type: str, use_sync: bool):
    """Load REFERENCE and pretty-print it as JSON."""
    options = {"base": _cwd_base(), "fallback": fallback, "type": declared_type}
    try:
        if use_sync:
            value = load_sync(reference, **options)
        else:
            value = asyncio.run(load(reference, **options))
    except WispError as e:
        logger.debug(f"load {reference!r} failed: {e}")
        _fail(e)
        return

    console.print_json(data=value)


def main():
    cli()


if __name__ == "__main__":
    main()
