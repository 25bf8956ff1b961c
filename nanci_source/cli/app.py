"""
Defines the command-line interface for the plugin using Typer.
"""

import asyncio
import logging
import os
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from nanci_source import __version__
from nanci_source.core.resolver import StreamUrlResolver
from nanci_source.models.config import QUALITY_MAP
from nanci_source.plugin import MANIFEST
from nanci_source.storage.config_manager import ConfigManager

from .formatters import format_error_with_suggestions, print_config, print_manifest

console = Console()


def build_log_handler(log_console: Console) -> RichHandler:
    """Creates the Rich log handler used by the CLI; messages may carry markup."""
    return RichHandler(
        console=log_console,
        rich_tracebacks=True,
        show_path=False,
        show_level=False,
        markup=True,
    )


logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[build_log_handler(Console(stderr=True))],
)
log = logging.getLogger("nanci_source")

app = typer.Typer(
    name="nanci-source",
    help=(
        "Resolve playable stream URLs from the nanci music source. Use"
        " 'nanci-source <command> --help' for more info."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "nanci-source"


CONFIG_DIR = get_config_dir()
CONFIG_FILE = CONFIG_DIR / "config.ini"


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Display the current configuration."
    ),
):
    """nanci music source CLI"""
    if version:
        console.print(f"[bold]nanci-source[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "INFO"
    if verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("nanci_source").setLevel(log_level)

    if show_config:
        config = ConfigManager(CONFIG_FILE).load_config()
        print_config(CONFIG_FILE, config.model_dump())
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command()
def init(
    base_address: str | None = typer.Option(
        None, "--base-address", help="Upstream service address."
    ),
    account: str | None = typer.Option(
        None, "--account", help="Account name sent as X-Request-User."
    ),
    key: str | None = typer.Option(
        None, "--key", help="Access key sent as X-Request-Key."
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing configuration file."
    ),
):
    """Write a configuration file, using defaults for omitted values."""
    if (
        CONFIG_FILE.exists()
        and not force
        and not typer.confirm("Configuration file already exists. Overwrite it?")
    ):
        raise typer.Abort()

    settings = {
        "base_address": base_address,
        "account_name": account,
        "access_key": key,
    }
    ConfigManager(CONFIG_FILE).save_new_config(settings)
    console.print(f"[bold green]✓ Configuration saved to '{CONFIG_FILE}'[/bold green]")


@app.command()
def info():
    """Show the source manifest and supported qualities."""
    print_manifest(MANIFEST)


@app.command(name="resolve")
def resolve_command(
    song_id: str = typer.Argument(..., help="QQ Music songmid of the track."),
    quality: str = typer.Option(
        "320k",
        "-q",
        "--quality",
        help="Quality tag: 128k, 320k or flac. Other values are sent as-is.",
    ),
    song_name: str = typer.Option("", "--name", help="Song name (informational)."),
    artist: str = typer.Option("", "--artist", help="Artist name (informational)."),
    base_address: str | None = typer.Option(
        None, "--base-address", help="Override the upstream service address."
    ),
    timeout: float | None = typer.Option(
        None, "--timeout", help="Request timeout in seconds."
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Explain why resolution failed instead of exiting quietly."
    ),
):
    """Resolve and print the stream URL for a song."""
    config = ConfigManager(CONFIG_FILE).load_config(
        {"base_address": base_address, "timeout": timeout}
    )

    if quality not in QUALITY_MAP:
        log.warning(
            f"[yellow]Unknown quality '{escape(quality)}', "
            "forwarding it unchanged.[/yellow]"
        )

    resolver = StreamUrlResolver(config)

    if strict:
        result = asyncio.run(resolver.resolve(song_name, artist, song_id, quality))
        if not result.ok:
            console.print(format_error_with_suggestions(result.error))
            raise typer.Exit(code=1)
        url = result.url
    else:
        url = asyncio.run(resolver.get_music_url(song_name, artist, song_id, quality))
        if url is None:
            raise typer.Exit(code=1)

    typer.echo(url)
