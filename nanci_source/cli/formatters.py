"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from nanci_source.exceptions import ResolutionError
from nanci_source.models.config import QUALITY_MAP
from nanci_source.models.manifest import SourceManifest


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "NetworkError": [
            "• Check your internet connection.",
            "• The upstream service may be down. Try again later.",
            "• Use --timeout to allow slower responses.",
        ],
        "UpstreamStatusError": [
            "• The song ID may be unknown to the upstream service.",
            "• Try a different quality with the -q flag.",
            "• Your access key may have been rotated. Run `nanci-source init`.",
        ],
        "ResponseParseError": [
            "• The upstream service returned an unexpected page.",
            "• Verify the base address with `nanci-source --show-config`.",
        ],
        "MissingFieldError": [
            "• No stream is available for this song at the requested quality.",
            "• Try a different quality with the -q flag.",
        ],
        "ConfigurationError": [
            "• Check the values in your configuration file.",
            "• Run `nanci-source init --force` to rewrite it.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(Text("\n".join(suggestions)))

    if isinstance(error, ResolutionError):
        context = {
            "kind": error.kind.value,
            "song_id": error.song_id,
            "quality": error.quality,
            **(context or {}),
        }

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_config(config_path: Path, config_data: dict[str, Any]):
    """Displays the current configuration, hiding the access key."""
    console = Console()
    content = ""
    for key, value in config_data.items():
        if key == "access_key":
            value = "[hidden]"
        elif value is None:
            value = ""
        content += f"{key} = {escape(str(value))}\n"

    console.print(
        Panel(
            content.strip(),
            title=f"Configuration ([dim]{config_path}[/dim])",
            border_style="cyan",
        )
    )


def print_manifest(manifest: SourceManifest):
    """Displays the plugin manifest and the known quality tags."""
    console = Console()
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()

    table.add_row("ID:", manifest.id)
    table.add_row("Name:", manifest.name)
    table.add_row("Author:", manifest.author)
    table.add_row("Version:", manifest.version)
    table.add_row("Update URL:", manifest.src_url or "[dim]none[/dim]")
    table.add_row(
        "Qualities:",
        ", ".join(
            f"[{info['color']}]{tag}[/{info['color']}] ({info['name']})"
            for tag, info in QUALITY_MAP.items()
        ),
    )

    console.print(
        Panel(table, title="[bold green]Music Source[/bold green]", border_style="green")
    )
