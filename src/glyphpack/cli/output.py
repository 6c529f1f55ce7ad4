"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages. Everything goes to
stderr; stdout is reserved for generated source.
"""

from collections.abc import Mapping

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from glyphpack.domain import FontRequest, NamedSet, PackedFontArtifact

console = Console(stderr=True)

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for batch compiles.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]glyphpack[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_request_info(request: FontRequest) -> None:
    """Print what a request asks for.

    Args:
        request: The compile request
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(request.source_path)
    line.append(f" ({request.pixel_size}px)")
    console.print(line)

    if request.selection is None:
        selection = "default ranges"
    else:
        parts = [
            entry.value if isinstance(entry, NamedSet) else repr(entry)
            for entry in request.selection.entries
        ]
        selection = ", ".join(parts) or "nothing"
    console.print(f"  {request.artifact_name} {SYM_DOT} {escape(selection)}")


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def format_size(size_bytes: int) -> str:
    """Format a byte count in human-readable form (e.g., "4 KB")."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def print_artifact(artifact: PackedFontArtifact) -> None:
    """Print one packed artifact."""
    console.print(f"  [green]{SYM_OK}[/green] {artifact.name} {SYM_DOT} {format_size(artifact.size)}")


def print_success(
    output_path: str | None,
    total_time_s: float,
    compiled: int,
    total_bytes: int,
    errors: int = 0,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Where the generated source went (None for stdout)
        total_time_s: Total compile time in seconds
        compiled: Number of fonts compiled
        total_bytes: Sum of packed sizes
        errors: Number of failed fonts
    """
    time_str = _format_time(total_time_s)
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    line = Text("  ")
    line.append(output_path or "<stdout>", style="bold")
    console.print(line)

    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {compiled} fonts {SYM_DOT} {format_size(total_bytes)} {SYM_DOT} "
        f"[{error_style}]{errors} errors[/{error_style}]"
    )


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {escape(message)}")
    if details:
        console.print(f"  {escape(details)}")


def print_batch_errors(errors: Mapping[str, Exception]) -> None:
    """Print every failed artifact of a batch."""
    for name, error in errors.items():
        console.print(f"  [red]{SYM_ERR}[/red] {name}: {escape(str(error))}")


def print_named_sets() -> None:
    """Print the predefined character sets."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Set")
    table.add_column("Characters")
    for named_set in NamedSet:
        table.add_row(named_set.value, named_set.characters)
    console.print(table)
