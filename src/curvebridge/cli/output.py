"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from curvebridge.core import CombinedShape
from curvebridge.utils import OperationStats

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Curvebridge[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_scene_info(scene_path: str, object_count: int, selected: list[str]) -> None:
    """Print scene information.

    Args:
        scene_path: Path to the scene file
        object_count: Total number of objects in the scene
        selected: Ids of the selected objects
    """
    line = Text("  ")
    line.append(scene_path)
    console.print(line)
    console.print(f"  {object_count} objects {SYM_DOT} {len(selected)} selected")


def print_selection(selected: list[str], verbose: bool) -> None:
    """Print the fold order of the selection."""
    if verbose and selected:
        names_str = ", ".join(selected[:20])
        if len(selected) > 20:
            names_str += f" {SYM_DOT}{SYM_DOT}{SYM_DOT} (+{len(selected) - 20} more)"
        console.print(f"  {names_str}")


def print_result(result: CombinedShape, stats: OperationStats, path_data: str | None = None) -> None:
    """Print a summary of a boolean result.

    Args:
        result: Combined shape
        stats: Statistics of the combine
        path_data: SVG path data of the result, printed when given
    """
    subpaths = sum(1 for c in result.commands if c.letter == "M")
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_row("Shapes", f"{stats.shapes_imported} combined {SYM_DOT} {stats.shapes_skipped} skipped")
    table.add_row("Subpaths", str(subpaths))
    table.add_row("Commands", str(len(result.commands)))
    table.add_row("Offset", f"({result.offset_x:.4g}, {result.offset_y:.4g})")
    b = result.bounds
    table.add_row("Bounds", f"({b.min_x:.4g}, {b.min_y:.4g}) – ({b.max_x:.4g}, {b.max_y:.4g})")
    if stats.malformed_commands:
        table.add_row("Repaired", f"[yellow]{stats.malformed_commands} malformed commands[/yellow]")
    console.print(table)

    if path_data is not None:
        console.print("\n[bold]Path[/bold]")
        console.print(Text(path_data), soft_wrap=True)


def print_success(output_path: str, duration_ms: float, extra: str | None = None) -> None:
    """Print success message.

    Args:
        output_path: Path to the written scene
        duration_ms: Combine duration in milliseconds
        extra: Secondary output written, if any
    """
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {duration_ms:.0f}ms")
    line = Text("  ")
    line.append(output_path, style="bold")
    console.print(line)
    if extra:
        line = Text("  ")
        line.append(extra)
        console.print(line)


def print_nothing_to_do(reason: str) -> None:
    """Print a no-op notice."""
    console.print(f"\n{SYM_DOT} {reason}. Nothing to do.")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
