"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from particlegen.core.numeric import to_minimal_decimal_string
from particlegen.core.shapes import ShapeRegistry
from particlegen.domain import Composition

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_WARN = "!"  # Warning
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]ParticleGen[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def _format_value(value: float | int | str) -> str:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return str(value)
    return to_minimal_decimal_string(value)


def print_composition(composition: Composition) -> None:
    """Print the shapes of a composition with their parameters.

    Args:
        composition: Composition to describe
    """
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("#", justify="right")
    table.add_column("Shape")
    table.add_column("Type")
    table.add_column("Points", justify="right")
    table.add_column("Parameters")

    for idx, shape in enumerate(composition, start=1):
        params = ", ".join(f"{k}={_format_value(v)}" for k, v in shape.parameters.items())
        table.add_row(str(idx), shape.name, shape.shape_type, str(len(shape.point_set)), params)

    console.print(table)
    console.print(f"  {len(composition)} shapes {SYM_DOT} {composition.point_count} points")


def print_variants(registry: ShapeRegistry) -> None:
    """Print every registered shape type with its parameters.

    Args:
        registry: Registry to describe
    """
    for tag in registry.tags:
        variant = registry.get(tag)
        console.print(f"\n[bold]{tag}[/bold] {SYM_DOT} {variant.label}")
        defaults = variant.defaults()
        for name, meta in variant.metadata().items():
            line = Text(f"  {name}")
            line.append(f" = {_format_value(defaults[name])}", style="cyan")
            line.append(f"  {meta.label}: {meta.description}", style="dim")
            console.print(line)


def print_success(
    output_path: str,
    shapes: int,
    exported: int,
    merged: int,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to the written file
        shapes: Number of shapes in the composition
        exported: Number of exported particle commands
        merged: Number of points merged away as duplicates
    """
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green]")

    line = Text("  ")
    line.append(output_path, style="bold")
    console.print(line)

    console.print(
        f"  {shapes} shapes {SYM_DOT} {exported} particles {SYM_DOT} {merged} duplicates removed"
    )


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]{SYM_WARN} Warning:[/yellow] {escape(message)}")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {escape(message)}")
    if details:
        console.print(f"  {escape(details)}")
