"""Rich formatting utilities for CLI output.

Everything here renders to stderr; stdout carries only the schema document.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

if TYPE_CHECKING:
    from ssas_to_mondrian.core.builder import BuildStatistics

PANEL_WIDTH = 78


def _panel(title: str, color: str, message: str, context: str | None) -> Panel:
    content = f"[bold {color}]{escape(message)}[/bold {color}]"
    if context:
        content += f"\n\n[dim]{escape(context)}[/dim]"
    return Panel(
        content,
        title=f"[bold {color}]{title}[/bold {color}]",
        border_style=color,
        width=PANEL_WIDTH,
        expand=False,
    )


def format_error(message: str, context: str | None = None) -> Panel:
    """Create formatted error panel.

    Args:
        message: Error message
        context: Optional context hint for resolution

    Returns:
        Panel with error formatting
    """
    return _panel("Error", "red", message, context)


def format_warning(message: str, context: str | None = None) -> Panel:
    return _panel("Warning", "yellow", message, context)


def format_success(message: str, details: str | None = None) -> Panel:
    return _panel("Success", "green", message, details)


def format_statistics(stats: BuildStatistics) -> Table:
    """Summarize a build as a two-column table."""
    table = Table(title="Conversion", show_header=False, box=None, padding=(0, 2))
    table.add_column("Item", style="dim")
    table.add_column("Count", justify="right")

    table.add_row("Databases", str(stats.databases))
    table.add_row("Source cubes", str(stats.source_cubes))
    table.add_row("Shared dimensions", str(stats.dimensions))
    table.add_row("Excluded dimensions", str(stats.excluded_dimensions))
    table.add_row("Cubes", str(stats.cubes))
    table.add_row("Measures", str(stats.measures))
    table.add_row("Calculated members", str(stats.calculated_members))
    return table


def format_skipped_measures(skipped: list[str]) -> Panel:
    """Warn about stored measures dropped for lack of a column binding."""
    return format_warning(
        f"Skipped {len(skipped)} measures without a column binding",
        ", ".join(skipped),
    )
