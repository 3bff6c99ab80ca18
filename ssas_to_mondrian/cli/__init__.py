"""CLI utilities for ssas-to-mondrian.

Rich-based panels and tables, and a Click command class with wider help output.
"""

from __future__ import annotations

from ssas_to_mondrian.cli.formatting import (
    format_error,
    format_skipped_measures,
    format_statistics,
    format_success,
    format_warning,
)
from ssas_to_mondrian.cli.help_formatter import RichCommand

__all__ = [
    "format_error",
    "format_skipped_measures",
    "format_statistics",
    "format_success",
    "format_warning",
    "RichCommand",
]
