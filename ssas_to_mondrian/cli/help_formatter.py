"""Click command class for ssas2mondrian help output."""

from __future__ import annotations

import click

HELP_WIDTH = 88


class RichCommand(click.Command):
    """Click command whose help keeps the option table and examples on one page.

    Help text is plain Click output so it can be printed after a rich error
    panel without markup interpretation.
    """

    def get_help(self, ctx: click.Context) -> str:
        formatter = click.HelpFormatter(width=HELP_WIDTH, max_width=HELP_WIDTH)
        self.format_help(ctx, formatter)
        return formatter.getvalue()
