"""Adapters: Render the schema tree to destination formats (Mondrian XML)."""

from ssas_to_mondrian.adapters.mondrian import MondrianRenderer, render_schema

__all__ = ["MondrianRenderer", "render_schema"]
