"""Mondrian Adapter: Render TargetSchema trees to Mondrian schema XML."""

from ssas_to_mondrian.adapters.mondrian.renderer import MondrianRenderer, render_schema

__all__ = ["MondrianRenderer", "render_schema"]
