"""Textual front end for the palette."""

from .palette_screen import PaletteApp, PaletteView, render_results, render_status

__all__ = ["PaletteApp", "PaletteView", "render_results", "render_status"]
