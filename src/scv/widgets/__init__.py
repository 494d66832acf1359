"""Reusable drawing components for screens and overlays."""

from scv.widgets.banner import draw_overlays
from scv.widgets.menu import AnimatedMenu, MenuItem
from scv.widgets.particles import draw_celebration, draw_starfield
from scv.widgets.text_input import TextInput

__all__ = [
    "AnimatedMenu",
    "MenuItem",
    "TextInput",
    "draw_celebration",
    "draw_overlays",
    "draw_starfield",
]
