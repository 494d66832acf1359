"""SCV screens, one per view of the application."""

from scv.screens.base import MenuScreen, Screen
from scv.screens.factory import (
    SCREEN_BUILDERS,
    ScreenConstructionError,
    ScreenNotImplementedError,
    create_screen,
)

__all__ = [
    "SCREEN_BUILDERS",
    "MenuScreen",
    "Screen",
    "ScreenConstructionError",
    "ScreenNotImplementedError",
    "create_screen",
]
