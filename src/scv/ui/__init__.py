"""Presentation primitives: animation engine, themes and the paint surface."""

from scv.ui.animations import AnimatedValue, AnimationClock, CelebrationAnimation, Easing, Spinner
from scv.ui.frame import Frame, center_box
from scv.ui.themes import ActivityLevel, Theme, get_theme, theme_names

__all__ = [
    "ActivityLevel",
    "AnimatedValue",
    "AnimationClock",
    "CelebrationAnimation",
    "Easing",
    "Frame",
    "Spinner",
    "Theme",
    "center_box",
    "get_theme",
    "theme_names",
]
