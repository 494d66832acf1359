"""Application core: navigation, events, state and the controller loop."""

from scv.core.keys import KeyPress
from scv.core.navigation import NavigationStack, ScreenContext, ScreenIdentity, ScreenKind
from scv.core.state import AppState, Banner, BannerKind

__all__ = [
    "AppState",
    "Banner",
    "BannerKind",
    "KeyPress",
    "NavigationStack",
    "ScreenContext",
    "ScreenIdentity",
    "ScreenKind",
]
