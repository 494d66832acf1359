"""GitHub activity menu for a class."""

from __future__ import annotations

from typing import TYPE_CHECKING

from scv.core.events import GoBack, NavigateTo
from scv.core.navigation import ScreenContext, ScreenKind
from scv.screens.base import MenuScreen
from scv.widgets.menu import github_activity_menu

if TYPE_CHECKING:
    from scv.core.events import AppEvent
    from scv.core.state import AppState
    from scv.models import Classroom


class GitHubActivityScreen(MenuScreen):
    kind = ScreenKind.GITHUB_ACTIVITY

    def __init__(self, classroom: Classroom) -> None:
        super().__init__(ScreenContext(classroom=classroom))
        self.menu = github_activity_menu(classroom.name)

    async def activate(self, index: int, state: AppState) -> AppEvent | None:
        match self.menu.items[index].hotkey:
            case "w":
                return NavigateTo(ScreenKind.WEEK_VIEW, self.context)
            case "l":
                return NavigateTo(ScreenKind.LATEST_ACTIVITY, self.context)
            case "b":
                return GoBack()
        return None
