"""Class list: pick a class to manage or create a new one."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from scv.core.events import GoBack, NavigateTo, RefreshClasses, SelectClass
from scv.core.navigation import ScreenKind
from scv.screens.base import MenuScreen
from scv.widgets.menu import AnimatedMenu, MenuItem

if TYPE_CHECKING:
    from scv.core.events import AppEvent
    from scv.core.keys import KeyPress
    from scv.core.state import AppState
    from scv.models import Classroom

EMPTY_TITLE = "No classes found"
CREATE_FIRST_TITLE = "Create your first class"


class ClassSelectionScreen(MenuScreen):
    kind = ScreenKind.CLASS_SELECTION
    hint = "Enter open  •  n/c new class  •  r refresh  •  b back"

    def __init__(self, classes: list[Classroom]) -> None:
        super().__init__()
        self.set_classes(classes)

    def set_classes(self, classes: list[Classroom]) -> None:
        self.classes = list(classes)
        self.menu = self._build_menu()
        self.menu.trigger_entrance()

    def _build_menu(self) -> AnimatedMenu:
        if self.classes:
            items = [
                MenuItem(c.name, f"Manage class: {c.name}", "📖")
                for c in self.classes
            ]
        else:
            items = [
                MenuItem(EMPTY_TITLE, enabled=False),
                MenuItem(CREATE_FIRST_TITLE, "Start by creating a new class", "➕"),
            ]
        items += [
            MenuItem.separator(),
            MenuItem("Create New Class", "Add a new class", "➕", "c"),
            MenuItem("Back", "Return to main menu", "↩", "b"),
        ]
        return AnimatedMenu(items, title="📚 Select a Class")

    def receive(self, payload: Any) -> None:
        self.set_classes(payload)

    async def handle_input(self, key: KeyPress, state: AppState) -> AppEvent | None:
        match key.character:
            case "n" | "c":
                return NavigateTo(ScreenKind.CREATE_CLASS)
            case "r":
                return RefreshClasses()
            case "b" | "q":
                return GoBack()
        return await super().handle_input(key, state)

    async def activate(self, index: int, state: AppState) -> AppEvent | None:
        if index < len(self.classes):
            return SelectClass(self.classes[index])
        item = self.menu.items[index]
        if item.title == CREATE_FIRST_TITLE or item.hotkey == "c":
            return NavigateTo(ScreenKind.CREATE_CLASS)
        if item.hotkey == "b":
            return GoBack()
        return None
