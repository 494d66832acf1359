"""Screen identities and the back-navigation stack."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from scv.models import Classroom, Student


class ScreenKind(StrEnum):
    MAIN_MENU = "main_menu"
    CLASS_SELECTION = "class_selection"
    CREATE_CLASS = "create_class"
    CLASS_MANAGEMENT = "class_management"
    STUDENT_MANAGEMENT = "student_management"
    ADD_STUDENTS = "add_students"
    DELETE_STUDENT = "delete_student"
    REPOSITORY_MANAGEMENT = "repository_management"
    GITHUB_ACTIVITY = "github_activity"
    WEEK_VIEW = "week_view"
    LATEST_ACTIVITY = "latest_activity"
    SETTINGS = "settings"
    CONFIRM_DELETE_CLASS = "confirm_delete_class"

    @property
    def label(self) -> str:
        return {
            ScreenKind.GITHUB_ACTIVITY: "GitHub Activity",
        }.get(self, self.value.replace("_", " ").title())

    @property
    def needs_class(self) -> bool:
        """Whether a screen of this kind is scoped to one class."""
        return self in _CLASS_SCOPED


_CLASS_SCOPED = frozenset({
    ScreenKind.CLASS_MANAGEMENT,
    ScreenKind.STUDENT_MANAGEMENT,
    ScreenKind.ADD_STUDENTS,
    ScreenKind.DELETE_STUDENT,
    ScreenKind.REPOSITORY_MANAGEMENT,
    ScreenKind.GITHUB_ACTIVITY,
    ScreenKind.WEEK_VIEW,
    ScreenKind.LATEST_ACTIVITY,
    ScreenKind.CONFIRM_DELETE_CLASS,
})


@dataclass(frozen=True)
class ScreenContext:
    """Data a screen needs from its caller."""

    classroom: Classroom | None = None
    student: Student | None = None


@dataclass(frozen=True, eq=False)
class ScreenIdentity:
    """Names a screen; equality compares the kind only, never the context."""

    kind: ScreenKind
    context: ScreenContext | None = None

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ScreenIdentity):
            return self.kind is other.kind
        if isinstance(other, ScreenKind):
            return self.kind is other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.kind)

    @property
    def classroom(self) -> Classroom | None:
        return self.context.classroom if self.context else None

    def with_context(self, context: ScreenContext) -> ScreenIdentity:
        return ScreenIdentity(self.kind, context)


class NavigationStack:
    """Identities of screens that were left by forward navigation, LIFO."""

    def __init__(self) -> None:
        self._items: list[ScreenIdentity] = []

    def __len__(self) -> int:
        return len(self._items)

    def push(self, identity: ScreenIdentity) -> None:
        self._items.append(identity)

    def pop(self) -> ScreenIdentity | None:
        return self._items.pop() if self._items else None

    def peek(self) -> ScreenIdentity | None:
        return self._items[-1] if self._items else None

    @property
    def can_go_back(self) -> bool:
        return bool(self._items)

    def clear(self) -> None:
        self._items.clear()

    def unwind_to(self, kind: ScreenKind) -> ScreenIdentity | None:
        """Pop through the most recent entry of *kind* and return it.

        The stack is left untouched if no entry has that kind.
        """
        for index in range(len(self._items) - 1, -1, -1):
            if self._items[index].kind is kind:
                found = self._items[index]
                del self._items[index:]
                return found
        return None
