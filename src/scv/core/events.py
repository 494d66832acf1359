"""High-level intents produced by key handling and consumed by the controller."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from scv.core.navigation import ScreenContext, ScreenIdentity, ScreenKind

if TYPE_CHECKING:
    from scv.config import AppConfig
    from scv.models import Classroom, Student


class AppEvent:
    """Base of every event the controller understands."""

    __slots__ = ()


# ── Navigation ───────────────────────────────────────────────
@dataclass(frozen=True)
class NavigateTo(AppEvent):
    kind: ScreenKind
    context: ScreenContext | None = None

    @property
    def identity(self) -> ScreenIdentity:
        return ScreenIdentity(self.kind, self.context)


@dataclass(frozen=True)
class GoBack(AppEvent):
    pass


@dataclass(frozen=True)
class Quit(AppEvent):
    pass


# ── Banners ──────────────────────────────────────────────────
@dataclass(frozen=True)
class ShowLoading(AppEvent):
    message: str


@dataclass(frozen=True)
class HideLoading(AppEvent):
    pass


@dataclass(frozen=True)
class ShowError(AppEvent):
    message: str


@dataclass(frozen=True)
class ShowSuccess(AppEvent):
    message: str


@dataclass(frozen=True)
class ClearBanner(AppEvent):
    pass


# ── Classes and students ─────────────────────────────────────
@dataclass(frozen=True)
class SelectClass(AppEvent):
    classroom: Classroom


@dataclass(frozen=True)
class ClassCreated(AppEvent):
    classroom: Classroom


@dataclass(frozen=True)
class ClassDeleted(AppEvent):
    class_id: int
    name: str = ""


@dataclass(frozen=True)
class StudentsAdded(AppEvent):
    students: tuple[Student, ...] = ()
    failures: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class StudentDeleted(AppEvent):
    student_id: int
    username: str = ""


# ── Repository actions ───────────────────────────────────────
@dataclass(frozen=True)
class CloneRepo(AppEvent):
    handle: str


@dataclass(frozen=True)
class PullRepo(AppEvent):
    handle: str


@dataclass(frozen=True)
class CleanRepo(AppEvent):
    handle: str


@dataclass(frozen=True)
class OpenInTerminal(AppEvent):
    handle: str


@dataclass(frozen=True)
class CloneAllRepos(AppEvent):
    pass


# ── Data loading ─────────────────────────────────────────────
@dataclass(frozen=True)
class RefreshClasses(AppEvent):
    pass


@dataclass(frozen=True)
class FetchWeekActivity(AppEvent):
    students: tuple[Student, ...] = ()


@dataclass(frozen=True)
class FetchLatestActivity(AppEvent):
    students: tuple[Student, ...] = ()


@dataclass(frozen=True)
class DataLoaded(AppEvent):
    """Data for an already-built screen; dropped unless that kind is active."""

    target: ScreenKind
    payload: Any = field(compare=False)


@dataclass(frozen=True)
class SaveSettings(AppEvent):
    config: AppConfig
