"""Builds screens from identities, loading the data they need up front."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from scv.core.navigation import ScreenKind
from scv.screens.add_students import AddStudentsScreen
from scv.screens.class_management import ClassManagementScreen
from scv.screens.class_selection import ClassSelectionScreen
from scv.screens.confirm_delete import ConfirmDeleteClassScreen
from scv.screens.create_class import CreateClassScreen
from scv.screens.delete_student import DeleteStudentScreen
from scv.screens.github_activity import GitHubActivityScreen
from scv.screens.latest_activity import LatestActivityScreen
from scv.screens.main_menu import MainMenuScreen
from scv.screens.repo_management import RepoManagementScreen
from scv.screens.settings import SettingsScreen
from scv.screens.student_management import StudentManagementScreen
from scv.screens.week_view import WeekViewScreen

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping

    from scv.core.navigation import ScreenIdentity
    from scv.core.state import AppState
    from scv.models import Classroom
    from scv.screens.base import Screen

    Builder = Callable[[ScreenIdentity, AppState], Awaitable[Screen]]

logger = logging.getLogger(__name__)


class ScreenConstructionError(RuntimeError):
    """Raised when a screen cannot be built for the given identity."""


class ScreenNotImplementedError(ScreenConstructionError):
    """Raised for an identity that has no builder."""


def _require_class(identity: ScreenIdentity) -> Classroom:
    classroom = identity.classroom
    if classroom is None:
        msg = f"{identity.kind.label} screen requires class context"
        raise ScreenConstructionError(msg)
    return classroom


# ── Builders ─────────────────────────────────────────────────
async def _main_menu(identity: ScreenIdentity, state: AppState) -> Screen:
    return MainMenuScreen()


async def _class_selection(identity: ScreenIdentity, state: AppState) -> Screen:
    return ClassSelectionScreen(await state.store.list_classes())


async def _create_class(identity: ScreenIdentity, state: AppState) -> Screen:
    return CreateClassScreen()


async def _class_management(identity: ScreenIdentity, state: AppState) -> Screen:
    classroom = _require_class(identity)
    return ClassManagementScreen(classroom, await state.store.list_students(classroom.id))


async def _student_management(identity: ScreenIdentity, state: AppState) -> Screen:
    classroom = _require_class(identity)
    return StudentManagementScreen(classroom, await state.store.list_students(classroom.id))


async def _add_students(identity: ScreenIdentity, state: AppState) -> Screen:
    return AddStudentsScreen(_require_class(identity))


async def _delete_student(identity: ScreenIdentity, state: AppState) -> Screen:
    classroom = _require_class(identity)
    return DeleteStudentScreen(classroom, await state.store.list_students(classroom.id))


async def _repository_management(identity: ScreenIdentity, state: AppState) -> Screen:
    classroom = _require_class(identity)
    screen = RepoManagementScreen(classroom, await state.store.list_students(classroom.id))
    screen.refresh_status(state)
    return screen


async def _github_activity(identity: ScreenIdentity, state: AppState) -> Screen:
    return GitHubActivityScreen(_require_class(identity))


async def _week_view(identity: ScreenIdentity, state: AppState) -> Screen:
    classroom = _require_class(identity)
    return WeekViewScreen(classroom, await state.store.list_students(classroom.id))


async def _latest_activity(identity: ScreenIdentity, state: AppState) -> Screen:
    classroom = _require_class(identity)
    return LatestActivityScreen(classroom, await state.store.list_students(classroom.id))


async def _settings(identity: ScreenIdentity, state: AppState) -> Screen:
    return SettingsScreen(state.config)


async def _confirm_delete_class(identity: ScreenIdentity, state: AppState) -> Screen:
    classroom = _require_class(identity)
    return ConfirmDeleteClassScreen(classroom, await state.store.count_students(classroom.id))


SCREEN_BUILDERS: Mapping[ScreenKind, Builder] = {
    ScreenKind.MAIN_MENU: _main_menu,
    ScreenKind.CLASS_SELECTION: _class_selection,
    ScreenKind.CREATE_CLASS: _create_class,
    ScreenKind.CLASS_MANAGEMENT: _class_management,
    ScreenKind.STUDENT_MANAGEMENT: _student_management,
    ScreenKind.ADD_STUDENTS: _add_students,
    ScreenKind.DELETE_STUDENT: _delete_student,
    ScreenKind.REPOSITORY_MANAGEMENT: _repository_management,
    ScreenKind.GITHUB_ACTIVITY: _github_activity,
    ScreenKind.WEEK_VIEW: _week_view,
    ScreenKind.LATEST_ACTIVITY: _latest_activity,
    ScreenKind.SETTINGS: _settings,
    ScreenKind.CONFIRM_DELETE_CLASS: _confirm_delete_class,
}


async def create_screen(
    identity: ScreenIdentity,
    state: AppState,
    *,
    builders: Mapping[ScreenKind, Builder] = SCREEN_BUILDERS,
) -> Screen:
    """Build the screen for *identity*.

    Raises:
        ScreenNotImplementedError: No builder exists for the identity's kind.
        ScreenConstructionError: Required context is missing.
    """
    builder = builders.get(identity.kind)
    if builder is None:
        msg = f"Screen type not implemented: {identity.kind.label}"
        raise ScreenNotImplementedError(msg)
    logger.debug("Building %s screen", identity.kind)
    return await builder(identity, state)
