"""Collaborator protocols consumed by the application controller."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from scv.models import Classroom, Student, WeekActivity


@runtime_checkable
class ClassStore(Protocol):
    """Persistent storage of classes and their students."""

    async def create_class(self, name: str) -> Classroom:
        """Insert a class; raises ``DuplicateClassError`` if the name exists."""
        ...

    async def list_classes(self) -> list[Classroom]:
        """All classes ordered by name."""
        ...

    async def get_class(self, class_id: int) -> Classroom | None:
        ...

    async def delete_class(self, class_id: int) -> bool:
        ...

    async def list_students(self, class_id: int) -> list[Student]:
        """Students of a class ordered by username."""
        ...

    async def add_student(self, class_id: int, username: str) -> Student:
        ...

    async def delete_student(self, student_id: int) -> bool:
        ...

    async def count_students(self, class_id: int) -> int:
        ...


@runtime_checkable
class ActivitySource(Protocol):
    """Remote commit activity for a student's handle."""

    async def latest_commit_time(self, handle: str) -> datetime | None:
        ...

    async def week_activity(self, handle: str) -> WeekActivity:
        """Never raises; failures are reported in ``WeekActivity.error``."""
        ...


@runtime_checkable
class RepositoryOperations(Protocol):
    """Local working copies of student repositories."""

    async def clone(self, handle: str, class_name: str) -> None:
        ...

    async def pull(self, handle: str, class_name: str) -> None:
        ...

    async def clean(self, handle: str, class_name: str) -> None:
        ...

    async def open_in_terminal(self, handle: str, class_name: str) -> None:
        ...

    async def clone_all(
        self, students: Sequence[Student], class_name: str,
    ) -> list[tuple[str, str | None]]:
        """Clone every student's repository; one ``(handle, error)`` per student."""
        ...

    def repo_exists(self, handle: str, class_name: str) -> bool:
        ...
