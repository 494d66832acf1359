"""Class and student records as stored by the persistent store."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class Classroom(BaseModel):
    """A class taught by the instructor."""

    id: int = 0
    name: str
    created_at: datetime = Field(default_factory=_utcnow)


class Student(BaseModel):
    """A student enrolled in exactly one class."""

    id: int = 0
    class_id: int
    username: str
    github_username: str
    created_at: datetime = Field(default_factory=_utcnow)

    @property
    def handle(self) -> str:
        """Identifier of the student on the code-hosting service."""
        return self.github_username
