"""SCV data models - pure Pydantic, no I/O."""

from scv.models.activity import (
    BatchCloneReport,
    BatchStatus,
    CloneOutcome,
    LatestCommit,
    WeekActivity,
    Weekday,
)
from scv.models.records import Classroom, Student

__all__ = [
    "BatchCloneReport",
    "BatchStatus",
    "Classroom",
    "CloneOutcome",
    "LatestCommit",
    "Student",
    "WeekActivity",
    "Weekday",
]
