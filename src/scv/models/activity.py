"""Remote activity and repository batch results."""

from __future__ import annotations

from datetime import datetime
from enum import IntEnum, StrEnum

from pydantic import BaseModel, Field


class Weekday(IntEnum):
    """Weekday numbering matching :meth:`datetime.weekday`."""

    MON = 0
    TUE = 1
    WED = 2
    THU = 3
    FRI = 4
    SAT = 5
    SUN = 6

    @property
    def label(self) -> str:
        return self.name.title()

    @property
    def is_weekend(self) -> bool:
        return self >= Weekday.SAT


class WeekActivity(BaseModel):
    """Per-weekday commit flags for one student over the trailing weekdays."""

    handle: str
    days: dict[Weekday, bool] = Field(default_factory=dict)
    total_commits: int = 0
    latest_commit: datetime | None = None
    error: str | None = None

    def committed_on(self, day: Weekday) -> bool:
        return self.days.get(day, False)


class BatchStatus(StrEnum):
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILURE = "failure"
    EMPTY = "empty"


class CloneOutcome(BaseModel):
    """Result of cloning one student's repository."""

    handle: str
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class BatchCloneReport(BaseModel):
    """Aggregate of a clone-all run, one outcome per student."""

    outcomes: list[CloneOutcome] = Field(default_factory=list)

    @property
    def succeeded(self) -> list[str]:
        return [o.handle for o in self.outcomes if o.ok]

    @property
    def failed(self) -> list[CloneOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def status(self) -> BatchStatus:
        if not self.outcomes:
            return BatchStatus.EMPTY
        if not self.failed:
            return BatchStatus.SUCCESS
        if not self.succeeded:
            return BatchStatus.FAILURE
        return BatchStatus.PARTIAL

    def summary(self) -> str:
        """Human-readable line for the result banner."""
        total = len(self.outcomes)
        match self.status:
            case BatchStatus.EMPTY:
                return "No students in this class to clone."
            case BatchStatus.SUCCESS:
                return f"Cloned all {total} repositories."
        failures = ", ".join(f"{o.handle} ({o.error})" for o in self.failed)
        if self.status is BatchStatus.FAILURE:
            return f"Failed to clone all {total} repositories: {failures}"
        return f"Cloned {len(self.succeeded)} of {total} repositories. Failed: {failures}"


class LatestCommit(BaseModel):
    """Newest commit time for one student, as shown by the latest-activity view."""

    username: str
    handle: str
    latest_commit: datetime | None = None
    error: str | None = None
