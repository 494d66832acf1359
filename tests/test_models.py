"""Tests for data models."""

from scv.core.state import AppState, Banner, BannerKind
from scv.models import BatchCloneReport, BatchStatus, CloneOutcome, Student, WeekActivity, Weekday


def _report(*outcomes: tuple[str, str | None]) -> BatchCloneReport:
    return BatchCloneReport(outcomes=[CloneOutcome(handle=h, error=e) for h, e in outcomes])


def test_batch_report_status() -> None:
    assert _report().status is BatchStatus.EMPTY
    assert _report(("alice", None)).status is BatchStatus.SUCCESS
    assert _report(("alice", "boom")).status is BatchStatus.FAILURE
    assert _report(("alice", None), ("bob", "boom")).status is BatchStatus.PARTIAL


def test_batch_report_summary_names_failures() -> None:
    report = _report(("alice", None), ("bob", "Repository already exists"))
    assert report.succeeded == ["alice"]
    assert report.summary() == "Cloned 1 of 2 repositories. Failed: bob (Repository already exists)"
    assert _report(("alice", None)).summary() == "Cloned all 1 repositories."
    assert _report().summary() == "No students in this class to clone."


def test_student_handle() -> None:
    student = Student(class_id=1, username="Alice", github_username="alice-gh")
    assert student.handle == "alice-gh"


def test_week_activity_defaults() -> None:
    activity = WeekActivity(handle="alice")
    assert not activity.committed_on(Weekday.MON)
    assert activity.error is None
    assert Weekday.SAT.is_weekend
    assert Weekday.FRI.label == "Fri"


def test_banner_messages_clear_loading(config) -> None:
    state = AppState(config=config, store=None, activity=None, repos=None)
    state.loading = "Working..."
    state.show_success("done")
    assert state.loading is None
    assert state.banner == Banner(BannerKind.SUCCESS, "done")
    assert state.theme.name == "Neon Night"
