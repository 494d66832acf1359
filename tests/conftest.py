"""Shared fixtures for SCV tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from scv.config import AppConfig
from scv.core.controller import AppController
from scv.core.state import AppState
from scv.services import SqlStore
from tests.fixtures.fakes import FakeActivity, FakeRepos


@pytest.fixture(autouse=True)
def scv_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "scv-home"
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("SCV_HOME", str(home))
    return home


@pytest.fixture
def config(tmp_path: Path) -> AppConfig:
    return AppConfig(repos_dir=tmp_path / "repos")


@pytest.fixture
def store(tmp_path: Path):
    sql_store = SqlStore(tmp_path / "scv-test.db")
    sql_store.open()
    yield sql_store
    sql_store.close()


@pytest.fixture
def activity() -> FakeActivity:
    return FakeActivity()


@pytest.fixture
def repos() -> FakeRepos:
    return FakeRepos()


@pytest.fixture
def state(config: AppConfig, store: SqlStore, activity: FakeActivity, repos: FakeRepos) -> AppState:
    return AppState(config=config, store=store, activity=activity, repos=repos)


@pytest.fixture
def controller(state: AppState) -> AppController:
    return AppController(state, size=lambda: (100, 30))
