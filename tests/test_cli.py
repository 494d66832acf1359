"""Tests for the CLI entry point."""

import logging
from unittest.mock import patch

from typer.testing import CliRunner

from scv import __version__
from scv.cli import LOG_FILENAME, app, configure_logging

runner = CliRunner()


def test_version_flag():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.output.strip() == f"scv {__version__}"


def test_launch_builds_state_and_runs_app(scv_home):
    with patch("scv.app.ScvApp") as host:
        result = runner.invoke(app, ["--github-token", "abc"])
    assert result.exit_code == 0, result.output
    state = host.call_args.args[0]
    assert state.config.config_dir == scv_home
    assert (scv_home / "scv.db").exists()
    host.return_value.run.assert_called_once()
    state.store.close()


def test_token_read_from_environment(scv_home):
    with patch("scv.app.ScvApp"), patch("scv.services.GitHubClient") as client:
        result = runner.invoke(app, [], env={"GITHUB_TOKEN": "from-env"})
    assert result.exit_code == 0, result.output
    client.assert_called_once_with("from-env")


def test_invalid_config_exits_with_error(scv_home):
    scv_home.mkdir(parents=True)
    (scv_home / "config.json").write_text("{broken")
    result = runner.invoke(app, [])
    assert result.exit_code == 1
    assert "could not load configuration" in result.output


def test_configure_logging_writes_to_file(tmp_path):
    root = logging.getLogger()
    previous = (list(root.handlers), root.level)
    try:
        path = configure_logging(tmp_path, debug=True)
        assert path == tmp_path / LOG_FILENAME
        assert root.level == logging.DEBUG
        logging.getLogger("scv.test").debug("hello log")
        for handler in root.handlers:
            handler.flush()
        assert "hello log" in path.read_text()
    finally:
        for handler in root.handlers[:]:
            if handler not in previous[0]:
                handler.close()
                root.removeHandler(handler)
        root.setLevel(previous[1])
