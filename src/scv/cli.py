"""CLI entry point using Typer."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Annotated, NoReturn

import typer

if TYPE_CHECKING:
    from pathlib import Path

app = typer.Typer(
    name="scv",
    help="Student Code Viewer - animated terminal UI for class repositories.",
    no_args_is_help=False,
    add_completion=False,
)

LOG_FILENAME = "scv.log"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(log_dir: Path, *, debug: bool = False) -> Path:
    """Send log records to a file; the TUI owns the terminal."""
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / LOG_FILENAME
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug else logging.INFO)
    # Request-level chatter from the HTTP stack is only useful when debugging.
    logging.getLogger("httpx").setLevel(logging.DEBUG if debug else logging.WARNING)
    return log_path


def _fail(message: str) -> NoReturn:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1)


@app.callback(invoke_without_command=True)
def main(
    debug: Annotated[
        bool, typer.Option("--debug", "-d", help="Enable debug logging")
    ] = False,
    github_token: Annotated[
        str | None,
        typer.Option(
            "--github-token",
            "-t",
            envvar="GITHUB_TOKEN",
            help="GitHub access token (raises the API rate limit)",
        ),
    ] = None,
    version: Annotated[
        bool, typer.Option("--version", "-v", help="Show version")
    ] = False,
) -> None:
    """SCV - browse students, repositories and GitHub activity per class."""
    if version:
        from scv import __version__

        typer.echo(f"scv {__version__}")
        raise typer.Exit()

    from scv.app import ScvApp
    from scv.config import ConfigLoadError, load_config
    from scv.core.state import AppState
    from scv.services import GitHubClient, GitManager, SqlStore, StoreError

    try:
        config = load_config()
    except (ConfigLoadError, OSError) as exc:
        _fail(f"could not load configuration: {exc}")

    log_path = configure_logging(config.config_dir, debug=debug)
    logger = logging.getLogger(__name__)
    logger.info("Starting scv (debug=%s), logging to %s", debug, log_path)

    store = SqlStore(config.database_path)
    try:
        store.open()
    except StoreError as exc:
        logger.error("Could not open store: %s", exc)
        _fail(str(exc))

    state = AppState(
        config=config,
        store=store,
        activity=GitHubClient(github_token),
        repos=GitManager(config.repos_dir),
    )
    ScvApp(state).run()
    logger.info("Session ended")
