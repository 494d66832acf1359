"""Local git working copies of student repositories."""

from __future__ import annotations

import asyncio
import logging
import subprocess
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from scv.models import Student

logger = logging.getLogger(__name__)


class GitError(RuntimeError):
    """Raised when a git or terminal command fails."""


def repo_url(handle: str) -> str:
    return f"https://github.com/{handle}/{handle}.github.io.git"


def terminal_command(path: Path, platform: str | None = None) -> list[str]:
    """Command that opens a new terminal window at *path*."""
    platform = platform or sys.platform
    if platform == "darwin":
        return ["open", "-a", "Terminal", str(path)]
    if platform.startswith("win"):
        return ["cmd", "/C", "start", "cmd", "/K", f"cd /d {path}"]
    return ["gnome-terminal", "--working-directory", str(path)]


class GitManager:
    """Clone, update and reset repositories under ``<repos_dir>/<class>/<handle>``."""

    def __init__(self, repos_dir: Path, git: str = "git") -> None:
        self.repos_dir = repos_dir
        self._git = git

    def repo_path(self, handle: str, class_name: str) -> Path:
        return self.repos_dir / class_name / handle

    def repo_exists(self, handle: str, class_name: str) -> bool:
        path = self.repo_path(handle, class_name)
        try:
            return path.exists()
        except OSError as exc:
            logger.warning("Cannot inspect %s: %s", path, exc)
            return False

    @staticmethod
    def _path_exists(path: Path) -> bool:
        try:
            return path.exists()
        except OSError as exc:
            msg = f"Cannot access {path}: {exc}"
            raise GitError(msg) from exc

    def _existing_repo(self, handle: str, class_name: str) -> Path:
        path = self.repo_path(handle, class_name)
        if not self._path_exists(path):
            msg = f"Repository not found at {path}"
            raise GitError(msg)
        return path

    async def _run_git(self, *args: str, cwd: Path | None = None) -> str:
        logger.debug("git %s (cwd=%s)", " ".join(args), cwd)
        try:
            proc = await asyncio.create_subprocess_exec(
                self._git,
                *args,
                cwd=cwd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            msg = f"Failed to execute git {args[0]}: {exc}"
            raise GitError(msg) from exc

        stdout, stderr = await proc.communicate()
        if proc.returncode != 0:
            error = stderr.decode(errors="replace").strip()
            msg = f"Git {args[0]} failed: {error}"
            raise GitError(msg)
        return stdout.decode(errors="replace")

    async def clone(self, handle: str, class_name: str) -> None:
        path = self.repo_path(handle, class_name)
        if self._path_exists(path):
            msg = f"Repository already exists at {path}"
            raise GitError(msg)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            msg = f"Cannot create {path.parent}: {exc}"
            raise GitError(msg) from exc
        await self._run_git("clone", repo_url(handle), str(path))
        logger.info("Cloned %s into %s", handle, path)

    async def pull(self, handle: str, class_name: str) -> None:
        path = self._existing_repo(handle, class_name)
        await self._run_git("pull", "origin", "main", cwd=path)
        logger.info("Pulled %s", path)

    async def clean(self, handle: str, class_name: str) -> None:
        path = self._existing_repo(handle, class_name)
        await self._run_git("reset", "--hard", "HEAD", cwd=path)
        await self._run_git("clean", "-fd", cwd=path)
        logger.info("Cleaned %s", path)

    async def open_in_terminal(self, handle: str, class_name: str) -> None:
        path = self._existing_repo(handle, class_name)
        command = terminal_command(path)
        try:
            subprocess.Popen(  # noqa: S603
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as exc:
            msg = f"Failed to open terminal: {exc}"
            raise GitError(msg) from exc

    async def clone_all(
        self, students: Sequence[Student], class_name: str,
    ) -> list[tuple[str, str | None]]:
        results: list[tuple[str, str | None]] = []
        for student in students:
            try:
                await self.clone(student.github_username, class_name)
            except GitError as exc:
                results.append((student.github_username, str(exc)))
            else:
                results.append((student.github_username, None))
        return results
