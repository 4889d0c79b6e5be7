"""Async wrapper around the ``git`` executable."""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path


logger = logging.getLogger(__name__)


class GitCommandError(Exception):
    """Exception raised when a git command fails."""

    def __init__(self, args: list[str], returncode: int | None, stderr: str):
        self.git_args = args
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip() or f"exit code {returncode}"
        super().__init__(f"git {' '.join(args)} failed: {detail}")


@dataclass
class GitStatus:
    """Paths reported by ``git status --porcelain``."""

    index_changes: list[str] = field(default_factory=list)
    working_tree_changes: list[str] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not self.index_changes and not self.working_tree_changes

    @classmethod
    def parse(cls, porcelain: str) -> GitStatus:
        status = cls()
        for line in porcelain.splitlines():
            if len(line) < 4:
                continue
            index, worktree, path = line[0], line[1], line[3:]
            if index not in (" ", "?"):
                status.index_changes.append(path)
            if worktree != " ":
                status.working_tree_changes.append(path)
        return status


class GitRepository:
    """A local repository driven through git subprocesses."""

    def __init__(self, root: str | os.PathLike, git: str = "git"):
        self.root = Path(root)
        self._git = git

    async def _run(self, *args: str, cwd: Path | None = None) -> str:
        arg_list = list(args)
        logger.debug(f"Running git {' '.join(arg_list)} in {cwd or self.root}")
        try:
            process = await asyncio.create_subprocess_exec(
                self._git,
                *arg_list,
                cwd=str(cwd or self.root),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except (FileNotFoundError, NotADirectoryError) as e:
            raise GitCommandError(arg_list, None, str(e)) from e

        stdout, stderr = await process.communicate()
        if process.returncode != 0:
            raise GitCommandError(
                arg_list, process.returncode, stderr.decode(errors="replace")
            )
        return stdout.decode(errors="replace")

    @classmethod
    async def init(
        cls, path: str | os.PathLike, default_branch: str = "main", git: str = "git"
    ) -> GitRepository:
        repo = cls(path, git=git)
        await repo._run("init", f"--initial-branch={default_branch}")
        return repo

    @classmethod
    async def open(cls, path: str | os.PathLike, git: str = "git") -> GitRepository | None:
        """Open the repository containing ``path``, or None if there is none."""
        probe = cls(path, git=git)
        try:
            top_level = await probe._run("rev-parse", "--show-toplevel")
        except GitCommandError:
            return None
        return cls(top_level.strip(), git=git)

    async def status(self) -> GitStatus:
        return GitStatus.parse(await self._run("status", "--porcelain"))

    async def set_config(self, key: str, value: str) -> None:
        await self._run("config", key, value)

    async def commit(self, message: str, *, all: bool = False) -> None:
        if all:
            await self._run("add", "--all")
        await self._run("commit", "-m", message)

    async def pull(self) -> None:
        await self._run("pull")

    async def push(
        self,
        remote: str | None = None,
        branch: str | None = None,
        *,
        set_upstream: bool = False,
    ) -> None:
        args = ["push"]
        if set_upstream:
            args.append("--set-upstream")
        args.extend(a for a in (remote, branch) if a)
        await self._run(*args)
