"""Capabilities the progress reporter needs from the UI environment."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Protocol

from projectkit_cli.progress.cancellation import CancellationToken


class ProgressSink(Protocol):
    """Receives increments for one visible progress indicator."""

    def report(
        self, *, increment: float | None = None, message: str | None = None
    ) -> None: ...


ProgressTask = Callable[[ProgressSink, CancellationToken], Awaitable[None]]


class ProgressHost(Protocol):
    def with_progress(
        self, title: str, cancellable: bool, task: ProgressTask
    ) -> Awaitable[None]:
        """Show an indicator while ``task`` runs, then remove it.

        The host creates the sink and the token, awaits ``task`` and releases
        the indicator once the task finishes.
        """
        ...


class Notifier(Protocol):
    """User facing success / failure messages."""

    def success(self, message: str) -> bool: ...

    def fail(self, message: str) -> bool: ...
