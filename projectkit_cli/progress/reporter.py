"""ProgressReporter - one cancellable progress indicator per operation.

Usage:

    try:
        async with ProgressReporter("Backup", host=host, notifier=notifier) as progress:
            progress.set(20, "Setting up repository configuration")
            await configure(repo)
            progress.set(60, "Creating commit")
            ...
    except ProgressCancelledError:
        return False  # already reported to the user

Cancellation is cooperative: the user's request is only observed by
``set()`` and ``assert_continue()``. Work already in flight is never
interrupted.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from enum import Enum

from projectkit_cli.progress.cancellation import CancellationToken
from projectkit_cli.progress.host import Notifier, ProgressHost, ProgressSink


logger = logging.getLogger(__name__)

CANCELLED_MESSAGE = "Operation cancelled by user"


class ProgressCancelledError(Exception):
    """The user cancelled the operation. It has already been reported."""

    def __init__(self) -> None:
        super().__init__("Progress cancelled")


class ProgressStateError(Exception):
    """The reporter was used outside of its lifecycle."""

    pass


class ProgressState(Enum):
    CONSTRUCTED = "constructed"
    INITIALIZING = "initializing"
    RUNNING = "running"
    RESOLVED = "resolved"


class ProgressReporter:
    """Scoped, cancellable progress indicator.

    Lifecycle: ``constructed -> initializing -> running -> resolved``.
    ``init()`` must be called exactly once (``async with`` does it) and
    ``resolve()`` may be called any number of times from any state; the host
    indicator is released exactly once.
    """

    def __init__(
        self,
        title: str,
        *,
        host: ProgressHost,
        notifier: Notifier,
        cancellable: bool = True,
    ) -> None:
        self.title = title
        self.cancellable = cancellable
        self.next_report_callback: Callable[[], None] | None = None
        self._host = host
        self._notifier = notifier
        self._state = ProgressState.CONSTRUCTED
        self._percent: float = 0
        self._sink: ProgressSink | None = None
        self._token: CancellationToken | None = None
        self._done: asyncio.Future | None = None
        self._host_task: asyncio.Future | None = None
        self._cancel_reported = False

    @property
    def state(self) -> ProgressState:
        return self._state

    @property
    def percent(self) -> float:
        return self._percent

    @property
    def sink(self) -> ProgressSink:
        if self._sink is None:
            raise ProgressStateError(f"Progress '{self.title}' has no indicator yet.")
        return self._sink

    @property
    def is_cancelled(self) -> bool:
        return self._token is not None and self._token.is_cancellation_requested

    async def init(self) -> None:
        """Acquire the host indicator and wait until it is ready.

        Raises:
            ProgressStateError: If called more than once
            Exception: Whatever the host raised before handing over its sink
        """
        if self._state is not ProgressState.CONSTRUCTED:
            raise ProgressStateError("ProgressReporter.init() called more than once.")

        self._state = ProgressState.INITIALIZING
        loop = asyncio.get_running_loop()
        ready = loop.create_future()

        async def run(sink: ProgressSink, token: CancellationToken) -> None:
            self._sink = sink
            self._token = token
            self._done = loop.create_future()
            self._state = ProgressState.RUNNING
            token.on_cancellation_requested(self._on_cancellation_requested)
            if not ready.done():
                ready.set_result(None)
            await self._done

        def on_host_finished(task: asyncio.Future) -> None:
            if task.cancelled():
                if not ready.done():
                    ready.cancel()
                return
            error = task.exception()
            if error is not None:
                logger.warning(f"Progress indicator '{self.title}' failed: {error}")
                if not ready.done():
                    ready.set_exception(error)
            elif not ready.done():
                ready.set_exception(
                    ProgressStateError("Progress host finished before starting.")
                )

        self._host_task = asyncio.ensure_future(
            self._host.with_progress(self.title, self.cancellable, run)
        )
        self._host_task.add_done_callback(on_host_finished)
        try:
            await ready
        except asyncio.CancelledError:
            logger.debug(f"Progress '{self.title}' init cancelled")
            if self._state is ProgressState.RUNNING:
                self.resolve()
            else:
                self._host_task.cancel()
            raise

    def set(
        self,
        percent: float | None = None,
        message: str | None = None,
        next_report_callback: Callable[[], None] | None = None,
    ) -> None:
        """Report cumulative progress.

        Args:
            percent: New cumulative percentage, ``None`` keeps the current one
            message: Status message shown next to the indicator
            next_report_callback: Called right before the next report, on
                cancellation or on resolution, whichever comes first

        Raises:
            ProgressCancelledError: If the user cancelled the operation
        """
        if self._state is not ProgressState.RUNNING:
            return

        self.assert_continue()
        self._run_pending_callback()

        percent = self._percent if percent is None else percent
        self.sink.report(increment=percent - self._percent, message=message)
        self._percent = percent
        self.next_report_callback = next_report_callback

    def assert_continue(self) -> None:
        """Raise ``ProgressCancelledError`` if the operation must stop."""
        if self.is_cancelled or self._state is not ProgressState.RUNNING:
            if not self._cancel_reported:
                self._cancel_reported = True
                self._notifier.fail(CANCELLED_MESSAGE)
            raise ProgressCancelledError()

    def resolve(self) -> None:
        """Release the indicator. Safe to call repeatedly and from any state."""
        if self._state is not ProgressState.RUNNING:
            return

        self._run_pending_callback()
        if self._done is not None and not self._done.done():
            self._done.set_result(None)
        self._state = ProgressState.RESOLVED
        logger.debug(f"Progress '{self.title}' resolved at {self._percent}%")

    async def wait_released(self) -> None:
        """Wait until the host has removed the indicator."""
        if self._host_task is not None and self._state is ProgressState.RESOLVED:
            await self._host_task

    def _on_cancellation_requested(self) -> None:
        logger.info(f"Cancellation requested for '{self.title}'")
        self._run_pending_callback()

    def _run_pending_callback(self) -> None:
        callback, self.next_report_callback = self.next_report_callback, None
        if callback is not None:
            callback()

    def __enter__(self) -> ProgressReporter:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.resolve()

    async def __aenter__(self) -> ProgressReporter:
        await self.init()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.resolve()
        await self.wait_released()
