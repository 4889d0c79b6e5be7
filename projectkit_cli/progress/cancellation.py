"""Cooperative cancellation primitives."""

import logging
from collections.abc import Callable


logger = logging.getLogger(__name__)


class CancellationToken:
    """Read side of a cancellation request. Once requested it stays requested."""

    def __init__(self) -> None:
        self._requested = False
        self._callbacks: list[Callable[[], None]] = []

    @property
    def is_cancellation_requested(self) -> bool:
        return self._requested

    def on_cancellation_requested(self, callback: Callable[[], None]) -> None:
        """Register a callback. Runs immediately if already cancelled."""
        if self._requested:
            callback()
            return
        self._callbacks.append(callback)

    def _request(self) -> None:
        if self._requested:
            return
        self._requested = True
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()


class CancellationTokenSource:
    """Owner side: the UI calls ``cancel()`` when the user asks to stop."""

    def __init__(self) -> None:
        self.token = CancellationToken()

    def cancel(self) -> None:
        logger.debug("Cancellation requested")
        self.token._request()
