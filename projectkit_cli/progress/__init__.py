"""Cancellable progress reporting."""

from projectkit_cli.progress.cancellation import (
    CancellationToken,
    CancellationTokenSource,
)
from projectkit_cli.progress.host import Notifier, ProgressHost, ProgressSink
from projectkit_cli.progress.reporter import (
    CANCELLED_MESSAGE,
    ProgressCancelledError,
    ProgressReporter,
    ProgressState,
    ProgressStateError,
)


__all__ = [
    "ProgressReporter",
    "ProgressState",
    "ProgressCancelledError",
    "ProgressStateError",
    "CANCELLED_MESSAGE",
    # Cancellation
    "CancellationToken",
    "CancellationTokenSource",
    # Host capabilities
    "ProgressHost",
    "ProgressSink",
    "Notifier",
]
