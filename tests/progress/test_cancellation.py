from unittest.mock import MagicMock

from projectkit_cli.progress import CancellationTokenSource


def test_token_starts_not_cancelled():
    source = CancellationTokenSource()
    assert source.token.is_cancellation_requested is False


def test_cancel_runs_callbacks_once():
    source = CancellationTokenSource()
    callback = MagicMock()
    source.token.on_cancellation_requested(callback)

    source.cancel()
    source.cancel()

    assert source.token.is_cancellation_requested is True
    callback.assert_called_once()


def test_callback_registered_after_cancel_runs_immediately():
    source = CancellationTokenSource()
    source.cancel()
    callback = MagicMock()

    source.token.on_cancellation_requested(callback)

    callback.assert_called_once()
