"""Progress notice docked at the bottom of the main screen."""

from __future__ import annotations

from collections.abc import Callable

from textual.app import ComposeResult
from textual.widgets import Button, Label, ProgressBar, Static


class ProgressNotice(Static):
    """Shows one long-running operation: title, last message and a bar.

    The notice lives on the base screen so it keeps rendering while wizard
    screens are stacked above it.
    """

    DEFAULT_CSS = """
    ProgressNotice {
        dock: bottom;
        height: auto;
        padding: 0 1;
        margin-bottom: 1;
        border-top: solid $primary 60%;
        background: $surface;
    }

    ProgressNotice > #progress_title {
        text-style: bold;
    }

    ProgressNotice > #progress_message {
        color: $secondary;
    }

    ProgressNotice > #progress_cancel {
        margin-top: 1;
    }
    """

    def __init__(
        self,
        title: str,
        *,
        cancellable: bool,
        on_cancel: Callable[[], None] | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._title = title
        self._cancellable = cancellable
        self._on_cancel = on_cancel
        self._message = ""
        self._progress = 0.0

    @property
    def cancellable(self) -> bool:
        return self._cancellable

    @property
    def progress(self) -> float:
        return self._progress

    @property
    def message(self) -> str:
        return self._message

    def compose(self) -> ComposeResult:
        yield Label(self._title, id="progress_title")
        yield Static("", id="progress_message", markup=False)
        yield ProgressBar(total=100, show_eta=False, id="progress_bar")
        if self._cancellable:
            yield Button("Cancel", variant="error", id="progress_cancel")

    def report(self, *, increment: float | None = None, message: str | None = None) -> None:
        if increment is not None:
            self._progress = min(100.0, self._progress + increment)
        if message is not None:
            self._message = message
        if self.is_mounted:
            self._sync()

    def on_mount(self) -> None:
        self._sync()

    def _sync(self) -> None:
        self.query_one("#progress_bar", ProgressBar).update(progress=self._progress)
        self.query_one("#progress_message", Static).update(self._message)

    def request_cancel(self) -> None:
        if not self._cancellable:
            return
        if self.is_mounted:
            button = self.query_one("#progress_cancel", Button)
            if button.disabled:
                return
            button.disabled = True
            self.query_one("#progress_message", Static).update("Cancelling...")
        if self._on_cancel is not None:
            self._on_cancel()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "progress_cancel":
            event.stop()
            self.request_cancel()
