"""Exit confirmation modal shown while a command is still running."""

from textual.app import ComposeResult
from textual.containers import Grid
from textual.screen import ModalScreen
from textual.widgets import Button, Label


class ExitConfirmationModal(ModalScreen[bool]):
    """Screen with a dialog to confirm quitting during an operation."""

    DEFAULT_CSS = """
    ExitConfirmationModal {
        align: center middle;
        background: $background 70%;
    }

    ExitConfirmationModal > #dialog {
        grid-size: 2;
        grid-gutter: 1 2;
        grid-rows: auto auto;
        padding: 1 2;
        width: 60;
        height: auto;
        border: $error 80%;
        background: $surface;
    }

    ExitConfirmationModal > #dialog > #question {
        column-span: 2;
        width: 1fr;
        content-align: center middle;
        padding: 1 0;
    }

    ExitConfirmationModal Button {
        width: 100%;
    }
    """

    def compose(self) -> ComposeResult:
        yield Grid(
            Label("An operation is still running. Quit anyway?", id="question"),
            Button("Yes, quit", variant="error", id="yes"),
            Button("No, keep working", variant="primary", id="no"),
            id="dialog",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "yes":
            self.app.exit()
        else:
            self.dismiss(False)
