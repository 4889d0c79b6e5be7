"""Textual input box surface."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from textual import on
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Input, Static

from projectkit_cli.tui.surfaces.base import QuickInputScreen, TextualQuickInput


if TYPE_CHECKING:
    from textual.app import App


class TextualInputBox(TextualQuickInput):
    """Input box controller backed by ``InputBoxScreen``."""

    def __init__(self, app: App) -> None:
        super().__init__(app)
        self.value = ""
        self.password = False
        self._prompt: str | None = None
        self._validation_message: str | None = None

        self.on_did_change_value: Callable[[str], None] | None = None
        self.on_did_accept: Callable[[], None] | None = None

    @property
    def prompt(self) -> str | None:
        return self._prompt

    @prompt.setter
    def prompt(self, value: str | None) -> None:
        self._prompt = value
        self._refresh()

    @property
    def validation_message(self) -> str | None:
        return self._validation_message

    @validation_message.setter
    def validation_message(self, value: str | None) -> None:
        self._validation_message = value
        self._refresh()

    def _create_screen(self) -> InputBoxScreen:
        return InputBoxScreen(self)

    def change_value(self, value: str) -> None:
        """Called by the screen on every edit."""
        self.value = value
        if self.on_did_change_value is not None:
            self.on_did_change_value(value)

    def accept(self) -> None:
        if self.on_did_accept is not None:
            self.on_did_accept()


class InputBoxScreen(QuickInputScreen):
    """Modal single line input with a prompt and a validation message."""

    DEFAULT_CSS = """
    InputBoxScreen #input_box_prompt {
        color: $secondary;
        margin-top: 1;
    }

    InputBoxScreen #input_box_validation {
        color: $error;
    }
    """

    controller: TextualInputBox

    def compose(self) -> ComposeResult:
        controller = self.controller
        with Vertical(id="quick_input"):
            yield from self.compose_header()
            yield Input(
                value=controller.value,
                placeholder=controller.placeholder or "",
                password=controller.password,
                id="input_box_input",
            )
            yield Static("", id="input_box_validation", markup=False)
            yield Static("", id="input_box_prompt", markup=False)
            yield from self.compose_buttons()

    def on_mount(self) -> None:
        self.query_one("#input_box_input", Input).focus()

    def refresh_state(self) -> None:
        super().refresh_state()
        controller = self.controller
        input_widget = self.query_one("#input_box_input", Input)
        input_widget.disabled = not controller.enabled
        # Disabling drops focus; give it back once the box is usable again
        if controller.enabled and self.focused is None:
            input_widget.focus()

        validation = self.query_one("#input_box_validation", Static)
        validation.update(controller.validation_message or "")
        validation.set_class(not controller.validation_message, "hidden")

        prompt = self.query_one("#input_box_prompt", Static)
        prompt.update(controller.prompt or "")
        prompt.set_class(not controller.prompt, "hidden")

    @on(Input.Changed, "#input_box_input")
    def _on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        if event.value != self.controller.value:
            self.controller.change_value(event.value)

    @on(Input.Submitted, "#input_box_input")
    def _on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.controller.value = event.value
        if self.controller.enabled:
            self.controller.accept()
