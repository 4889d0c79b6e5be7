"""Shared pieces of the Textual picker and input box.

Each surface is split in two:

- a controller (``TextualQuickInput`` subclasses) implementing the wizard
  surface protocol. The step runner talks only to the controller, which keeps
  the state even before the screen is mounted.
- a modal screen (``QuickInputScreen`` subclasses) rendering that state and
  forwarding user events back to the controller.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, ClassVar

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Label, LoadingIndicator

from projectkit_cli.wizard import QuickInputButton, QuickInputButtons
from projectkit_cli.wizard.surfaces import ButtonHandler, HideHandler


if TYPE_CHECKING:
    from textual.app import App


logger = logging.getLogger(__name__)


class TextualQuickInput:
    """Controller state shared by every surface."""

    def __init__(self, app: App) -> None:
        self._app = app
        self._screen: QuickInputScreen | None = None
        self._visible = False
        self._enabled = True
        self._busy = False

        self.title: str | None = None
        self.step: int | None = None
        self.total_steps: int | None = None
        self.placeholder: str | None = None
        # Terminal screens do not lose focus to other windows; kept for parity
        self.ignore_focus_out = False
        self.buttons: Sequence[QuickInputButton] = ()

        self.on_did_trigger_button: ButtonHandler | None = None
        self.on_did_hide: HideHandler | None = None

    @property
    def visible(self) -> bool:
        return self._visible

    @property
    def screen(self) -> QuickInputScreen | None:
        return self._screen

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._enabled = value
        self._refresh()

    @property
    def busy(self) -> bool:
        return self._busy

    @busy.setter
    def busy(self, value: bool) -> None:
        self._busy = value
        self._refresh()

    def _create_screen(self) -> QuickInputScreen:
        raise NotImplementedError

    def show(self) -> None:
        if self._visible:
            return
        self._screen = self._create_screen()
        self._visible = True
        self._app.push_screen(self._screen)

    def dispose(self) -> None:
        """Close the screen. Fires ``on_did_hide`` if a handler is attached."""
        self.hide()

    def hide(self) -> None:
        if not self._visible:
            return
        self._visible = False

        self.close_screen()
        if self.on_did_hide is not None:
            self.on_did_hide()

    def close_screen(self) -> None:
        """Pop the screen of a hidden surface.

        A screen covered by another one is popped when it is resumed.
        """
        screen = self._screen
        if self._visible or screen is None or screen not in self._app.screen_stack:
            return
        if self._app.screen is screen:
            self._app.pop_screen()
        else:
            logger.debug(f"{screen} is covered, closing it when it resumes")

    def trigger_button(self, button: QuickInputButton) -> None:
        if self.on_did_trigger_button is not None:
            self.on_did_trigger_button(button)

    def _refresh(self) -> None:
        if self._screen is not None and self._screen.is_mounted:
            self._screen.refresh_state()


class QuickInputScreen(ModalScreen[None]):
    """Frame shared by the picker and input box screens."""

    BINDINGS: ClassVar = [
        ("escape", "hide", "Cancel"),
    ]

    DEFAULT_CSS = """
    QuickInputScreen {
        align: center top;
        background: $background 60%;
    }

    QuickInputScreen > #quick_input {
        width: 80;
        max-width: 100%;
        height: auto;
        max-height: 80%;
        margin-top: 2;
        padding: 1 2;
        border: $primary 80%;
        background: $surface;
    }

    QuickInputScreen #quick_input_header {
        height: auto;
    }

    QuickInputScreen #quick_input_title {
        width: 1fr;
        text-style: bold;
    }

    QuickInputScreen #quick_input_step {
        color: $secondary;
    }

    QuickInputScreen #quick_input_buttons {
        height: auto;
        margin-top: 1;
    }

    QuickInputScreen #quick_input_buttons Button {
        margin-right: 1;
    }

    QuickInputScreen #quick_input_busy {
        height: 1;
    }

    QuickInputScreen .hidden {
        display: none;
    }
    """

    def __init__(self, controller: TextualQuickInput, **kwargs) -> None:
        super().__init__(**kwargs)
        self.controller = controller

    def compose_header(self) -> ComposeResult:
        with Horizontal(id="quick_input_header"):
            yield Label(self.controller.title or "", id="quick_input_title")
            yield Label(self._step_text(), id="quick_input_step")

    def compose_buttons(self) -> ComposeResult:
        with Horizontal(id="quick_input_buttons"):
            for index, button in enumerate(self.controller.buttons):
                widget = Button(
                    button.label,
                    id=f"quick_input_button_{index}",
                    variant="default" if button is QuickInputButtons.BACK else "primary",
                )
                widget.tooltip = button.tooltip
                yield widget
            yield from self.extra_buttons()
        yield LoadingIndicator(id="quick_input_busy", classes="hidden")

    def extra_buttons(self) -> list[Button]:
        return []

    def _step_text(self) -> str:
        step, total = self.controller.step, self.controller.total_steps
        if step is None:
            return ""
        return f"{step}/{total}" if total else str(step)

    def on_mount(self) -> None:
        self.refresh_state()

    def refresh_state(self) -> None:
        """Mirror ``enabled`` / ``busy`` of the controller."""
        busy = self.query_one("#quick_input_busy", LoadingIndicator)
        busy.set_class(not self.controller.busy, "hidden")
        for button in self.query("#quick_input_buttons Button"):
            button.disabled = not self.controller.enabled

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if button_id.startswith("quick_input_button_"):
            event.stop()
            index = int(button_id.removeprefix("quick_input_button_"))
            self.controller.trigger_button(self.controller.buttons[index])

    def on_screen_resume(self) -> None:
        self.controller.close_screen()

    def action_hide(self) -> None:
        if self.controller.visible:
            self.controller.hide()
        else:
            self.controller.close_screen()
