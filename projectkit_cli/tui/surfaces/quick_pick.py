"""Textual picker surface."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, ClassVar

from rich.text import Text
from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Button, Label, OptionList, SelectionList
from textual.widgets.option_list import Option

from projectkit_cli.tui.surfaces.base import QuickInputScreen, TextualQuickInput
from projectkit_cli.wizard import QuickPickItem


if TYPE_CHECKING:
    from textual.app import App


def item_prompt(item: QuickPickItem) -> Text:
    prompt = Text(item.label)
    if item.description:
        prompt.append(f"  {item.description}", style="dim")
    if item.detail:
        prompt.append(f"\n{item.detail}", style="italic dim")
    return prompt


class TextualQuickPick(TextualQuickInput):
    """Picker controller backed by ``QuickPickScreen``."""

    def __init__(self, app: App) -> None:
        super().__init__(app)
        self.items: Sequence[QuickPickItem] = []
        self.can_select_many = False
        self.active_items: Sequence[QuickPickItem] = []
        self._selected_items: list[QuickPickItem] = []

        self.on_did_change_selection: (
            Callable[[Sequence[QuickPickItem]], None] | None
        ) = None
        self.on_did_accept: Callable[[], None] | None = None

    @property
    def selected_items(self) -> list[QuickPickItem]:
        return list(self._selected_items)

    @selected_items.setter
    def selected_items(self, items: Sequence[QuickPickItem]) -> None:
        self._selected_items = [item for item in items if item in self.items]
        screen = self._screen
        if isinstance(screen, QuickPickScreen) and screen.is_mounted:
            screen.sync_selection()

    def _create_screen(self) -> QuickPickScreen:
        return QuickPickScreen(self)

    def select(self, items: Sequence[QuickPickItem]) -> None:
        """Called by the screen when the user changes the selection."""
        self._selected_items = list(items)
        if self.on_did_change_selection is not None:
            self.on_did_change_selection(self.selected_items)

    def accept(self) -> None:
        if self.on_did_accept is not None:
            self.on_did_accept()


class QuickPickScreen(QuickInputScreen):
    """Modal list of items. Enter picks in single mode, space toggles in multi mode."""

    BINDINGS: ClassVar = [
        ("escape", "hide", "Cancel"),
        Binding("ctrl+s", "accept", "Confirm selection", show=True),
    ]

    DEFAULT_CSS = """
    QuickPickScreen #quick_pick_placeholder {
        color: $secondary;
        margin-bottom: 1;
    }

    QuickPickScreen OptionList, QuickPickScreen SelectionList {
        height: auto;
        max-height: 20;
    }
    """

    controller: TextualQuickPick

    def compose(self) -> ComposeResult:
        controller = self.controller
        with Vertical(id="quick_input"):
            yield from self.compose_header()
            if controller.placeholder:
                yield Label(controller.placeholder, id="quick_pick_placeholder")
            if controller.can_select_many:
                yield SelectionList[int](
                    *[
                        (item_prompt(item), index, item in controller.selected_items)
                        for index, item in enumerate(controller.items)
                    ],
                    id="quick_pick_list",
                )
            else:
                yield OptionList(
                    *[
                        Option(item_prompt(item), id=f"item_{index}")
                        for index, item in enumerate(controller.items)
                    ],
                    id="quick_pick_list",
                )
            yield from self.compose_buttons()

    def extra_buttons(self) -> list[Button]:
        if not self.controller.can_select_many:
            return []
        return [Button("OK", id="quick_pick_accept", variant="success")]

    def on_mount(self) -> None:
        controller = self.controller
        if not controller.can_select_many and controller.active_items:
            active = controller.active_items[0]
            if active in controller.items:
                option_list = self.query_one("#quick_pick_list", OptionList)
                option_list.highlighted = list(controller.items).index(active)
        self.query_one("#quick_pick_list").focus()

    def refresh_state(self) -> None:
        super().refresh_state()
        item_list = self.query_one("#quick_pick_list")
        item_list.disabled = not self.controller.enabled
        if self.controller.enabled and self.focused is None:
            item_list.focus()

    def sync_selection(self) -> None:
        """Push the controller's selection into the selection list."""
        if not self.controller.can_select_many:
            return
        selection_list = self.query_one("#quick_pick_list", SelectionList)
        selected = self.controller.selected_items
        selection_list.deselect_all()
        for index, item in enumerate(self.controller.items):
            if item in selected:
                selection_list.select(index)

    @on(OptionList.OptionSelected, "#quick_pick_list")
    def _on_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        self.controller.select([self.controller.items[event.option_index]])

    @on(SelectionList.SelectedChanged, "#quick_pick_list")
    def _on_selected_changed(self, event: SelectionList.SelectedChanged) -> None:
        event.stop()
        items = self.controller.items
        self.controller.select(
            [items[index] for index in sorted(event.selection_list.selected)]
        )

    @on(Button.Pressed, "#quick_pick_accept")
    def _on_accept_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.action_accept()

    def action_accept(self) -> None:
        if self.controller.can_select_many and self.controller.enabled:
            self.controller.accept()
