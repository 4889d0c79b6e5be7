"""Interactive surfaces consumed by the step runner.

A surface is a single on-screen prompt (a picker or an input box) bound to one
wizard step. The runner only depends on the protocols below; the Textual
implementations live in ``projectkit_cli.tui.surfaces`` and tests use
in-memory fakes.

Events are delivered through handler attributes (``on_did_*``). The runner
assigns them before ``show()`` and resets them to ``None`` once the
interaction has finished. A surface calls a handler only when it is set.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Protocol, TypeVar


@dataclass(frozen=True)
class QuickInputButton:
    """A named action button shown in the title area of a surface."""

    label: str
    tooltip: str | None = None


class QuickInputButtons:
    """Built-in buttons."""

    BACK = QuickInputButton("Back", tooltip="Go back to the previous step")


@dataclass(frozen=True)
class QuickPickItem:
    """An entry of a picker. Subclass it to carry a payload."""

    label: str
    description: str | None = None
    detail: str | None = None
    key: str | None = None


T = TypeVar("T", bound=QuickPickItem)

ButtonHandler = Callable[[QuickInputButton], None]
HideHandler = Callable[[], None]


class QuickInput(Protocol):
    """State and events shared by pickers and input boxes."""

    title: str | None
    step: int | None
    total_steps: int | None
    placeholder: str | None
    ignore_focus_out: bool
    enabled: bool
    busy: bool
    buttons: Sequence[QuickInputButton]

    on_did_trigger_button: ButtonHandler | None
    on_did_hide: HideHandler | None

    def show(self) -> None:
        """Make the surface visible."""
        ...

    def dispose(self) -> None:
        """Remove the surface. Fires ``on_did_hide`` if it is visible and a handler is attached. Idempotent."""
        ...


class QuickPick(QuickInput, Protocol[T]):
    """A single or multi selection list."""

    items: Sequence[T]
    can_select_many: bool
    active_items: Sequence[T]
    selected_items: Sequence[T]

    on_did_change_selection: Callable[[Sequence[T]], None] | None
    on_did_accept: Callable[[], None] | None


class InputBox(QuickInput, Protocol):
    """A free-text box with a live validation message."""

    value: str
    prompt: str | None
    password: bool
    validation_message: str | None

    on_did_change_value: Callable[[str], None] | None
    on_did_accept: Callable[[], None] | None


class QuickInputHost(Protocol):
    """Factory for surfaces provided by the UI environment."""

    def create_quick_pick(self) -> QuickPick: ...

    def create_input_box(self) -> InputBox: ...


ShouldResume = Callable[[], Awaitable[bool]]
Validator = Callable[[str, InputBox], Awaitable[str | None]]
