"""StepRunner - drives a multi-stage interactive flow.

A wizard is a chain of steps. Each step shows one surface (picker or input
box) through the runner and returns the next step, ``None`` when the flow is
complete, or the ``NavigationSignal`` the surface produced:

    async def choose_template(runner: StepRunner) -> Step | NavigationSignal | None:
        pick = await runner.show_quick_pick(title="Choose template", ...)
        if isinstance(pick, NavigationSignal):
            return pick
        state.template = pick[0].key
        return enter_name

    await StepRunner.run(choose_options, host)

Navigation:
    BACK    the previous step in history runs again
    RESUME  the same step runs again
    CANCEL  the flow ends, no further steps run

The runner owns at most one visible surface. It is disposed before the next
one is shown and when the flow ends, whatever the reason.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from enum import Enum
from typing import Any, TypeVar

from projectkit_cli.wizard.surfaces import (
    QuickInput,
    QuickInputButton,
    QuickInputButtons,
    QuickInputHost,
    QuickPickItem,
    ShouldResume,
    Validator,
)


logger = logging.getLogger(__name__)

T = TypeVar("T", bound=QuickPickItem)


class NavigationSignal(Enum):
    """How a surface closed when it was not accepted normally."""

    BACK = "back"
    RESUME = "resume"
    CANCEL = "cancel"


Step = Callable[["StepRunner"], Awaitable["Step | NavigationSignal | None"]]


def _settle(result: asyncio.Future, value: Any) -> None:
    if not result.done():
        result.set_result(value)


def _fail(result: asyncio.Future, error: BaseException) -> None:
    if result.done():
        logger.debug("Ignoring error raised after the surface closed: %r", error)
        return
    result.set_exception(error)


def _detach(surface: QuickInput) -> None:
    for name in (
        "on_did_trigger_button",
        "on_did_hide",
        "on_did_accept",
        "on_did_change_selection",
        "on_did_change_value",
    ):
        if hasattr(surface, name):
            setattr(surface, name, None)


class StepRunner:
    """Runs steps one after another and keeps the history used by BACK."""

    def __init__(self, host: QuickInputHost) -> None:
        self._host = host
        self._current: QuickInput | None = None
        self._steps: list[Step] = []
        self._pending: set[asyncio.Future] = set()

    @classmethod
    async def run(cls, start: Step, host: QuickInputHost) -> None:
        runner = cls(host)
        await runner.step_through(start)

    @property
    def history(self) -> tuple[Step, ...]:
        return tuple(self._steps)

    @property
    def current(self) -> QuickInput | None:
        return self._current

    async def step_through(self, start: Step) -> None:
        step: Step | None = start
        try:
            while step is not None:
                self._steps.append(step)
                if self._current is not None:
                    self._current.enabled = False
                    self._current.busy = True
                outcome = await step(self)
                step = self._next_step(outcome)
        finally:
            self.dispose()

    def _next_step(self, outcome: Step | NavigationSignal | None) -> Step | None:
        if outcome is NavigationSignal.BACK:
            self._steps.pop()
            previous = self._steps.pop() if self._steps else None
            logger.debug("Back: %d step(s) left in history", len(self._steps))
            return previous
        if outcome is NavigationSignal.RESUME:
            logger.debug("Resume: re-running step %d", len(self._steps))
            return self._steps.pop()
        if outcome is NavigationSignal.CANCEL:
            logger.debug("Cancel: stopping after %d step(s)", len(self._steps))
            return None
        return outcome

    def dispose(self) -> None:
        if self._current is not None:
            self._current.dispose()

    async def show_quick_pick(
        self,
        *,
        title: str,
        step: int,
        total_steps: int,
        items: Sequence[T],
        placeholder: str | None = None,
        can_select_many: bool = False,
        selected_items: Sequence[T] | None = None,
        active_item: T | None = None,
        buttons: Sequence[QuickInputButton] = (),
        ignore_focus_out: bool = False,
        should_resume: ShouldResume | None = None,
    ) -> list[T] | QuickInputButton | NavigationSignal:
        """Show a picker and wait for a selection.

        Single selection pickers resolve on the first selection change,
        multi selection pickers on accept with every selected item.

        Returns:
            The selected items, the custom button that was triggered, or the
            navigation signal produced by the back button or by hiding.
        """
        result: asyncio.Future = asyncio.get_running_loop().create_future()
        picker = self._host.create_quick_pick()
        picker.title = title
        picker.step = step
        picker.total_steps = total_steps
        picker.placeholder = placeholder
        picker.ignore_focus_out = ignore_focus_out
        picker.can_select_many = can_select_many
        picker.items = list(items)
        if active_item is not None:
            picker.active_items = [active_item]
        picker.buttons = self._buttons_for(buttons)

        picker.on_did_trigger_button = lambda button: self._on_button(result, button)
        picker.on_did_hide = lambda: self._on_hide(result, should_resume)
        if can_select_many:
            picker.on_did_accept = lambda: _settle(
                result, list(picker.selected_items)
            )
        else:
            picker.on_did_change_selection = lambda chosen: _settle(
                result, list(chosen)
            )

        self._replace_current(picker)
        if can_select_many and selected_items is not None:
            picker.selected_items = list(selected_items)

        try:
            return await result
        finally:
            _detach(picker)

    async def show_input_box(
        self,
        *,
        title: str,
        step: int,
        total_steps: int,
        validate: Validator,
        value: str = "",
        placeholder: str | None = None,
        prompt: str | None = None,
        password: bool = False,
        buttons: Sequence[QuickInputButton] = (),
        ignore_focus_out: bool = False,
        should_resume: ShouldResume | None = None,
    ) -> str | QuickInputButton | NavigationSignal:
        """Show an input box and wait for an accepted value.

        ``validate`` runs when the box appears and on every change. Only the
        most recently started validation may update the visible message;
        older ones still run to completion but their result is dropped.
        Accepting re-validates the value and keeps the box open while the
        message is non-empty.
        """
        result: asyncio.Future = asyncio.get_running_loop().create_future()
        box = self._host.create_input_box()
        box.title = title
        box.step = step
        box.total_steps = total_steps
        box.value = value
        box.placeholder = placeholder
        box.prompt = prompt
        box.password = password
        box.ignore_focus_out = ignore_focus_out
        box.buttons = self._buttons_for(buttons)

        validating: asyncio.Future | None = None

        def start_validation(text: str) -> None:
            nonlocal validating
            current = asyncio.ensure_future(validate(text, box))
            validating = current
            self._track(asyncio.ensure_future(apply_validation(current)))

        async def apply_validation(current: asyncio.Future) -> None:
            try:
                message = await current
            except Exception as e:
                _fail(result, e)
                return
            if current is validating:
                box.validation_message = message

        async def accept() -> None:
            accepted = box.value
            box.enabled = False
            box.busy = True
            try:
                message = await validate(accepted, box)
            except Exception as e:
                _fail(result, e)
                return
            if not message:
                _settle(result, accepted)
                return
            box.validation_message = message
            box.enabled = True
            box.busy = False

        box.on_did_trigger_button = lambda button: self._on_button(result, button)
        box.on_did_hide = lambda: self._on_hide(result, should_resume)
        box.on_did_change_value = start_validation
        box.on_did_accept = lambda: self._track(asyncio.ensure_future(accept()))

        self._replace_current(box)
        start_validation(box.value)

        try:
            return await result
        finally:
            _detach(box)

    def _buttons_for(
        self, buttons: Sequence[QuickInputButton]
    ) -> list[QuickInputButton]:
        back = [QuickInputButtons.BACK] if len(self._steps) > 1 else []
        return back + list(buttons)

    def _replace_current(self, surface: QuickInput) -> None:
        if self._current is not None:
            self._current.dispose()
        self._current = surface
        surface.show()

    def _on_button(self, result: asyncio.Future, button: QuickInputButton) -> None:
        if button is QuickInputButtons.BACK:
            _settle(result, NavigationSignal.BACK)
        else:
            _settle(result, button)

    def _on_hide(
        self, result: asyncio.Future, should_resume: ShouldResume | None
    ) -> None:
        self._track(asyncio.ensure_future(self._resolve_hidden(result, should_resume)))

    async def _resolve_hidden(
        self, result: asyncio.Future, should_resume: ShouldResume | None
    ) -> None:
        try:
            resume = should_resume is not None and await should_resume()
        except Exception as e:
            _fail(result, e)
            return
        _settle(result, NavigationSignal.RESUME if resume else NavigationSignal.CANCEL)

    def _track(self, task: asyncio.Future) -> None:
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

