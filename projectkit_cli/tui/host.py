"""Textual implementations of the wizard and progress host capabilities."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from projectkit_cli.progress import CancellationTokenSource
from projectkit_cli.progress.host import ProgressTask
from projectkit_cli.tui.surfaces import TextualInputBox, TextualQuickPick
from projectkit_cli.tui.widgets import ProgressNotice


if TYPE_CHECKING:
    from textual.app import App


logger = logging.getLogger(__name__)


class TextualQuickInputHost:
    """Creates picker and input box surfaces bound to ``app``."""

    def __init__(self, app: App) -> None:
        self._app = app

    def create_quick_pick(self) -> TextualQuickPick:
        return TextualQuickPick(self._app)

    def create_input_box(self) -> TextualInputBox:
        return TextualInputBox(self._app)


class TextualProgressHost:
    """Mounts a ``ProgressNotice`` for each operation on the base screen."""

    def __init__(self, app: App) -> None:
        self._app = app
        self._active: list[ProgressNotice] = []

    @property
    def has_active(self) -> bool:
        return bool(self._active)

    async def with_progress(
        self, title: str, cancellable: bool, task: ProgressTask
    ) -> None:
        source = CancellationTokenSource()
        notice = ProgressNotice(
            title,
            cancellable=cancellable,
            on_cancel=source.cancel,
            classes="progress_notice",
        )
        await self._app.screen_stack[0].mount(notice)
        self._active.append(notice)
        logger.debug(f"Progress '{title}' started")
        try:
            await task(notice, source.token)
        finally:
            self._active.remove(notice)
            await notice.remove()
            logger.debug(f"Progress '{title}' released")

    def cancel_active(self) -> bool:
        """Cancel the most recent operation. Returns False if none can be cancelled."""
        cancellable = [notice for notice in self._active if notice.cancellable]
        if not cancellable:
            return False
        cancellable[-1].request_cancel()
        return True


class TextualNotifier:
    """Routes success and failure messages to Textual toasts."""

    def __init__(self, app: App) -> None:
        self._app = app

    def success(self, message: str) -> bool:
        logger.info(message)
        self._app.notify(message, title="Done", severity="information")
        return True

    def fail(self, message: str) -> bool:
        logger.warning(message)
        self._app.notify(message, title="Failed", severity="error")
        return False
