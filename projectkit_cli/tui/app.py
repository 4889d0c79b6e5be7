"""ProjectKit Textual application.

The main screen lists the commands. Picking one runs it in a worker behind
the command gate; wizard screens and progress notices are stacked on top of
the main screen by the Textual hosts.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import ClassVar

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, OptionList
from textual.widgets.option_list import Option
from textual.worker import Worker

from projectkit_cli import __version__
from projectkit_cli.commands import (
    COMMANDS,
    CommandContext,
    CommandGate,
    CommandSpec,
    get_command,
)
from projectkit_cli.stores import ProjectKitSettings
from projectkit_cli.tui.host import (
    TextualNotifier,
    TextualProgressHost,
    TextualQuickInputHost,
)
from projectkit_cli.tui.modals import ExitConfirmationModal
from projectkit_cli.tui.theme import PROJECTKIT_THEME


logger = logging.getLogger(__name__)


class ProjectKitApp(App[bool | None]):
    """Command palette for the project commands."""

    TITLE = "ProjectKit"
    SUB_TITLE = f"v{__version__}"

    BINDINGS: ClassVar = [
        Binding("ctrl+x", "cancel_operation", "Cancel operation", priority=True),
    ]

    CSS = """
    #command_list {
        height: 1fr;
        margin: 1 2;
        border: $primary 60%;
    }
    """

    def __init__(
        self,
        *,
        settings: ProjectKitSettings | None = None,
        project_dir: Path | None = None,
        initial_command: str | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.settings = settings if settings is not None else ProjectKitSettings.load()
        if project_dir is None and self.settings.last_project:
            project_dir = Path(self.settings.last_project)
        self.project_dir = project_dir if project_dir is not None else Path.cwd()
        self.initial_command = initial_command
        self.notifier = TextualNotifier(self)
        self.quick_input = TextualQuickInputHost(self)
        self.progress_host = TextualProgressHost(self)
        self.gate = CommandGate(self.notifier)
        self.last_result: bool | None = None
        self.register_theme(PROJECTKIT_THEME)
        self.theme = PROJECTKIT_THEME.name

    def compose(self) -> ComposeResult:
        yield Header()
        yield OptionList(
            *[
                Option(
                    Text.assemble((spec.title, "bold"), "\n", (spec.description, "dim")),
                    id=spec.name,
                )
                for spec in COMMANDS
            ],
            id="command_list",
        )
        yield Footer()

    def on_mount(self) -> None:
        if self.initial_command is not None:
            self.run_command(self.initial_command, exit_after=True)
        else:
            self.query_one("#command_list", OptionList).focus()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        # Wizard pickers stop their own events; only the main list gets here
        if event.option_list.id != "command_list" or event.option.id is None:
            return
        self.run_command(event.option.id)

    def build_context(self) -> CommandContext:
        return CommandContext(
            settings=self.settings,
            quick_input=self.quick_input,
            progress_host=self.progress_host,
            notifier=self.notifier,
            project_dir=self.project_dir,
        )

    def run_command(self, name: str, *, exit_after: bool = False) -> Worker:
        spec = get_command(name)
        return self.run_worker(
            self._execute(spec, exit_after),
            name=f"command_{name}",
            group="commands",
        )

    async def _execute(self, spec: CommandSpec, exit_after: bool) -> bool:
        context = self.build_context()
        try:
            result = await self.gate.run(spec.name, lambda: spec.handler(context))
        except Exception as e:
            logger.exception(f"Command '{spec.name}' failed")
            result = self.notifier.fail(f"{spec.title} failed: {e}")

        # "open" switches the project the next commands work on
        self.project_dir = context.project_dir
        self.last_result = result
        if exit_after:
            self.exit(result)
        return result

    def action_cancel_operation(self) -> None:
        if not self.progress_host.cancel_active():
            self.notify("No operation to cancel", severity="warning")

    async def action_quit(self) -> None:
        if self.gate.busy:
            self.push_screen(ExitConfirmationModal())
            return
        self.exit()
