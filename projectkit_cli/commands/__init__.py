"""User commands and their registry."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from functools import partial

from projectkit_cli.commands.backup import backup_changes
from projectkit_cli.commands.context import CommandContext
from projectkit_cli.commands.create_project import create_project
from projectkit_cli.commands.flow import run_flow
from projectkit_cli.commands.gate import BUSY_MESSAGE, CommandGate
from projectkit_cli.commands.open_project import open_project
from projectkit_cli.commands.pull import pull_changes


@dataclass(frozen=True)
class CommandSpec:
    name: str
    title: str
    description: str
    handler: Callable[[CommandContext], Awaitable[bool]]


COMMANDS: list[CommandSpec] = [
    CommandSpec(
        "create",
        "Create project",
        "Create a new project from a template",
        create_project,
    ),
    CommandSpec(
        "open",
        "Open project",
        "Select the project folder the other commands work on",
        open_project,
    ),
    CommandSpec(
        "flow",
        "Flow: build",
        "Build, wait for the device and upload",
        partial(run_flow, kind="build"),
    ),
    CommandSpec(
        "rebuild",
        "Flow: rebuild",
        "Rebuild from scratch, wait for the device and upload",
        partial(run_flow, kind="rebuild"),
    ),
    CommandSpec(
        "backup",
        "Backup changes",
        "Commit every change and push it to the remote",
        backup_changes,
    ),
    CommandSpec(
        "pull",
        "Pull changes",
        "Pull the latest changes from the remote",
        pull_changes,
    ),
]


def get_command(name: str) -> CommandSpec:
    for command in COMMANDS:
        if command.name == name:
            return command
    raise KeyError(name)


__all__ = [
    "BUSY_MESSAGE",
    "COMMANDS",
    "CommandContext",
    "CommandGate",
    "CommandSpec",
    "get_command",
]
