"""Choose the project the flow, backup and pull commands work on."""

import asyncio
import logging
from pathlib import Path

from projectkit_cli.commands.context import CommandContext
from projectkit_cli.utils import make_dir
from projectkit_cli.wizard import NavigationSignal, QuickPickItem, Step, StepRunner


logger = logging.getLogger(__name__)

PROJECT_HOME_KEY = "."


def list_project_folders(project_home: Path) -> list[str]:
    return sorted(
        entry.name
        for entry in project_home.iterdir()
        if entry.is_dir() and not entry.name.startswith(".")
    )


def project_items(project_home: Path, folders: list[str]) -> list[QuickPickItem]:
    items = [
        QuickPickItem(
            label=PROJECT_HOME_KEY,
            key=PROJECT_HOME_KEY,
            description=str(project_home),
        )
    ]
    items.extend(QuickPickItem(label=name, key=name) for name in folders)
    return items


async def open_project(ctx: CommandContext) -> bool:
    project_home = Path(ctx.settings.require("project_home")).expanduser()
    if not await make_dir(project_home):
        return ctx.notifier.fail("Failed to create project home directory")

    folders = await asyncio.to_thread(list_project_folders, project_home)
    current = ctx.project_dir.name if ctx.project_dir.parent == project_home else None
    items = project_items(project_home, folders)
    chosen: list[QuickPickItem] = []

    async def pick_project(runner: StepRunner) -> Step | NavigationSignal | None:
        pick = await runner.show_quick_pick(
            title="Select a project folder",
            step=1,
            total_steps=1,
            placeholder="Press enter to open the highlighted folder",
            items=items,
            active_item=next((item for item in items if item.key == current), None),
        )
        if isinstance(pick, NavigationSignal):
            return pick
        if isinstance(pick, list):
            chosen.extend(pick)
        return None

    await StepRunner.run(pick_project, ctx.quick_input)
    if not chosen:
        return False

    project_dir = project_home / chosen[0].label
    if project_dir.resolve() == project_home.resolve():
        return ctx.notifier.fail("You cannot open project home itself")

    logger.info(f"Opening project {project_dir}")
    ctx.project_dir = project_dir
    ctx.settings.last_project = str(project_dir)
    try:
        await asyncio.to_thread(ctx.settings.save)
    except OSError as e:
        logger.warning(f"Could not remember the opened project: {e}")
    return ctx.notifier.success(f"Opened {chosen[0].label}")
