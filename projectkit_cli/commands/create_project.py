"""Create a project from a template through a three step wizard.

Steps:
    1. choose options     (pull the latest template, initialise Git)
    2. choose template    (subdirectories of the template repository)
    3. enter project name (validated against the project home)

The whole command runs inside one progress indicator. Cancelling the
indicator while a prompt is visible closes the prompt, which ends the wizard.
"""

import asyncio
import logging
import shutil
import stat
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from projectkit_cli.commands.context import (
    CommandContext,
    setup_repository_configuration,
)
from projectkit_cli.git import GitCommandError, GitRepository
from projectkit_cli.progress import CANCELLED_MESSAGE, ProgressCancelledError
from projectkit_cli.utils import make_dir, stat_path, time_since
from projectkit_cli.wizard import (
    InputBox,
    NavigationSignal,
    QuickPickItem,
    Step,
    StepRunner,
)


logger = logging.getLogger(__name__)

TOTAL_STEPS = 3
OPTION_PULL_TEMPLATE = "pull_template"
OPTION_INIT_GIT = "init_git"
NAME_PROMPT = "Please enter the name of the project to create"
MIN_NAME_LENGTH = 3
MAX_NAME_LENGTH = 62


@dataclass
class CreateProjectState:
    """Choices accumulated across the wizard steps."""

    is_pull_template: bool = True
    is_init_git: bool = True
    template_name: str | None = None
    template_dir: Path | None = None
    project_name: str | None = None
    project_dir: Path | None = None
    # A step already told the user why the wizard stopped
    error_reported: bool = False


def create_options() -> list[QuickPickItem]:
    return [
        QuickPickItem(
            key=OPTION_PULL_TEMPLATE,
            label="Pull the latest template from remote server",
        ),
        QuickPickItem(
            key=OPTION_INIT_GIT,
            label="Initialize a Git repository",
            detail="Unselect to only copy the template files.",
        ),
    ]


def list_templates(template_repo_dir: Path) -> list[str]:
    """Template names are the directories of the template repository."""
    if not template_repo_dir.is_dir():
        return []
    return sorted(
        entry.name
        for entry in template_repo_dir.iterdir()
        if entry.is_dir() and entry.name != ".git"
    )


async def describe_template(template_dir: Path) -> str | None:
    template_stat = await stat_path(template_dir)
    if template_stat is None:
        return None
    modified = datetime.fromtimestamp(template_stat.st_mtime, tz=timezone.utc)
    return f"Updated {time_since(modified)} ago"


async def validate_project_name(name: str, project_home: Path) -> str | None:
    """Return an error message for ``name``, or None when it can be used."""
    name = name.strip()
    if not MIN_NAME_LENGTH <= len(name) <= MAX_NAME_LENGTH:
        return (
            f"Project name must be between {MIN_NAME_LENGTH} and "
            f"{MAX_NAME_LENGTH} characters"
        )
    if name in (".", "..") or "/" in name or "\\" in name:
        return "Project name cannot contain path separators"

    project_dir_stat = await stat_path(project_home / name)
    if project_dir_stat is not None:
        if stat.S_ISDIR(project_dir_stat.st_mode):
            return "The project folder already exists"
        return "The project folder already exists but is not a directory"
    return None


async def create_project(ctx: CommandContext) -> bool:
    settings = ctx.settings
    project_home = Path(settings.require("project_home")).expanduser()
    template_repo_dir = Path(settings.require("template_home")).expanduser() / (
        settings.require("main_template_repo")
    )
    state = CreateProjectState()

    try:
        async with ctx.progress("Creating Project") as progress:

            async def pick_create_options(
                runner: StepRunner,
            ) -> Step | NavigationSignal | None:
                progress.set(5, "Choosing options to create project", runner.dispose)

                options = create_options()
                pick = await runner.show_quick_pick(
                    title="Choose options to create project",
                    step=1,
                    total_steps=TOTAL_STEPS,
                    placeholder="Press enter to continue",
                    ignore_focus_out=True,
                    can_select_many=True,
                    selected_items=options,
                    items=options,
                )
                if isinstance(pick, NavigationSignal):
                    return pick

                keys = {item.key for item in pick}
                state.is_pull_template = OPTION_PULL_TEMPLATE in keys
                state.is_init_git = OPTION_INIT_GIT in keys
                return choose_template

            async def choose_template(
                runner: StepRunner,
            ) -> Step | NavigationSignal | None:
                if state.is_pull_template:
                    progress.set(10, "Pulling template repository", runner.dispose)
                    if not await pull_template(template_repo_dir):
                        state.error_reported = True
                        return None

                progress.set(15, "Choosing template", runner.dispose)

                templates = await asyncio.to_thread(list_templates, template_repo_dir)
                if not templates:
                    state.error_reported = True
                    ctx.notifier.fail("No templates available")
                    return None

                pick = await runner.show_quick_pick(
                    title="Choose template",
                    step=2,
                    total_steps=TOTAL_STEPS,
                    placeholder="Select a template to create project from",
                    ignore_focus_out=True,
                    items=[
                        QuickPickItem(
                            label=name,
                            key=name,
                            description=await describe_template(
                                template_repo_dir / name
                            ),
                        )
                        for name in templates
                    ],
                )
                if isinstance(pick, NavigationSignal):
                    return pick
                if not pick:
                    return None

                state.template_name = pick[0].key
                state.template_dir = template_repo_dir / pick[0].key
                return enter_project_name

            async def enter_project_name(
                runner: StepRunner,
            ) -> Step | NavigationSignal | None:
                progress.set(35, "Entering project name", runner.dispose)

                async def validate(name: str, box: InputBox) -> str | None:
                    message = await validate_project_name(name, project_home)
                    if message:
                        box.prompt = NAME_PROMPT
                    else:
                        box.prompt = (
                            f'The project folder will be "{project_home / name.strip()}"'
                        )
                    return message

                result = await runner.show_input_box(
                    title="Enter the project name",
                    step=3,
                    total_steps=TOTAL_STEPS,
                    value="",
                    placeholder="Project name",
                    prompt=NAME_PROMPT,
                    ignore_focus_out=True,
                    validate=validate,
                )
                if isinstance(result, NavigationSignal):
                    return result

                state.project_name = result.strip()
                state.project_dir = project_home / state.project_name
                return None

            async def pull_template(path: Path) -> bool:
                repo = await GitRepository.open(path)
                if repo is None:
                    return ctx.notifier.fail("Failed to open template repository")

                status = await repo.status()
                if status.index_changes:
                    return ctx.notifier.fail(
                        "Template pull failed, repository has uncommitted changes."
                    )

                try:
                    await repo.pull()
                except GitCommandError as e:
                    logger.warning(f"Template pull failed: {e}")
                    ctx.notifier.success(
                        "Template pull failed, check your internet connection."
                    )
                    return True
                ctx.notifier.success("Template pull done")
                return True

            if not await make_dir(project_home):
                return ctx.notifier.fail("Failed to create project home directory")

            await StepRunner.run(pick_create_options, ctx.quick_input)

            progress.assert_continue()
            if state.project_dir is None or state.template_dir is None:
                if state.error_reported:
                    return False
                return ctx.notifier.fail(CANCELLED_MESSAGE)

            progress.set(45, "Copying template to the project directory")
            try:
                await asyncio.to_thread(
                    shutil.copytree, state.template_dir, state.project_dir
                )
            except OSError as e:
                logger.warning(f"Template copy failed: {e}")
                return ctx.notifier.fail(
                    "Failed to copy template to the project directory"
                )

            if state.is_init_git:
                progress.set(55, "Initializing project Git repository")
                try:
                    repo = await GitRepository.init(state.project_dir)
                except GitCommandError as e:
                    logger.warning(f"git init failed: {e}")
                    return ctx.notifier.fail(
                        "Failed to initialize project Git repository"
                    )

                progress.set(65, "Creating initial commit")
                await setup_repository_configuration(repo, settings)
                try:
                    await repo.commit("Initial commit", all=True)
                except GitCommandError as e:
                    logger.warning(f"Initial commit failed: {e}")
                    return ctx.notifier.fail("Commit failed")

            return ctx.notifier.success(
                f"Project created successfully at {state.project_dir}"
            )
    except ProgressCancelledError:
        return False
