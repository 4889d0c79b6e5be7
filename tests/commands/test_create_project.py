"""Tests for the create project wizard."""

import asyncio

import pytest

from projectkit_cli.commands import CommandContext
from projectkit_cli.commands.create_project import (
    NAME_PROMPT,
    OPTION_INIT_GIT,
    OPTION_PULL_TEMPLATE,
    create_project,
    list_templates,
    validate_project_name,
)
from projectkit_cli.progress import CANCELLED_MESSAGE
from projectkit_cli.stores import ConfigurationError, ProjectKitSettings
from projectkit_cli.wizard import QuickInputButtons
from tests.fakes import settle, wait_until


@pytest.fixture
def workspace(tmp_path):
    templates = tmp_path / "templates" / "main"
    for name in ("basic", "advanced"):
        (templates / name / "src").mkdir(parents=True)
        (templates / name / "src" / "main.c").write_text(f"// {name}\n")
    (templates / ".git").mkdir()
    (templates / "README.md").write_text("templates\n")
    return tmp_path


@pytest.fixture
def context(workspace, quick_input_host, progress_host, notifier):
    settings = ProjectKitSettings(
        project_home=str(workspace / "projects"),
        template_home=str(workspace / "templates"),
        main_template_repo="main",
        git_user_name="Team",
        git_user_email="team@example.com",
    )
    return CommandContext(
        settings=settings,
        quick_input=quick_input_host,
        progress_host=progress_host,
        notifier=notifier,
        project_dir=workspace,
    )


def option(pick, key):
    return next(item for item in pick.items if item.key == key)


class TestCreateProjectWizard:
    @pytest.mark.asyncio
    async def test_back_then_cancel_reports_once(
        self, context, quick_input_host, progress_host, notifier, workspace
    ):
        task = asyncio.ensure_future(create_project(context))

        options = await quick_input_host.next_shown()
        assert options.can_select_many is True
        assert [item.key for item in options.selected_items] == [
            OPTION_PULL_TEMPLATE,
            OPTION_INIT_GIT,
        ]
        options.accept_items(option(options, OPTION_INIT_GIT))

        templates = await quick_input_host.next_shown()
        assert QuickInputButtons.BACK in templates.buttons
        templates.press(QuickInputButtons.BACK)

        options_again = await quick_input_host.next_shown()
        assert options_again.title == options.title
        options_again.accept_items(option(options_again, OPTION_INIT_GIT))

        templates_again = await quick_input_host.next_shown()
        templates_again.choose(option(templates_again, "basic"))

        name_box = await quick_input_host.next_shown()
        name_box.hide()

        assert await asyncio.wait_for(task, 5) is False
        assert notifier.failures == [CANCELLED_MESSAGE]
        assert notifier.successes == []
        assert not (workspace / "projects" / "basic").exists()
        assert progress_host.released == 1
        assert quick_input_host.visible == []

    @pytest.mark.asyncio
    async def test_progress_cancel_closes_open_prompt(
        self, context, quick_input_host, progress_host, notifier
    ):
        task = asyncio.ensure_future(create_project(context))

        options = await quick_input_host.next_shown()
        options.accept_items()
        templates = await quick_input_host.next_shown()
        templates.choose(option(templates, "advanced"))
        name_box = await quick_input_host.next_shown()

        progress_host.cancel()

        assert await asyncio.wait_for(task, 5) is False
        assert name_box.disposed is True
        assert notifier.failures == [CANCELLED_MESSAGE]
        assert progress_host.released == 1

    @pytest.mark.asyncio
    async def test_creates_project_from_template(
        self, context, quick_input_host, progress_host, notifier, workspace
    ):
        task = asyncio.ensure_future(create_project(context))

        options = await quick_input_host.next_shown()
        options.accept_items()

        templates = await quick_input_host.next_shown()
        assert [item.label for item in templates.items] == ["advanced", "basic"]
        assert templates.items[0].description.startswith("Updated ")
        templates.choose(option(templates, "basic"))

        name_box = await quick_input_host.next_shown()
        await settle()
        assert name_box.prompt == NAME_PROMPT
        name_box.type("blinky")
        await wait_until(lambda: name_box.validation_message is None)
        assert "blinky" in name_box.prompt
        name_box.accept()

        assert await asyncio.wait_for(task, 5) is True
        project_dir = workspace / "projects" / "blinky"
        assert (project_dir / "src" / "main.c").read_text() == "// basic\n"
        assert notifier.successes == [
            f"Project created successfully at {project_dir}"
        ]
        assert progress_host.sink.total == 45

    @pytest.mark.asyncio
    async def test_missing_setting_raises(self, context):
        context.settings.project_home = None

        with pytest.raises(ConfigurationError, match="project_home"):
            await create_project(context)


class TestProjectName:
    @pytest.mark.asyncio
    async def test_length_limits(self, tmp_path):
        assert "between 3 and 62" in await validate_project_name("ab", tmp_path)
        assert "between 3 and 62" in await validate_project_name("x" * 63, tmp_path)
        assert await validate_project_name("abc", tmp_path) is None

    @pytest.mark.asyncio
    async def test_path_separators_rejected(self, tmp_path):
        message = await validate_project_name("a/b/c", tmp_path)
        assert message == "Project name cannot contain path separators"

    @pytest.mark.asyncio
    async def test_existing_folder_rejected(self, tmp_path):
        (tmp_path / "taken").mkdir()
        (tmp_path / "file.txt").write_text("")

        assert (
            await validate_project_name("taken", tmp_path)
            == "The project folder already exists"
        )
        assert (
            await validate_project_name("file.txt", tmp_path)
            == "The project folder already exists but is not a directory"
        )


def test_list_templates_skips_files_and_git(workspace):
    assert list_templates(workspace / "templates" / "main") == ["advanced", "basic"]


def test_list_templates_missing_repository(tmp_path):
    assert list_templates(tmp_path / "nowhere") == []
