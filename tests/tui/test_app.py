"""Tests for ProjectKitApp, its progress notice and the exit modal."""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest
from textual.widgets import Button, OptionList

from projectkit_cli.commands import BUSY_MESSAGE, COMMANDS
from projectkit_cli.commands.process import ProcessResult
from projectkit_cli.progress import ProgressCancelledError, ProgressReporter
from projectkit_cli.stores import ProjectKitSettings
from projectkit_cli.tui.app import ProjectKitApp
from projectkit_cli.tui.modals import ExitConfirmationModal
from projectkit_cli.tui.surfaces import QuickPickScreen
from projectkit_cli.tui.widgets import ProgressNotice


@pytest.fixture
def app(tmp_path):
    settings = ProjectKitSettings(
        build_command="make",
        upload_command="make upload",
        git_user_name="Team",
        git_user_email="team@example.com",
    )
    return ProjectKitApp(settings=settings, project_dir=tmp_path)


async def wait_for(pilot, predicate, attempts: int = 100) -> None:
    for _ in range(attempts):
        if predicate():
            return
        await pilot.pause(0.02)
    raise AssertionError("condition not reached")


class TestCommandList:
    @pytest.mark.asyncio
    async def test_lists_every_command(self, app):
        async with app.run_test():
            command_list = app.query_one("#command_list", OptionList)
            assert command_list.option_count == len(COMMANDS)
            assert [
                command_list.get_option_at_index(i).id for i in range(len(COMMANDS))
            ] == [spec.name for spec in COMMANDS]

    @pytest.mark.asyncio
    async def test_failed_command_records_result(self, app):
        with patch(
            "projectkit_cli.git.GitRepository.open", AsyncMock(return_value=None)
        ):
            async with app.run_test():
                worker = app.run_command("pull")
                await worker.wait()

                assert worker.result is False
                assert app.last_result is False
                assert app.gate.busy is False

    @pytest.mark.asyncio
    async def test_open_switches_project(self, app, tmp_path):
        home = tmp_path / "projects"
        (home / "blinky").mkdir(parents=True)
        app.settings.project_home = str(home)

        async with app.run_test() as pilot:
            worker = app.run_command("open")
            await wait_for(
                pilot,
                lambda: isinstance(app.screen, QuickPickScreen)
                and bool(app.screen.query("#quick_pick_list")),
            )
            await pilot.pause()
            picker = app.screen.query_one("#quick_pick_list", OptionList)
            picker.highlighted = 1
            await pilot.press("enter")
            await worker.wait()

            assert worker.result is True
            assert app.project_dir == home / "blinky"
            assert app.build_context().project_dir == home / "blinky"

        reopened = ProjectKitApp(settings=ProjectKitSettings.load())
        assert reopened.project_dir == home / "blinky"

    def test_project_flag_wins_over_last_project(self, tmp_path):
        settings = ProjectKitSettings(last_project=str(tmp_path / "old"))

        assert ProjectKitApp(settings=settings).project_dir == tmp_path / "old"
        assert (
            ProjectKitApp(settings=settings, project_dir=tmp_path).project_dir
            == tmp_path
        )

    @pytest.mark.asyncio
    async def test_missing_configuration_is_reported(self, app):
        app.settings.upload_command = None

        async def run(command, cwd):
            return ProcessResult(returncode=0, output="")

        with (
            patch("projectkit_cli.commands.flow.run_shell_command", side_effect=run),
            patch.object(app.notifier, "fail", wraps=app.notifier.fail) as fail,
        ):
            async with app.run_test():
                worker = app.run_command("flow")
                await worker.wait()

        assert worker.result is False
        fail.assert_called_once_with(
            "Flow: build failed: Configuration upload_command is not defined"
        )


class TestOperations:
    @pytest.mark.asyncio
    async def test_second_command_is_rejected_and_ctrl_x_cancels(self, app):
        release = asyncio.Event()

        async def run(command, cwd):
            await release.wait()
            return ProcessResult(returncode=0, output="")

        with (
            patch("projectkit_cli.commands.flow.run_shell_command", side_effect=run),
            patch.object(app.notifier, "fail", wraps=app.notifier.fail) as fail,
        ):
            async with app.run_test() as pilot:
                flow = app.run_command("flow")
                await wait_for(
                    pilot,
                    lambda: bool(app.query(ProgressNotice))
                    and app.query_one(ProgressNotice).message == "Building",
                )
                notice = app.query_one(ProgressNotice)
                assert notice.progress == 20
                assert notice.message == "Building"

                pull = app.run_command("pull")
                await pull.wait()
                assert pull.result is False
                fail.assert_called_with(BUSY_MESSAGE)

                await pilot.press("ctrl+x")
                release.set()
                await flow.wait()

                assert flow.result is False
                fail.assert_called_with("Operation cancelled by user")
                await wait_for(pilot, lambda: not app.query(ProgressNotice))
                assert app.gate.busy is False

    @pytest.mark.asyncio
    async def test_notice_cancel_button(self, app):
        async with app.run_test() as pilot:
            reporter = ProgressReporter(
                "Backup", host=app.progress_host, notifier=app.notifier
            )
            await reporter.init()
            await pilot.pause()
            reporter.set(40, "Committing")
            notice = app.query_one(ProgressNotice)
            assert notice.progress == 40

            notice.query_one("#progress_cancel", Button).press()
            await pilot.pause()
            assert notice.query_one("#progress_cancel", Button).disabled is True
            assert reporter.is_cancelled is True
            with pytest.raises(ProgressCancelledError):
                reporter.assert_continue()

            reporter.resolve()
            await reporter.wait_released()
            assert not app.query(ProgressNotice)

    @pytest.mark.asyncio
    async def test_ctrl_x_without_operation(self, app):
        async with app.run_test() as pilot:
            await pilot.press("ctrl+x")
            assert app.progress_host.has_active is False


class TestExitModal:
    @pytest.mark.asyncio
    async def test_quit_while_busy_asks_first(self, app):
        release = asyncio.Event()

        async def run(command, cwd):
            await release.wait()
            return ProcessResult(returncode=1, output="")

        with patch("projectkit_cli.commands.flow.run_shell_command", side_effect=run):
            async with app.run_test() as pilot:
                flow = app.run_command("flow")
                await wait_for(pilot, lambda: app.gate.busy)

                await app.action_quit()
                await pilot.pause()
                assert isinstance(app.screen, ExitConfirmationModal)

                await pilot.click("#no")
                await pilot.pause()
                assert not isinstance(app.screen, ExitConfirmationModal)

                release.set()
                await flow.wait()
                assert flow.result is False
