"""Tests for the backup and pull commands with a mocked repository."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from projectkit_cli.commands import CommandContext
from projectkit_cli.commands.backup import backup_changes
from projectkit_cli.commands.pull import pull_changes
from projectkit_cli.git import GitCommandError, GitStatus
from projectkit_cli.stores import ConfigurationError, ProjectKitSettings


@pytest.fixture
def context(tmp_path, quick_input_host, progress_host, notifier):
    settings = ProjectKitSettings(
        git_user_name="Team", git_user_email="team@example.com"
    )
    return CommandContext(
        settings=settings,
        quick_input=quick_input_host,
        progress_host=progress_host,
        notifier=notifier,
        project_dir=tmp_path,
    )


@pytest.fixture
def repo():
    repo = MagicMock()
    repo.set_config = AsyncMock()
    repo.status = AsyncMock(return_value=GitStatus(working_tree_changes=["main.c"]))
    repo.commit = AsyncMock()
    repo.push = AsyncMock()
    repo.pull = AsyncMock()
    return repo


def open_returning(repo):
    return patch(
        "projectkit_cli.git.GitRepository.open", AsyncMock(return_value=repo)
    )


def push_error() -> GitCommandError:
    return GitCommandError(["push"], 128, "fatal: could not read from remote")


class TestBackup:
    @pytest.mark.asyncio
    async def test_commits_and_pushes(self, context, repo, notifier, progress_host):
        with open_returning(repo):
            assert await backup_changes(context) is True

        repo.set_config.assert_any_await("user.name", "Team")
        repo.set_config.assert_any_await("user.email", "team@example.com")
        message = repo.commit.await_args.args[0]
        assert message.startswith("Backup ")
        assert repo.commit.await_args.kwargs == {"all": True}
        repo.push.assert_awaited_once()
        assert notifier.successes == [
            "Backup complete, commit was created and pushed to remote server."
        ]
        assert progress_host.sink.total == 80

    @pytest.mark.asyncio
    async def test_clean_tree_only_pushes(self, context, repo, notifier):
        repo.status.return_value = GitStatus()

        with open_returning(repo):
            assert await backup_changes(context) is True

        repo.commit.assert_not_awaited()
        repo.push.assert_awaited_once()
        assert notifier.successes == ["No changes to commit", "Backup completed"]

    @pytest.mark.asyncio
    async def test_push_failure_keeps_commit(self, context, repo, notifier):
        repo.push.side_effect = push_error()

        with open_returning(repo):
            assert await backup_changes(context) is True

        assert notifier.successes == [
            "Backup incomplete, commit was created but failed to push to remote server."
        ]

    @pytest.mark.asyncio
    async def test_commit_failure(self, context, repo, notifier):
        repo.commit.side_effect = GitCommandError(["commit"], 1, "nothing added")

        with open_returning(repo):
            assert await backup_changes(context) is False

        repo.push.assert_not_awaited()
        assert notifier.failures == ["Commit failed"]

    @pytest.mark.asyncio
    async def test_no_repository(self, context, notifier, progress_host):
        with open_returning(None):
            assert await backup_changes(context) is False

        assert notifier.failures == [f"No Git repository found at {context.project_dir}"]
        assert progress_host.titles == []

    @pytest.mark.asyncio
    async def test_missing_identity_raises(self, context, repo, progress_host):
        context.settings.git_user_email = None

        with open_returning(repo), pytest.raises(ConfigurationError):
            await backup_changes(context)

        assert progress_host.released == 1


class TestPull:
    @pytest.mark.asyncio
    async def test_pull_done(self, context, repo, notifier):
        with open_returning(repo):
            assert await pull_changes(context) is True

        repo.pull.assert_awaited_once()
        assert notifier.successes == ["Pull done"]

    @pytest.mark.asyncio
    async def test_pull_failure(self, context, repo, notifier):
        repo.pull.side_effect = GitCommandError(["pull"], 1, "network down")

        with open_returning(repo):
            assert await pull_changes(context) is False

        assert notifier.failures == [
            "Pull failed, check your internet connection and Git output for more details."
        ]
