"""Commit every change of the project and push it."""

import logging
from datetime import datetime

from projectkit_cli.commands.context import (
    CommandContext,
    setup_repository_configuration,
)
from projectkit_cli.git import GitCommandError, GitRepository
from projectkit_cli.progress import ProgressCancelledError
from projectkit_cli.utils import get_date_string


logger = logging.getLogger(__name__)


async def backup_changes(ctx: CommandContext) -> bool:
    repo = await GitRepository.open(ctx.project_dir)
    if repo is None:
        return ctx.notifier.fail(f"No Git repository found at {ctx.project_dir}")

    try:
        async with ctx.progress("Backup") as progress:
            progress.set(20, "Setting up repository configuration")
            await setup_repository_configuration(repo, ctx.settings)

            status = await repo.status()
            if status.is_clean:
                progress.set(40, "Pushing to remote")
                ctx.notifier.success("No changes to commit")

                try:
                    await repo.push()
                except GitCommandError as e:
                    logger.warning(f"Backup push failed: {e}")
                    return ctx.notifier.success(
                        "Backup incomplete, failed to push to remote server."
                    )
                return ctx.notifier.success("Backup completed")

            progress.set(60, "Creating commit")

            # Message: Backup 2023/10/04 01:23:45 +08
            try:
                await repo.commit(
                    f"Backup {get_date_string(datetime.now())}", all=True
                )
            except GitCommandError as e:
                logger.warning(f"Backup commit failed: {e}")
                return ctx.notifier.fail("Commit failed")

            progress.set(80, "Pushing to remote")

            try:
                await repo.push()
            except GitCommandError as e:
                logger.warning(f"Backup push failed: {e}")
                return ctx.notifier.success(
                    "Backup incomplete, commit was created but failed to push "
                    "to remote server."
                )
            return ctx.notifier.success(
                "Backup complete, commit was created and pushed to remote server."
            )
    except ProgressCancelledError:
        return False
