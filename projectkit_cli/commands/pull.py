"""Pull the project repository from its remote."""

import logging

from projectkit_cli.commands.context import CommandContext
from projectkit_cli.git import GitCommandError, GitRepository
from projectkit_cli.progress import ProgressCancelledError


logger = logging.getLogger(__name__)


async def pull_changes(ctx: CommandContext) -> bool:
    repo = await GitRepository.open(ctx.project_dir)
    if repo is None:
        return ctx.notifier.fail(f"No Git repository found at {ctx.project_dir}")

    try:
        async with ctx.progress("Pull") as progress:
            progress.set(10, "Pulling from remote")
            try:
                await repo.pull()
            except GitCommandError as e:
                logger.warning(f"Pull failed: {e}")
                return ctx.notifier.fail(
                    "Pull failed, check your internet connection and Git output "
                    "for more details."
                )
            return ctx.notifier.success("Pull done")
    except ProgressCancelledError:
        return False
