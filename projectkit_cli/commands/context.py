"""Everything a command needs from its surroundings."""

from dataclasses import dataclass, field
from pathlib import Path

from projectkit_cli.git import GitRepository
from projectkit_cli.progress import Notifier, ProgressHost, ProgressReporter
from projectkit_cli.stores import ProjectKitSettings
from projectkit_cli.wizard import QuickInputHost


@dataclass
class CommandContext:
    settings: ProjectKitSettings
    quick_input: QuickInputHost
    progress_host: ProgressHost
    notifier: Notifier
    # Repository the project commands (flow, backup, pull) operate on
    project_dir: Path = field(default_factory=Path.cwd)

    def progress(self, title: str, cancellable: bool = True) -> ProgressReporter:
        return ProgressReporter(
            title,
            host=self.progress_host,
            notifier=self.notifier,
            cancellable=cancellable,
        )


async def setup_repository_configuration(
    repo: GitRepository, settings: ProjectKitSettings
) -> None:
    """Apply the team commit identity to ``repo``."""
    await repo.set_config("user.name", settings.require("git_user_name"))
    await repo.set_config("user.email", settings.require("git_user_email"))
    await repo.set_config("commit.gpgsign", "false")
