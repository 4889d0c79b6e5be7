from projectkit_cli.git.client import GitCommandError, GitRepository, GitStatus


__all__ = [
    "GitCommandError",
    "GitRepository",
    "GitStatus",
]
