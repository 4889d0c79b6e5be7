"""Main argument parser for ProjectKit CLI."""

import argparse
from pathlib import Path

from projectkit_cli import __version__
from projectkit_cli.commands import COMMANDS


def create_main_parser() -> argparse.ArgumentParser:
    """Create the main argument parser.

    Without a command the interactive command list opens. With one, the
    command runs straight away and the application exits when it finishes.

    Returns:
        The configured argument parser
    """
    command_lines = "\n".join(
        f"                projectkit {spec.name:<10} # {spec.description}"
        for spec in COMMANDS
    )
    parser = argparse.ArgumentParser(
        prog="projectkit",
        description="ProjectKit CLI - create, build, upload and back up projects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
            Settings are read from $PROJECTKIT_HOME/settings.json
            (~/.projectkit/settings.json by default).

            Examples:
                projectkit                   # Open the command list
{command_lines}
        """,
    )

    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"ProjectKit CLI {__version__}",
        help="Show the version number and exit",
    )

    parser.add_argument(
        "command",
        nargs="?",
        choices=[spec.name for spec in COMMANDS],
        help="Command to run immediately",
    )

    parser.add_argument(
        "--project",
        type=Path,
        default=None,
        help="Project directory used by flow, backup and pull "
        "(default: the last opened project, else cwd)",
    )

    return parser
