#!/usr/bin/env python3
"""
Main entry point for ProjectKit CLI.
"""

import logging
import os
import warnings
from datetime import datetime

from prompt_toolkit import print_formatted_text
from prompt_toolkit.formatted_text import HTML

from projectkit_cli.argparsers.main_parser import create_main_parser
from projectkit_cli.stores import get_projectkit_home
from projectkit_cli.terminal_compat import check_terminal, strict_mode_enabled


def setup_logging() -> None:
    """Log to a file under the ProjectKit home when DEBUG is set.

    The terminal belongs to the Textual screens, so logs never go to stdout.
    """
    debug_env = os.getenv("DEBUG", "false").lower()
    if debug_env != "1" and debug_env != "true":
        logging.disable(logging.WARNING)
        warnings.filterwarnings("ignore")
        return

    log_dir = get_projectkit_home() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    logging.basicConfig(
        filename=log_dir / f"projectkit_{timestamp}.log",
        level=logging.DEBUG,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def main() -> int:
    """Main entry point for the ProjectKit CLI.

    Returns:
        Process exit code, 0 when the command succeeded
    """
    parser = create_main_parser()
    args = parser.parse_args()
    setup_logging()

    terminal = check_terminal()
    if not terminal.usable:
        print_formatted_text(HTML(f"<yellow>Warning: {terminal.reason}</yellow>"))
        if strict_mode_enabled():
            return 2

    # Imported late so --help and --version stay fast
    from projectkit_cli.tui.app import ProjectKitApp

    try:
        app = ProjectKitApp(initial_command=args.command, project_dir=args.project)
        result = app.run()
    except KeyboardInterrupt:
        print_formatted_text(HTML("\n<yellow>Goodbye! 👋</yellow>"))
        return 130
    except Exception as e:
        print_formatted_text(HTML(f"<red>Error: {e}</red>"))
        raise

    return 1 if result is False else 0


if __name__ == "__main__":
    raise SystemExit(main())
