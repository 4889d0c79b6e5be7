"""Checks that the terminal can host the wizard screens.

The pickers and input boxes read keys from stdin and draw an 80 column frame
on stdout, so both streams must be terminals and the window must be large
enough for the frame.
"""

import os
import shutil
import sys
from dataclasses import dataclass, field


STRICT_TERMINAL_ENV = "PROJECTKIT_CLI_STRICT_TERMINAL"

# Width of the wizard frame plus its border, and room for the longest picker
MIN_COLUMNS = 80
MIN_LINES = 20


@dataclass(frozen=True)
class TerminalCheck:
    problems: list[str] = field(default_factory=list)
    size: os.terminal_size | None = None

    @property
    def usable(self) -> bool:
        return not self.problems

    @property
    def reason(self) -> str | None:
        return "; ".join(self.problems) or None


def _is_tty(stream: object) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def check_terminal(
    *,
    stdin: object | None = None,
    stdout: object | None = None,
    size: os.terminal_size | None = None,
) -> TerminalCheck:
    """Collect every reason the wizard screens cannot be used right now."""
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout

    problems = []
    if not _is_tty(stdin):
        problems.append("stdin is not a terminal, pickers cannot read keys")
    if not _is_tty(stdout):
        problems.append("stdout is not a terminal, wizard screens cannot be drawn")
        return TerminalCheck(problems=problems)

    if size is None:
        size = shutil.get_terminal_size()
    if size.columns < MIN_COLUMNS or size.lines < MIN_LINES:
        problems.append(
            f"terminal is {size.columns}x{size.lines}, the wizard screens need "
            f"at least {MIN_COLUMNS}x{MIN_LINES}"
        )
    return TerminalCheck(problems=problems, size=size)


def strict_mode_enabled() -> bool:
    """Refuse to start on an unusable terminal instead of warning."""
    value = os.environ.get(STRICT_TERMINAL_ENV, "")
    return value.strip().lower() in {"1", "true", "yes", "on"}
