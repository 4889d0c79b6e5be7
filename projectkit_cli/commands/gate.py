"""Single-flight gate for user commands."""

import logging
from collections.abc import Awaitable, Callable

from projectkit_cli.progress import Notifier


logger = logging.getLogger(__name__)

BUSY_MESSAGE = "Please wait for the previous command to finish."


class CommandGate:
    """Lets one command run at a time and rejects the others.

    The check and the claim happen without an await in between, so on a
    single event loop no two commands can both pass the gate.
    """

    def __init__(self, notifier: Notifier) -> None:
        self._notifier = notifier
        self._running: str | None = None

    @property
    def running(self) -> str | None:
        """Name of the command in progress, if any."""
        return self._running

    @property
    def busy(self) -> bool:
        return self._running is not None

    async def run(self, name: str, command: Callable[[], Awaitable[bool]]) -> bool:
        if self._running is not None:
            logger.info(f"Rejected '{name}' while '{self._running}' is running")
            return self._notifier.fail(BUSY_MESSAGE)

        self._running = name
        logger.debug(f"Command '{name}' started")
        try:
            return await command()
        finally:
            self._running = None
            logger.debug(f"Command '{name}' finished")
