"""Running the configured build / upload / device check commands."""

import asyncio
import logging
import os
from dataclasses import dataclass


logger = logging.getLogger(__name__)


@dataclass
class ProcessResult:
    returncode: int
    output: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


async def run_shell_command(command: str, cwd: str | os.PathLike) -> ProcessResult:
    """Run ``command`` through the shell and collect its combined output."""
    logger.debug(f"Running '{command}' in {cwd}")
    process = await asyncio.create_subprocess_shell(
        command,
        cwd=str(cwd),
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.STDOUT,
    )
    stdout, _ = await process.communicate()
    result = ProcessResult(
        returncode=process.returncode if process.returncode is not None else -1,
        output=stdout.decode(errors="replace") if stdout else "",
    )
    if not result.ok:
        logger.info(f"'{command}' exited with {result.returncode}")
    return result
