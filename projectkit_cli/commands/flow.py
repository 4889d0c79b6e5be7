"""Build, wait for the device, upload."""

import asyncio
import logging
import time
from typing import Literal

from projectkit_cli.commands.context import CommandContext
from projectkit_cli.commands.process import run_shell_command
from projectkit_cli.progress import ProgressCancelledError


logger = logging.getLogger(__name__)

BuildKind = Literal["build", "rebuild"]


async def build_project(ctx: CommandContext, kind: BuildKind) -> bool:
    command = ctx.settings.require(f"{kind}_command")
    result = await run_shell_command(command, ctx.project_dir)
    return result.ok


async def is_device_connected(ctx: CommandContext) -> bool:
    command = ctx.settings.device_check_command
    if not command:
        return True
    result = await run_shell_command(command, ctx.project_dir)
    return result.ok


async def upload_program(ctx: CommandContext) -> bool:
    result = await run_shell_command(
        ctx.settings.require("upload_command"), ctx.project_dir
    )
    return result.ok


async def run_flow(ctx: CommandContext, kind: BuildKind = "build") -> bool:
    """Build the project and upload it once the device is connected."""
    try:
        async with ctx.progress("Flow") as progress:
            progress.set(20, "Building")

            if not await build_project(ctx, kind):
                return ctx.notifier.fail("Build failed")

            progress.set(40)

            attempts = 0
            interval = ctx.settings.device_poll_interval
            while True:
                started = time.monotonic()
                if await is_device_connected(ctx):
                    break
                elapsed = time.monotonic() - started

                attempts += 1
                progress.set(None, f"Waiting for device... ({attempts} attempts)")

                await asyncio.sleep(max(0.0, interval - elapsed))

            progress.set(60, "Starting to upload")

            if await upload_program(ctx):
                return ctx.notifier.success("Flow done")
            return ctx.notifier.fail("Upload failed")
    except ProgressCancelledError:
        logger.info("Flow cancelled")
        return False
