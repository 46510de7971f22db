from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Protocol, Sequence

from autorun.core.errors import ChildProcessFailed


logger = logging.getLogger(__name__)


class CommandRunner(Protocol):
    def __call__(self, command: str, args: Sequence[str], **options: Any) -> Awaitable[int]: ...


async def run_command_output(command: str, args: Sequence[str], **options: Any) -> tuple[int, str]:
    """Run ``command`` to completion and return its exit code and stdout.

    Anything written to stderr counts as a failure, even when the exit code
    is 0. ``options`` go straight to ``asyncio.create_subprocess_exec``.
    """
    logger.debug("Spawning %s %s", command, " ".join(args))
    try:
        proc = await asyncio.create_subprocess_exec(
            command,
            *args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            **options,
        )
    # NotImplementedError: the running loop cannot spawn (Windows selector loop).
    except (OSError, NotImplementedError, ValueError) as exc:
        raise ChildProcessFailed("", cause=exc) from exc

    stdout, stderr = await proc.communicate()
    text = stdout.decode(errors="replace")
    err_text = stderr.decode(errors="replace")
    if text:
        logger.debug("%s stdout: %s", command, text.strip())

    if err_text:
        raise ChildProcessFailed(err_text, exit_code=proc.returncode)
    return int(proc.returncode or 0), text


async def run_command(command: str, args: Sequence[str], **options: Any) -> int:
    exit_code, _ = await run_command_output(command, args, **options)
    return exit_code
