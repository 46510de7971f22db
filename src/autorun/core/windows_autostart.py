from __future__ import annotations

import logging
import subprocess

from autorun.core.adapters import AutorunAdapter
from autorun.core.command_runner import CommandRunner, run_command
from autorun.core.errors import (
    AutorunDisableFailed,
    AutorunEnableFailed,
    AutorunError,
    ChildProcessFailed,
)
from autorun.core.models import WINDOWS_RUN_KEY, AutorunContext


logger = logging.getLogger(__name__)


class WindowsRegistryAdapter(AutorunAdapter):
    """Run-key values keyed by application name, edited by spawning ``reg.exe``."""

    def __init__(
        self,
        *,
        run_key: str = WINDOWS_RUN_KEY,
        runner: CommandRunner = run_command,
        platform: str = "win32",
    ) -> None:
        self.run_key = run_key
        self.platform = platform
        self._runner = runner

    async def is_set(self, context: AutorunContext) -> bool:
        # A missing value and a broken reg.exe both land here as False.
        try:
            exit_code = await self._reg("QUERY", self.run_key, "/v", context.app_name)
        except ChildProcessFailed as exc:
            logger.debug("Run value %r not found: %s", context.app_name, exc.output.strip())
            return False
        return exit_code == 0

    async def enable(self, context: AutorunContext) -> bool:
        return await self._change(
            AutorunEnableFailed,
            "Could not enable autorun using the registry",
            "ADD",
            self.run_key,
            "/f",
            "/v",
            context.app_name,
            "/t",
            "REG_SZ",
            "/d",
            context.executable_path,
        )

    async def disable(self, context: AutorunContext) -> bool:
        return await self._change(
            AutorunDisableFailed,
            "Could not disable autorun using the registry",
            "DELETE",
            self.run_key,
            "/f",
            "/v",
            context.app_name,
        )

    async def _change(
        self, error_type: type[AutorunError], message: str, verb: str, *args: str
    ) -> bool:
        try:
            exit_code = await self._reg(verb, *args)
        except ChildProcessFailed as exc:
            if exc.exit_code:
                # reg.exe ran and refused, e.g. DELETE of a value that is not there.
                logger.info("REG %s exited with %s: %s", verb, exc.exit_code, exc.output.strip())
                return False
            logger.warning("REG %s failed: %s", verb, exc.output.strip() or exc.cause)
            raise error_type(self.platform, message, cause=exc) from exc
        return exit_code == 0

    async def _reg(self, verb: str, *args: str) -> int:
        options = {}
        creationflags = getattr(subprocess, "CREATE_NO_WINDOW", 0)
        if creationflags:
            options["creationflags"] = creationflags
        # reg.exe is spawned directly so no shell parses & | ^ < > in names or paths.
        return await self._runner("reg", [verb, *args], **options)
