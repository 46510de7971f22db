"""Login items of "System Events" on macOS, keyed by absolute path.

The ``name`` of a login item cannot be chosen: System Events derives it from
the executable or bundle, so the only reliable identity is the path.
``enable`` does not look for an existing item first and can create duplicates.
"""
from __future__ import annotations

import logging
import os
from typing import Any, Awaitable, Callable

from autorun.core.adapters import AutorunAdapter
from autorun.core.command_runner import run_command_output
from autorun.core.errors import (
    AutorunDisableFailed,
    AutorunEnableFailed,
    AutorunIsSetFailed,
    ChildProcessFailed,
)
from autorun.core.models import AutorunContext


logger = logging.getLogger(__name__)

ScriptRunner = Callable[[str], Awaitable[Any]]

_ENABLE_SCRIPT = (
    'tell application "System Events" to make login item at end'
    " with properties {{path:{path}, hidden:false}}"
)

_IS_SET_SCRIPT = """\
tell application "System Events"
set loginList to get the properties of every login item
repeat with loginItem in loginList
if path of loginItem is equal to {path} then
return 1
end if
end repeat
return 0
end tell"""

_DISABLE_SCRIPT = """\
tell application "System Events"
set loginList to get the properties of every login item
repeat with loginItem in loginList
if path of loginItem is equal to {path} then
set loginItemName to name of loginItem
delete login item loginItemName
return 1
end if
end repeat
return 0
end tell"""


def applescript_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def render_script(template: str, path: str) -> str:
    return template.format(path=applescript_string(path))


def osascript_args(source: str) -> list[str]:
    args: list[str] = []
    for line in source.splitlines():
        args.extend(["-e", line])
    return args


async def run_osascript(source: str) -> str:
    """Run AppleScript source with ``osascript`` and return what it printed."""
    exit_code, output = await run_command_output("osascript", osascript_args(source))
    if exit_code != 0:
        raise ChildProcessFailed("", exit_code=exit_code)
    return output


def _is_hit(result: Any) -> bool:
    return str(result).strip() == "1"


class MacLoginItemsAdapter(AutorunAdapter):
    platform = "darwin"

    def __init__(self, *, script_runner: ScriptRunner = run_osascript) -> None:
        self._script_runner = script_runner

    async def is_set(self, context: AutorunContext) -> bool:
        try:
            result = await self._run(render_script(_IS_SET_SCRIPT, context.executable_path))
        except Exception as exc:
            logger.warning("Login item lookup failed for %s: %s", context.executable_path, exc)
            raise AutorunIsSetFailed(
                self.platform, "Could not check if autostart was set using AppleScript", cause=exc
            ) from exc
        if result is None or not str(result).strip():
            raise AutorunIsSetFailed(
                self.platform, "AppleScript returned no result for the login item lookup"
            )
        return _is_hit(result)

    async def enable(self, context: AutorunContext) -> bool:
        path = context.executable_path
        if not os.path.exists(path):
            raise AutorunEnableFailed(
                self.platform, "Could not enable autorun. Path to executable invalid."
            )
        try:
            await self._run(render_script(_ENABLE_SCRIPT, path))
        except Exception as exc:
            logger.warning("Could not add login item %s: %s", path, exc)
            raise AutorunEnableFailed(
                self.platform, "Could not enable autorun using AppleScript", cause=exc
            ) from exc
        logger.info("Added login item %s", path)
        return True

    async def disable(self, context: AutorunContext) -> bool:
        try:
            result = await self._run(render_script(_DISABLE_SCRIPT, context.executable_path))
        except Exception as exc:
            logger.warning("Could not remove login item %s: %s", context.executable_path, exc)
            raise AutorunDisableFailed(
                self.platform, "Could not disable autorun using AppleScript", cause=exc
            ) from exc
        removed = _is_hit(result)
        if removed:
            logger.info("Removed login item %s", context.executable_path)
        return removed

    async def _run(self, source: str) -> Any:
        logger.debug("Running AppleScript:\n%s", source)
        return await self._script_runner(source)
