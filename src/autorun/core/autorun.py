"""Enable, disable and query launch-at-login for one application.

macOS identifies a login item by ``executable_path`` and Windows identifies a
Run-key value by ``app_name``. Keep both fixed for one application, otherwise
``is_set`` and ``disable`` will not find what ``enable`` created.
"""
from __future__ import annotations

import sys
from typing import Awaitable, Callable, Optional

from autorun.core.adapters import AutorunAdapter, adapter_for_platform, is_supported_platform
from autorun.core.errors import AutorunError, PlatformUnsupported
from autorun.core.identity import default_executable_path
from autorun.core.models import DEFAULT_APP_NAME, AutorunContext


Callback = Callable[[Optional[AutorunError], Optional[bool]], None]


class Autorun:
    def __init__(
        self,
        app_name: str | None = None,
        executable_path: str | None = None,
        *,
        platform: str | None = None,
        adapter: AutorunAdapter | None = None,
    ) -> None:
        self._platform = platform or sys.platform
        self.context = AutorunContext(
            app_name=app_name or DEFAULT_APP_NAME,
            executable_path=executable_path or default_executable_path(self._platform),
        )
        self._adapter = adapter or adapter_for_platform(self._platform)

    @property
    def app_name(self) -> str:
        return self.context.app_name

    @property
    def executable_path(self) -> str:
        return self.context.executable_path

    @property
    def platform(self) -> str:
        return self._platform

    def is_platform_supported(self) -> bool:
        return is_supported_platform(self._platform)

    async def is_set(self, callback: Callback | None = None) -> bool | None:
        return await self._dispatch(self._adapter.is_set, callback)

    async def enable(self, callback: Callback | None = None) -> bool | None:
        return await self._dispatch(self._adapter.enable, callback)

    async def disable(self, callback: Callback | None = None) -> bool | None:
        return await self._dispatch(self._adapter.disable, callback)

    async def set(self, enabled: bool, callback: Callback | None = None) -> bool | None:
        if enabled:
            return await self.enable(callback)
        return await self.disable(callback)

    async def _dispatch(
        self,
        operation: Callable[[AutorunContext], Awaitable[bool]],
        callback: Callback | None,
    ) -> bool | None:
        try:
            if not self.is_platform_supported():
                raise PlatformUnsupported(self._platform)
            result = await operation(self.context)
        except AutorunError as exc:
            if callback is None:
                raise
            callback(exc, None)
            return None
        if callback is not None:
            callback(None, result)
        return result

    def __repr__(self) -> str:
        return (
            f"Autorun(app_name={self.app_name!r}, executable_path={self.executable_path!r}, "
            f"platform={self._platform!r})"
        )
