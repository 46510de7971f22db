from __future__ import annotations

from abc import ABC, abstractmethod

from autorun.core.errors import PlatformUnsupported
from autorun.core.models import AutorunContext


def is_supported_platform(platform: str) -> bool:
    return platform == "darwin" or platform.startswith("win")


class AutorunAdapter(ABC):
    """One platform's autostart store.

    Every method performs a single external call and either returns a definite
    bool or raises an ``AutorunError``.
    """

    platform: str

    @abstractmethod
    async def is_set(self, context: AutorunContext) -> bool:
        """True if an entry matching the context's identity exists."""

    @abstractmethod
    async def enable(self, context: AutorunContext) -> bool:
        """Register the context's executable to launch at login."""

    @abstractmethod
    async def disable(self, context: AutorunContext) -> bool:
        """Remove the matching entry. False if there was none."""


class UnsupportedAdapter(AutorunAdapter):
    def __init__(self, platform: str) -> None:
        self.platform = platform

    async def is_set(self, context: AutorunContext) -> bool:
        raise PlatformUnsupported(self.platform)

    async def enable(self, context: AutorunContext) -> bool:
        raise PlatformUnsupported(self.platform)

    async def disable(self, context: AutorunContext) -> bool:
        raise PlatformUnsupported(self.platform)


def adapter_for_platform(platform: str) -> AutorunAdapter:
    if platform == "darwin":
        from autorun.core.macos_login_items import MacLoginItemsAdapter

        return MacLoginItemsAdapter()
    if platform.startswith("win"):
        from autorun.core.windows_autostart import WindowsRegistryAdapter

        return WindowsRegistryAdapter(platform=platform)
    return UnsupportedAdapter(platform)
