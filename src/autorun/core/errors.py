from __future__ import annotations

import sys


class AutorunError(Exception):
    """Base for every failure reported by an autorun operation.

    ``platform`` is the platform identifier the operation ran on and ``cause``
    is the underlying error, when there is one.
    """

    default_message = "Autorun operation failed"

    def __init__(
        self,
        platform: str,
        message: str | None = None,
        *,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message or self.default_message)
        self.platform = platform
        self.cause = cause

    @property
    def name(self) -> str:
        return type(self).__name__


class PlatformUnsupported(AutorunError):
    def __init__(self, platform: str) -> None:
        super().__init__(platform, f'Your platform "{platform}" is not supported')


class AutorunIsSetFailed(AutorunError):
    default_message = "Could not check if autorun is set"


class AutorunEnableFailed(AutorunError):
    default_message = "Could not enable autorun"


class AutorunDisableFailed(AutorunError):
    default_message = "Could not disable autorun"


class ChildProcessFailed(AutorunError):
    """A spawned command wrote to stderr or could not be started.

    ``exit_code`` is None when the process never ran.
    """

    def __init__(
        self,
        output: str,
        *,
        exit_code: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(sys.platform, "ChildProcess failed", cause=cause)
        self.output = output
        self.exit_code = exit_code
