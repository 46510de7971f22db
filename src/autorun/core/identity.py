from __future__ import annotations

import os
import re
import sys

import psutil

_APP_BUNDLE = re.compile(r".*?\.app")


def default_executable_path(platform: str | None = None, cwd: str | None = None) -> str:
    """Best guess at the executable an autostart entry should point to.

    On macOS this is the enclosing ``.app`` bundle of the working directory,
    on Windows the running executable, elsewhere the working directory.
    """
    platform = platform or sys.platform
    cwd = cwd if cwd is not None else os.getcwd()

    if platform == "darwin":
        match = _APP_BUNDLE.match(cwd)
        return match.group(0) if match else cwd
    if platform.startswith("win"):
        return running_executable()
    return cwd


def running_executable() -> str:
    try:
        exe = psutil.Process().exe()
    except (psutil.Error, OSError):
        exe = ""
    return exe or sys.executable
