from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TextIO

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(*, log_file: Path, verbose: bool = False) -> None:
    """Send every record to ``log_file``; echo to stderr only warnings, or all when verbose."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)

    formatter = logging.Formatter(_FORMAT)
    handlers: list[logging.Handler] = [_file_handler(log_file)]

    console = _console_stream()
    if console is not None:
        console_handler = logging.StreamHandler(stream=console)
        console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
        handlers.append(console_handler)

    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    logging.raiseExceptions = False


def _file_handler(log_file: Path) -> logging.Handler:
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        return logging.NullHandler()
    return RotatingFileHandler(
        filename=str(log_file),
        maxBytes=1_000_000,
        backupCount=3,
        encoding="utf-8",
        delay=True,
    )


def _console_stream() -> TextIO | None:
    # pythonw and frozen GUI builds run without a usable stderr.
    stream = sys.stderr
    if stream is None:
        return None
    try:
        stream.fileno()
    except (AttributeError, OSError, ValueError):
        return None
    return stream
