import asyncio
import logging
import sys
from dataclasses import dataclass

from autorun.core.autorun import Autorun
from autorun.core.errors import AutorunError
from autorun.core.logging_setup import configure_logging
from autorun.core.paths import AppPaths


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppLaunchOptions:
    action: str
    app_name: str | None
    executable_path: str | None
    verbose: bool


async def _perform(autorun: Autorun, action: str) -> bool:
    if action == "enable":
        return await autorun.enable()
    if action == "disable":
        return await autorun.disable()
    return await autorun.is_set()


def run_app(*, action: str, app_name: str | None, executable_path: str | None, verbose: bool) -> int:
    options = AppLaunchOptions(
        action=action, app_name=app_name, executable_path=executable_path, verbose=verbose
    )
    configure_logging(log_file=AppPaths.default().log_file, verbose=options.verbose)

    autorun = Autorun(options.app_name, options.executable_path)
    logger.info("%s requested for %r", options.action, autorun)
    try:
        result = asyncio.run(_perform(autorun, options.action))
    except AutorunError as exc:
        # Traceback only at debug level.
        logger.info("%s failed on %s: %s", exc.name, exc.platform, exc)
        logger.debug("%s traceback", exc.name, exc_info=True)
        print(f"{exc.name}: {exc}", file=sys.stderr)
        return 1

    print("true" if result else "false")
    return 0
