from dataclasses import dataclass
from pathlib import Path

from platformdirs import PlatformDirs


@dataclass(frozen=True)
class AppPaths:
    log_dir: Path

    @property
    def log_file(self) -> Path:
        return self.log_dir / "autorun.log"

    @classmethod
    def default(cls) -> "AppPaths":
        dirs = PlatformDirs(appname="autorun-login", appauthor=False)
        return cls(log_dir=Path(dirs.user_log_dir))
