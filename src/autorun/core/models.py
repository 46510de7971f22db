from dataclasses import dataclass

DEFAULT_APP_NAME = "AutorunApp"

WINDOWS_RUN_KEY = r"HKEY_CURRENT_USER\Software\Microsoft\Windows\CurrentVersion\Run"


@dataclass(frozen=True)
class AutorunContext:
    """Identity of one autostart binding.

    macOS matches login items by ``executable_path``; Windows matches Run-key
    values by ``app_name``. Use the same pair on both sides to get consistent
    results.
    """

    app_name: str
    executable_path: str
