import argparse

from autorun.app import run_app


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="autorun-login",
        description="Enable, disable or query launch at login for an application.",
    )
    parser.add_argument(
        "action",
        choices=["status", "enable", "disable"],
        help="What to do with the autostart entry.",
    )
    parser.add_argument(
        "--name",
        dest="app_name",
        default=None,
        help="Application name (identifies the entry on Windows).",
    )
    parser.add_argument(
        "--path",
        dest="executable_path",
        default=None,
        help="Executable to launch (identifies the entry on macOS).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log external calls to stderr.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    return run_app(
        action=args.action,
        app_name=args.app_name,
        executable_path=args.executable_path,
        verbose=args.verbose,
    )


if __name__ == "__main__":
    raise SystemExit(main())
