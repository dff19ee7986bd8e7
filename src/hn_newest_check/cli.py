from __future__ import annotations

import argparse
from pathlib import Path

from hn_newest_check.config import Settings, load_settings
from hn_newest_check.drivers.base import PaginationDriver
from hn_newest_check.drivers.browser import BrowserDriver
from hn_newest_check.drivers.fixture import FixtureDriver
from hn_newest_check.drivers.http import HttpDriver
from hn_newest_check.logging_setup import setup_logging
from hn_newest_check.models import RunResult
from hn_newest_check.reporting import build_reporters, format_summary
from hn_newest_check.runner import run_check

SCREENSHOT_NAME = "failure.png"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hn-newest-check")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser(
        "run",
        help="Crawl the newest feed and check that it is sorted newest -> oldest",
    )
    run_parser.add_argument("--target", type=int, default=None, help="Override TARGET_COUNT")
    run_parser.add_argument("--timeout-ms", type=int, default=None, help="Override TIMEOUT_MS")
    run_parser.add_argument("--driver", choices=("browser", "http"), default=None)
    run_parser.add_argument("--headed", action="store_true", default=False)

    replay_parser = subparsers.add_parser(
        "replay",
        help="Run the same check against a recorded JSON fixture of pages",
    )
    replay_parser.add_argument("fixture", type=Path)
    replay_parser.add_argument("--target", type=int, default=None, help="Override TARGET_COUNT")

    subparsers.add_parser("healthcheck", help="Validate config and artifacts directory")

    return parser


def build_driver(settings: Settings) -> PaginationDriver:
    if settings.driver == "http":
        return HttpDriver(settings.start_url, user_agent=settings.user_agent)

    screenshot_path = settings.artifacts_dir / SCREENSHOT_NAME if settings.artifacts_dir else None
    return BrowserDriver(
        settings.start_url,
        headless=settings.headless,
        user_agent=settings.user_agent,
        screenshot_path=screenshot_path,
    )


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    update: dict[str, object] = {}
    if getattr(args, "target", None) is not None:
        update["target_count"] = args.target
    if getattr(args, "timeout_ms", None) is not None:
        update["timeout_ms"] = args.timeout_ms
    if getattr(args, "driver", None) is not None:
        update["driver"] = args.driver
    if getattr(args, "headed", False):
        update["headless"] = False
    if not update:
        return settings
    return Settings.model_validate({**settings.model_dump(), **update})


def _finish(result: RunResult) -> int:
    print(format_summary(result))
    return 0 if result.passed else 1


def _cmd_run(settings: Settings) -> int:
    result = run_check(
        settings.run_config(),
        build_driver(settings),
        reporters=build_reporters(settings),
    )
    return _finish(result)


def _cmd_replay(settings: Settings, fixture: Path) -> int:
    result = run_check(
        settings.run_config(),
        FixtureDriver.from_file(fixture),
        reporters=build_reporters(settings),
    )
    return _finish(result)


def _cmd_healthcheck(settings: Settings) -> int:
    print(
        "settings:",
        f"driver={settings.driver}",
        f"target_count={settings.target_count}",
        f"timeout_ms={settings.timeout_ms}",
        f"start_url={settings.start_url}",
    )

    if settings.artifacts_dir is not None:
        try:
            settings.artifacts_dir.mkdir(parents=True, exist_ok=True)
            probe = settings.artifacts_dir / ".write-probe"
            probe.write_text("ok", encoding="utf-8")
            probe.unlink()
        except OSError as exc:
            print(f"artifacts dir check failed: {exc}")
            return 1
        print(f"artifacts dir ready: {settings.artifacts_dir}")
    else:
        print("artifacts dir not configured; reports will not be written")

    print("healthcheck passed")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = _apply_overrides(load_settings(), args)
        setup_logging(settings.log_level, settings.log_file)

        if args.command == "run":
            return _cmd_run(settings)
        if args.command == "replay":
            return _cmd_replay(settings, args.fixture)
        if args.command == "healthcheck":
            return _cmd_healthcheck(settings)
    except (ValueError, OSError) as exc:
        print(exc)
        return 1

    parser.print_help()
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
