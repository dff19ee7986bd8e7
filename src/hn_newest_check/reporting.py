from __future__ import annotations

import html
import json
import logging
from pathlib import Path

from hn_newest_check.config import Settings
from hn_newest_check.models import RunResult, Violation
from hn_newest_check.runner import Reporter

logger = logging.getLogger(__name__)

JSON_REPORT_NAME = "result.json"
HTML_REPORT_NAME = "report.html"
SNAPSHOT_NAME = "page.html"


def format_summary(result: RunResult) -> str:
    lines = [
        (
            f"{'PASS' if result.passed else 'FAIL'}: "
            f"collected={result.items_collected}/{result.target_count} "
            f"pages={result.pages_visited} duration_ms={result.duration_ms}"
        )
    ]
    if result.failure_kind is not None:
        lines.append(f"kind={result.failure_kind.value}")
    if result.failure_detail:
        lines.append(result.failure_detail)
    return "\n".join(lines)


class JsonReportWriter:
    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def __call__(self, result: RunResult, snapshot: str | None = None) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / JSON_REPORT_NAME
        path.write_text(json.dumps(result.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
        logger.info("wrote %s", path)
        return path


class SnapshotWriter:
    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def __call__(self, result: RunResult, snapshot: str | None = None) -> Path | None:
        if snapshot is None:
            return None
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / SNAPSHOT_NAME
        path.write_text(snapshot, encoding="utf-8")
        logger.info("wrote %s", path)
        return path


class HtmlReportWriter:
    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def render(self, result: RunResult) -> str:
        flagged: set[int] = set()
        if isinstance(result.verdict, Violation):
            flagged = {result.verdict.position - 1, result.verdict.position}

        rows = []
        for position, item in enumerate(result.items, start=1):
            css = ' class="flagged"' if position in flagged else ""
            seconds = "" if item.age_seconds is None else str(item.age_seconds)
            rows.append(
                f"<tr{css}><td>{position}</td><td>{html.escape(item.identifier)}</td>"
                f"<td>{html.escape(item.title)}</td><td>{html.escape(item.age_text)}</td>"
                f"<td>{seconds}</td></tr>"
            )

        status = "PASS" if result.passed else "FAIL"
        detail = html.escape(result.failure_detail or "")
        return "\n".join(
            [
                "<!doctype html>",
                '<html><head><meta charset="utf-8">',
                f"<title>newest order check: {status}</title>",
                "<style>body{font-family:sans-serif}td,th{padding:2px 8px}"
                ".flagged{background:#fdd}.PASS{color:#080}.FAIL{color:#b00}</style>",
                "</head><body>",
                f'<h1 class="{status}">{status}</h1>',
                (
                    f"<p>collected {result.items_collected}/{result.target_count} items "
                    f"across {result.pages_visited} page(s) in {result.duration_ms} ms "
                    f"(started {html.escape(result.started_at_utc)})</p>"
                ),
                f"<pre>{detail}</pre>" if detail else "",
                "<table><tr><th>#</th><th>id</th><th>title</th><th>age</th><th>seconds</th></tr>",
                *rows,
                "</table></body></html>",
            ]
        )

    def __call__(self, result: RunResult, snapshot: str | None = None) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / HTML_REPORT_NAME
        path.write_text(self.render(result), encoding="utf-8")
        logger.info("wrote %s", path)
        return path


def build_reporters(settings: Settings) -> list[Reporter]:
    reporters: list[Reporter] = []
    if settings.artifacts_dir is not None:
        reporters.extend(
            [
                JsonReportWriter(settings.artifacts_dir),
                HtmlReportWriter(settings.artifacts_dir),
                SnapshotWriter(settings.artifacts_dir),
            ]
        )
    return reporters
