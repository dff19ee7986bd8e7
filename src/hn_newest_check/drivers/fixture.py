from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from hn_newest_check.errors import ERROR_STRUCTURE, FetchError, NavigationError
from hn_newest_check.models import RawRecord


class _FixtureRecord(BaseModel):
    id: str | None = None
    title: str = ""
    age: str = ""


class _FixtureFile(BaseModel):
    pages: list[list[_FixtureRecord]] = Field(default_factory=list)


@dataclass
class FixtureSession:
    page_index: int = 0


class FixtureDriver:
    """Replays pre-recorded pages of raw records without any network access.

    ``fail_at`` maps an operation name (``open_session``, ``fetch_current_batch``
    or ``go_to_next_page``) to an exception raised when that operation runs
    while the cursor is on the given zero-based page.
    """

    def __init__(
        self,
        pages: Sequence[Sequence[RawRecord]],
        *,
        fail_at: dict[str, tuple[int, Exception]] | None = None,
        snapshot_html: str | None = None,
    ) -> None:
        self.pages = [list(page) for page in pages]
        self.fail_at = dict(fail_at or {})
        self.snapshot_html = snapshot_html
        self.open_count = 0
        self.close_count = 0
        self.fetch_count = 0
        self.navigation_count = 0

    @classmethod
    def from_file(cls, path: Path | str) -> FixtureDriver:
        raw = Path(path).read_text(encoding="utf-8")
        try:
            fixture = _FixtureFile.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as exc:
            raise ValueError(f"invalid fixture file {path}: {exc}") from exc

        pages = [
            [RawRecord(identifier=row.id, title=row.title, age_text=row.age) for row in page]
            for page in fixture.pages
        ]
        return cls(pages)

    def _maybe_fail(self, operation: str, page_index: int) -> None:
        planned = self.fail_at.get(operation)
        if planned is not None and planned[0] == page_index:
            raise planned[1]

    def open_session(self, timeout_ms: int) -> FixtureSession:
        self._maybe_fail("open_session", 0)
        self.open_count += 1
        return FixtureSession()

    def fetch_current_batch(self, session: FixtureSession, timeout_ms: int) -> list[RawRecord]:
        self._maybe_fail("fetch_current_batch", session.page_index)
        if session.page_index >= len(self.pages):
            raise FetchError(ERROR_STRUCTURE, f"fixture has no page {session.page_index}")
        self.fetch_count += 1
        return list(self.pages[session.page_index])

    def has_next_page(self, session: FixtureSession) -> bool:
        return session.page_index + 1 < len(self.pages)

    def go_to_next_page(self, session: FixtureSession, timeout_ms: int) -> None:
        self._maybe_fail("go_to_next_page", session.page_index)
        if not self.has_next_page(session):
            raise NavigationError(ERROR_STRUCTURE, "no next page control")
        session.page_index += 1
        self.navigation_count += 1

    def close_session(self, session: FixtureSession) -> None:
        self.close_count += 1

    def snapshot(self, session: FixtureSession) -> str | None:
        return self.snapshot_html
