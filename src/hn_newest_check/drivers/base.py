from __future__ import annotations

from typing import Any, Protocol

from hn_newest_check.models import RawRecord


class PaginationDriver(Protocol):
    """Yields one page of raw records at a time, strictly in order.

    ``open_session``, ``fetch_current_batch`` and ``go_to_next_page`` raise
    ``SessionError``, ``FetchError`` and ``NavigationError`` respectively.
    """

    def open_session(self, timeout_ms: int) -> Any: ...

    def fetch_current_batch(self, session: Any, timeout_ms: int) -> list[RawRecord]: ...

    def has_next_page(self, session: Any) -> bool: ...

    def go_to_next_page(self, session: Any, timeout_ms: int) -> None: ...

    def close_session(self, session: Any) -> None: ...

    def snapshot(self, session: Any) -> str | None: ...
