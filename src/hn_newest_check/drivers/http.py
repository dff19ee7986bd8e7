from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx
from tenacity import (
    Retrying,
    retry_if_exception_type,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from hn_newest_check.config import DEFAULT_USER_AGENT
from hn_newest_check.errors import (
    ERROR_HTTP,
    ERROR_STRUCTURE,
    ERROR_TIMEOUT,
    FetchError,
    NavigationError,
    SessionError,
)
from hn_newest_check.listing import count_rows, find_more_link, parse_listing
from hn_newest_check.models import RawRecord

logger = logging.getLogger(__name__)


def _fetch_html(client: httpx.Client, url: str, timeout_seconds: float) -> str:
    response = client.get(url, timeout=timeout_seconds)
    response.raise_for_status()
    return response.text


@dataclass
class HttpSession:
    client: httpx.Client
    current_url: str
    html: str | None = None


class HttpDriver:
    """Fetches listing pages with plain GET requests and follows the "More" link."""

    def __init__(
        self,
        start_url: str,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        retry_attempts: int = 3,
        retry_wait_seconds: float = 1.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.start_url = start_url
        self.user_agent = user_agent
        self.retry_attempts = retry_attempts
        self.retry_wait_seconds = retry_wait_seconds
        self._transport = transport

    def _get(self, session: HttpSession, url: str, timeout_ms: int) -> str:
        retrying = Retrying(
            stop=stop_after_attempt(self.retry_attempts),
            wait=wait_fixed(self.retry_wait_seconds),
            retry=(
                retry_if_exception_type(httpx.TransportError)
                & retry_if_not_exception_type(httpx.TimeoutException)
            ),
            reraise=True,
        )
        return retrying(_fetch_html, session.client, url, timeout_ms / 1000)

    def _load(self, session: HttpSession, url: str, timeout_ms: int, error_cls: type) -> None:
        try:
            html = self._get(session, url, timeout_ms)
        except httpx.TimeoutException as exc:
            raise error_cls(ERROR_TIMEOUT, f"{url}: {exc}") from exc
        except httpx.HTTPError as exc:
            raise error_cls(ERROR_HTTP, f"{url}: {exc}") from exc

        session.current_url = str(url)
        session.html = html
        logger.debug("loaded %s (%d bytes)", url, len(html))

    def open_session(self, timeout_ms: int) -> HttpSession:
        client = httpx.Client(
            headers={"User-Agent": self.user_agent},
            follow_redirects=True,
            transport=self._transport,
        )
        session = HttpSession(client=client, current_url=self.start_url)
        try:
            self._load(session, self.start_url, timeout_ms, SessionError)
        except SessionError:
            client.close()
            raise
        return session

    def fetch_current_batch(self, session: HttpSession, timeout_ms: int) -> list[RawRecord]:
        html = session.html or ""
        if count_rows(html) == 0:
            raise FetchError(ERROR_STRUCTURE, f"no item rows found at {session.current_url}")
        return parse_listing(html)

    def has_next_page(self, session: HttpSession) -> bool:
        if session.html is None:
            return False
        return find_more_link(session.html, session.current_url) is not None

    def go_to_next_page(self, session: HttpSession, timeout_ms: int) -> None:
        next_url = find_more_link(session.html or "", session.current_url)
        if next_url is None:
            raise NavigationError(ERROR_STRUCTURE, f"no next page link at {session.current_url}")
        self._load(session, next_url, timeout_ms, NavigationError)

    def close_session(self, session: HttpSession) -> None:
        session.client.close()

    def snapshot(self, session: HttpSession) -> str | None:
        return session.html
