from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from hn_newest_check.errors import (
    ERROR_STRUCTURE,
    ERROR_TIMEOUT,
    ERROR_UNKNOWN,
    FetchError,
    NavigationError,
    SessionError,
    is_timeout_message,
)
from hn_newest_check.listing import MORE_LINK_SELECTOR, ROW_SELECTOR, parse_listing
from hn_newest_check.models import RawRecord

logger = logging.getLogger(__name__)


@dataclass
class BrowserSession:
    playwright: Any
    browser: Any
    context: Any
    page: Any


def _wrap(error_cls: type, exc: Exception) -> Exception:
    detail = str(exc)[:240]
    if is_timeout_message(detail) or type(exc).__name__ == "TimeoutError":
        return error_cls(ERROR_TIMEOUT, detail)
    return error_cls(ERROR_UNKNOWN, detail)


class BrowserDriver:
    """Drives a real chromium page through the Playwright sync API."""

    def __init__(
        self,
        start_url: str,
        *,
        headless: bool = True,
        user_agent: str | None = None,
        screenshot_path: Path | None = None,
    ) -> None:
        self.start_url = start_url
        self.headless = headless
        self.user_agent = user_agent
        self.screenshot_path = screenshot_path

    def open_session(self, timeout_ms: int) -> BrowserSession:
        try:
            from playwright.sync_api import sync_playwright
        except Exception as exc:  # pragma: no cover - import depends on env
            raise SessionError(ERROR_UNKNOWN, f"playwright import failed: {exc}") from exc

        playwright = sync_playwright().start()
        browser = None
        try:
            browser = playwright.chromium.launch(headless=self.headless)
            context_kwargs = {"user_agent": self.user_agent} if self.user_agent else {}
            context = browser.new_context(**context_kwargs)
            page = context.new_page()
            page.goto(self.start_url, wait_until="domcontentloaded", timeout=timeout_ms)
        except Exception as exc:  # pragma: no cover - depends on network/browser
            if browser is not None:
                browser.close()
            playwright.stop()
            raise _wrap(SessionError, exc) from exc

        logger.info("browser session opened at %s (headless=%s)", self.start_url, self.headless)
        return BrowserSession(playwright=playwright, browser=browser, context=context, page=page)

    def fetch_current_batch(self, session: BrowserSession, timeout_ms: int) -> list[RawRecord]:
        page = session.page
        try:
            page.wait_for_selector(ROW_SELECTOR, timeout=timeout_ms)
            html = page.content()
        except Exception as exc:  # pragma: no cover - depends on network/browser
            raise _wrap(FetchError, exc) from exc

        records = parse_listing(html)
        if not records:
            raise FetchError(ERROR_STRUCTURE, f"no item rows found at {page.url}")
        return records

    def has_next_page(self, session: BrowserSession) -> bool:
        try:
            return session.page.locator(MORE_LINK_SELECTOR).count() > 0
        except Exception as exc:
            raise _wrap(NavigationError, exc) from exc

    def go_to_next_page(self, session: BrowserSession, timeout_ms: int) -> None:
        page = session.page
        more = page.locator(MORE_LINK_SELECTOR)
        try:
            more.first.wait_for(state="visible", timeout=timeout_ms)
            with page.expect_navigation(wait_until="domcontentloaded", timeout=timeout_ms):
                more.first.click(timeout=timeout_ms)
        except Exception as exc:  # pragma: no cover - depends on network/browser
            raise _wrap(NavigationError, exc) from exc
        logger.debug("navigated to %s", page.url)

    def close_session(self, session: BrowserSession) -> None:
        try:
            session.context.close()
            session.browser.close()
        finally:
            session.playwright.stop()

    def snapshot(self, session: BrowserSession) -> str | None:
        if self.screenshot_path is not None:
            self.screenshot_path.parent.mkdir(parents=True, exist_ok=True)
            session.page.screenshot(path=str(self.screenshot_path), full_page=True)
            logger.info("saved screenshot to %s", self.screenshot_path)
        return session.page.content()
