import pytest

from hn_newest_check.drivers.browser import BrowserDriver, BrowserSession
from hn_newest_check.errors import ERROR_TIMEOUT, ERROR_UNKNOWN, NavigationError


class _Locator:
    def __init__(self, error: Exception | None = None, count: int = 1):
        self._error = error
        self._count = count

    def count(self) -> int:
        if self._error is not None:
            raise self._error
        return self._count


class _Page:
    def __init__(self, locator: _Locator):
        self._locator = locator

    def locator(self, selector: str) -> _Locator:
        return self._locator


def _session(locator: _Locator) -> BrowserSession:
    return BrowserSession(playwright=None, browser=None, context=None, page=_Page(locator))


def test_has_next_page_counts_more_links() -> None:
    driver = BrowserDriver("https://news.ycombinator.com/newest")

    assert driver.has_next_page(_session(_Locator(count=1)))
    assert not driver.has_next_page(_session(_Locator(count=0)))


def test_has_next_page_wraps_browser_errors() -> None:
    driver = BrowserDriver("https://news.ycombinator.com/newest")

    with pytest.raises(NavigationError) as excinfo:
        driver.has_next_page(_session(_Locator(error=RuntimeError("Target page has been closed"))))

    assert excinfo.value.error_type == ERROR_UNKNOWN


def test_has_next_page_reports_timeouts() -> None:
    driver = BrowserDriver("https://news.ycombinator.com/newest")

    with pytest.raises(NavigationError) as excinfo:
        driver.has_next_page(_session(_Locator(error=RuntimeError("Timeout 30000ms exceeded"))))

    assert excinfo.value.error_type == ERROR_TIMEOUT
