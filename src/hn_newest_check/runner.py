from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from hn_newest_check.accumulator import Accumulator
from hn_newest_check.config import RunConfig
from hn_newest_check.drivers.base import PaginationDriver
from hn_newest_check.errors import CollaboratorError
from hn_newest_check.models import (
    FailureKind,
    RunResult,
    RunStatus,
    ValidationVerdict,
    Violation,
)
from hn_newest_check.validator import validate_order

logger = logging.getLogger(__name__)

Reporter = Callable[[RunResult, str | None], None]
Clock = Callable[[], float]


@dataclass
class _RunProgress:
    pages_visited: int = 0
    verdict: ValidationVerdict | None = None
    failure_kind: FailureKind | None = None
    failure_detail: str | None = None


def _callable_name(func: Callable[..., Any]) -> str:
    return getattr(func, "__name__", None) or type(func).__name__


def _describe_error(exc: Exception) -> str:
    if isinstance(exc, CollaboratorError):
        return f"{type(exc).__name__}: {exc}"
    return f"unexpected error: {type(exc).__name__}: {exc}"


def _collect(
    driver: PaginationDriver,
    session: Any,
    config: RunConfig,
    accumulator: Accumulator,
    progress: _RunProgress,
) -> bool:
    """Fetch pages until the accumulator closes. False means the feed ran out first."""
    while True:
        batch = driver.fetch_current_batch(session, config.timeout_ms)
        if progress.pages_visited == 0:
            progress.pages_visited = 1

        still_open = accumulator.accept(batch)
        logger.info(
            "page %d: %d records, %d/%d collected",
            progress.pages_visited,
            len(batch),
            len(accumulator),
            accumulator.target_count,
        )
        logger.debug(
            "dedup counters: duplicates=%d missing_id=%d",
            accumulator.skipped_duplicates,
            accumulator.skipped_missing_id,
        )
        if not still_open:
            return True

        if not driver.has_next_page(session):
            return False

        driver.go_to_next_page(session, config.timeout_ms)
        progress.pages_visited += 1


def _take_snapshot(driver: PaginationDriver, session: Any) -> str | None:
    try:
        return driver.snapshot(session)
    except Exception:
        logger.warning("page snapshot failed", exc_info=True)
        return None


def _close_session(driver: PaginationDriver, session: Any) -> None:
    try:
        driver.close_session(session)
    except Exception:
        logger.warning("closing the session failed", exc_info=True)


def _publish(reporters: Sequence[Reporter], result: RunResult, snapshot: str | None) -> None:
    for reporter in reporters:
        try:
            reporter(result, snapshot)
        except Exception:
            logger.exception("reporter %s failed; run outcome unchanged", _callable_name(reporter))


def run_check(
    config: RunConfig,
    driver: PaginationDriver,
    *,
    reporters: Sequence[Reporter] = (),
    clock: Clock = time.perf_counter,
    now_utc: datetime | None = None,
) -> RunResult:
    started = clock()
    started_at_utc = (now_utc or datetime.now(timezone.utc)).replace(microsecond=0).isoformat()
    accumulator = Accumulator(config.target_count)
    progress = _RunProgress()
    session: Any = None
    snapshot: str | None = None

    logger.info(
        "run started: target=%d timeout_ms=%d driver=%s",
        config.target_count,
        config.timeout_ms,
        type(driver).__name__,
    )

    try:
        session = driver.open_session(config.timeout_ms)
        if _collect(driver, session, config, accumulator, progress):
            progress.verdict = validate_order(accumulator.items)
            if isinstance(progress.verdict, Violation):
                progress.failure_kind = FailureKind(progress.verdict.kind.value)
                progress.failure_detail = progress.verdict.message
        else:
            progress.failure_kind = FailureKind.INSUFFICIENT_ITEMS
            progress.failure_detail = (
                f"Expected exactly {config.target_count} items, got {len(accumulator)}; "
                f"no further pages after {progress.pages_visited} page(s)."
            )
    except Exception as exc:
        logger.error("run aborted by collaborator failure: %s", exc)
        progress.failure_kind = FailureKind.COLLABORATOR_ERROR
        progress.failure_detail = _describe_error(exc)
    finally:
        if session is not None:
            if progress.failure_kind is not None:
                snapshot = _take_snapshot(driver, session)
            _close_session(driver, session)

    result = RunResult(
        status=RunStatus.FAILED if progress.failure_kind else RunStatus.PASSED,
        target_count=config.target_count,
        items_collected=len(accumulator),
        pages_visited=progress.pages_visited,
        duration_ms=int((clock() - started) * 1000),
        started_at_utc=started_at_utc,
        verdict=progress.verdict,
        failure_kind=progress.failure_kind,
        failure_detail=progress.failure_detail,
        items=accumulator.items,
    )

    if result.passed:
        logger.info(
            "PASS: first %d items are sorted newest -> oldest (%d pages, %d ms)",
            result.items_collected,
            result.pages_visited,
            result.duration_ms,
        )
    else:
        logger.warning("FAIL [%s]: %s", result.failure_kind.value, result.failure_detail)

    _publish(reporters, result, snapshot)
    return result
