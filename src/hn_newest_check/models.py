from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

from hn_newest_check.age import parse_age_seconds


@dataclass(frozen=True)
class RawRecord:
    identifier: str | None
    title: str
    age_text: str


@dataclass(frozen=True)
class Item:
    identifier: str
    title: str
    age_text: str
    age_seconds: int | None

    @classmethod
    def from_record(cls, record: RawRecord) -> Item:
        return cls(
            identifier=record.identifier or "",
            title=record.title,
            age_text=record.age_text,
            age_seconds=parse_age_seconds(record.age_text),
        )


class ViolationKind(str, Enum):
    PARSE_ERROR = "parse_error"
    ORDER_VIOLATION = "order_violation"


class RunStatus(str, Enum):
    PASSED = "passed"
    FAILED = "failed"


class FailureKind(str, Enum):
    PARSE_ERROR = "parse_error"
    ORDER_VIOLATION = "order_violation"
    INSUFFICIENT_ITEMS = "insufficient_items"
    COLLABORATOR_ERROR = "collaborator_error"


@dataclass(frozen=True)
class Ok:
    ok: bool = field(default=True, init=False)


@dataclass(frozen=True)
class Violation:
    kind: ViolationKind
    position: int
    earlier: Item
    later: Item
    message: str
    ok: bool = field(default=False, init=False)


ValidationVerdict = Ok | Violation


@dataclass(frozen=True)
class RunResult:
    status: RunStatus
    target_count: int
    items_collected: int
    pages_visited: int
    duration_ms: int
    started_at_utc: str
    verdict: ValidationVerdict | None = None
    failure_kind: FailureKind | None = None
    failure_detail: str | None = None
    items: tuple[Item, ...] = ()

    @property
    def passed(self) -> bool:
        return self.status is RunStatus.PASSED

    def to_dict(self) -> dict[str, Any]:
        verdict: dict[str, Any] | None = None
        if isinstance(self.verdict, Violation):
            verdict = {
                "ok": False,
                "kind": self.verdict.kind.value,
                "position": self.verdict.position,
                "earlier": asdict(self.verdict.earlier),
                "later": asdict(self.verdict.later),
                "message": self.verdict.message,
            }
        elif isinstance(self.verdict, Ok):
            verdict = {"ok": True}

        return {
            "status": self.status.value,
            "target_count": self.target_count,
            "items_collected": self.items_collected,
            "pages_visited": self.pages_visited,
            "duration_ms": self.duration_ms,
            "started_at_utc": self.started_at_utc,
            "verdict": verdict,
            "failure_kind": self.failure_kind.value if self.failure_kind else None,
            "failure_detail": self.failure_detail,
            "items": [asdict(item) for item in self.items],
        }
