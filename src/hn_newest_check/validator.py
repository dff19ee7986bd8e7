from __future__ import annotations

from collections.abc import Sequence

from hn_newest_check.models import Item, Ok, ValidationVerdict, Violation, ViolationKind


def _describe(index: int, item: Item) -> str:
    return (
        f'#{index}: "{item.title}" age="{item.age_text}" '
        f"sec={item.age_seconds} (id={item.identifier})"
    )


def _parse_error(position: int, earlier: Item, later: Item) -> Violation:
    message = (
        f"Age parse failed at position {position}.\n"
        f'Prev: "{earlier.age_text}" (id={earlier.identifier})\n'
        f'Curr: "{later.age_text}" (id={later.identifier})'
    )
    return Violation(
        kind=ViolationKind.PARSE_ERROR,
        position=position,
        earlier=earlier,
        later=later,
        message=message,
    )


def _order_violation(position: int, earlier: Item, later: Item) -> Violation:
    message = (
        f"Sorting violation at position {position}.\n"
        f"{_describe(position - 1, earlier)}\n"
        f"{_describe(position, later)}"
    )
    return Violation(
        kind=ViolationKind.ORDER_VIOLATION,
        position=position,
        earlier=earlier,
        later=later,
        message=message,
    )


def validate_order(items: Sequence[Item]) -> ValidationVerdict:
    """Check that ages never decrease from the first item to the last.

    Only the first failing adjacent pair is reported. A pair with an
    unparseable age is a parse error even if it would otherwise look ordered.
    """
    for index in range(1, len(items)):
        earlier = items[index - 1]
        later = items[index]
        position = index + 1

        if earlier.age_seconds is None or later.age_seconds is None:
            return _parse_error(position, earlier, later)

        if later.age_seconds < earlier.age_seconds:
            return _order_violation(position, earlier, later)

    return Ok()
