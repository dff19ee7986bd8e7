import pytest

from hn_newest_check.models import Item, Ok, ValidationVerdict, Violation, ViolationKind
from hn_newest_check.validator import validate_order


def _items(ages: list[int | None]) -> list[Item]:
    return [
        Item(
            identifier=str(index),
            title=f"story {index}",
            age_text="?" if age is None else f"{age} seconds",
            age_seconds=age,
        )
        for index, age in enumerate(ages, start=1)
    ]


@pytest.mark.parametrize(
    "ages",
    [
        [60, 60, 120, 3600, 3600, 86400],
        [300, 300, 300, 300],
        [7200],
        [0, 60, 3600, 86400, 172800],
        [120] * 100,
        list(range(0, 6000, 60)),
    ],
)
def test_non_decreasing_ages_are_ok(ages: list[int]) -> None:
    assert validate_order(_items(ages)) == Ok()


def test_empty_and_single_item_sequences_are_ok() -> None:
    assert validate_order([]).ok
    assert validate_order(_items([None])).ok


def test_first_order_violation_is_reported() -> None:
    verdict = validate_order(_items([60, 120, 90, 200]))

    assert isinstance(verdict, Violation)
    assert verdict.kind is ViolationKind.ORDER_VIOLATION
    assert verdict.position == 3
    assert verdict.earlier.age_seconds == 120
    assert verdict.later.age_seconds == 90
    assert "Sorting violation at position 3" in verdict.message
    assert '"story 2"' in verdict.message
    assert "sec=90" in verdict.message


def test_only_the_lowest_index_violation_is_reported() -> None:
    verdict = validate_order(_items([300, 200, 100]))

    assert isinstance(verdict, Violation)
    assert verdict.position == 2


def test_parse_error_takes_precedence_over_order() -> None:
    verdict = validate_order(_items([60, None, 90]))

    assert isinstance(verdict, Violation)
    assert verdict.kind is ViolationKind.PARSE_ERROR
    assert verdict.position == 2
    assert verdict.earlier.identifier == "1"
    assert verdict.later.identifier == "2"
    assert "Age parse failed" in verdict.message
    assert "(id=2)" in verdict.message


def test_parse_error_on_first_item_blocks_pair() -> None:
    verdict = validate_order(_items([None, 30]))

    assert isinstance(verdict, Violation)
    assert verdict.kind is ViolationKind.PARSE_ERROR
    assert verdict.position == 2


def test_validate_is_deterministic() -> None:
    items = _items([10, 20, 5, 1])

    assert validate_order(items) == validate_order(items)


def test_every_verdict_is_a_validation_verdict() -> None:
    assert isinstance(validate_order(_items([1, 2])), ValidationVerdict)
    assert isinstance(validate_order(_items([2, 1])), ValidationVerdict)
