import pytest

from hn_newest_check.accumulator import Accumulator
from hn_newest_check.models import RawRecord


def _record(identifier: str | None, minutes: int = 1) -> RawRecord:
    return RawRecord(identifier=identifier, title=f"post {identifier}", age_text=f"{minutes} minutes ago")


def test_accept_keeps_first_occurrence_across_batches() -> None:
    accumulator = Accumulator(10)

    accumulator.accept([_record("1", 1), _record("2", 2)])
    accumulator.accept([_record("2", 9), _record("3", 3)])

    assert [item.identifier for item in accumulator.items] == ["1", "2", "3"]
    assert accumulator.items[1].age_text == "2 minutes ago"
    assert accumulator.skipped_duplicates == 1


def test_accept_skips_missing_identifiers() -> None:
    accumulator = Accumulator(5)

    still_open = accumulator.accept([_record(""), _record(None), _record("7")])

    assert still_open
    assert [item.identifier for item in accumulator.items] == ["7"]
    assert accumulator.skipped_missing_id == 2


def test_accept_drops_excess_records_in_batch() -> None:
    accumulator = Accumulator(3)

    still_open = accumulator.accept([_record(str(i), i) for i in range(1, 6)])

    assert not still_open
    assert len(accumulator) == 3
    assert [item.identifier for item in accumulator.items] == ["1", "2", "3"]

    assert not accumulator.accept([_record("99")])
    assert len(accumulator) == 3


def test_accept_parses_age_once_per_item() -> None:
    accumulator = Accumulator(2)

    accumulator.accept(
        [
            RawRecord(identifier="a", title="A", age_text="2 hours ago"),
            RawRecord(identifier="b", title="B", age_text="sometime"),
        ]
    )

    first, second = accumulator.items
    assert first.age_seconds == 7200
    assert second.age_seconds is None
    assert second.age_text == "sometime"


def test_remaining_counts_down_to_zero() -> None:
    accumulator = Accumulator(4)
    assert accumulator.remaining == 4

    accumulator.accept([_record("1"), _record("2")])
    assert accumulator.remaining == 2
    assert accumulator.is_open


@pytest.mark.parametrize("target", [0, -1])
def test_target_count_must_be_positive(target: int) -> None:
    with pytest.raises(ValueError):
        Accumulator(target)
