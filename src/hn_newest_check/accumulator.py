from __future__ import annotations

from collections.abc import Iterable

from hn_newest_check.models import Item, RawRecord


class Accumulator:
    """Collects unique items across pages until ``target_count`` is reached.

    The first occurrence of an identifier wins. Records past the target within
    a batch are dropped, not deferred to the next call.
    """

    def __init__(self, target_count: int):
        if target_count < 1:
            raise ValueError(f"target_count must be positive, got {target_count}")
        self.target_count = target_count
        self._items: list[Item] = []
        self._seen: set[str] = set()
        self.skipped_duplicates = 0
        self.skipped_missing_id = 0

    @property
    def items(self) -> tuple[Item, ...]:
        return tuple(self._items)

    @property
    def remaining(self) -> int:
        return self.target_count - len(self._items)

    @property
    def is_open(self) -> bool:
        return len(self._items) < self.target_count

    def accept(self, batch: Iterable[RawRecord]) -> bool:
        if not self.is_open:
            return False

        for record in batch:
            if not record.identifier:
                self.skipped_missing_id += 1
                continue
            if record.identifier in self._seen:
                self.skipped_duplicates += 1
                continue

            self._items.append(Item.from_record(record))
            self._seen.add(record.identifier)

            if not self.is_open:
                break

        return self.is_open

    def __len__(self) -> int:
        return len(self._items)
