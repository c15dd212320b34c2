"""
In-Memory Store Base Class

Shared storage for the three collections (dishes, users, orders).

Records live in an insertion-ordered ``dict`` keyed by id: iteration gives
creation order, lookup by id is O(1), and deleting a key compacts the
collection (no tombstones are left behind).

Id assignment:
    new id = highest id ever issued + 1

The high-water mark is never below the largest live id, so with no
deletions this is simply ``max(existing ids) + 1`` (``1`` for an empty
store). It also keeps a deleted maximum id from being handed out again.
"""

from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class BaseStore(Generic[T]):
    """
    Owns one collection of frozen records.

    Subclasses expose the domain operations; nothing outside the store
    touches ``_records`` directly.
    """

    entity_name: str = "record"

    def __init__(self) -> None:
        self._records: dict[int, T] = {}
        self._high_water = 0

    def __len__(self) -> int:
        return len(self._records)

    def list(self) -> list[T]:
        """Return every record in creation order."""
        return list(self._records.values())

    def lookup(self, record_id: int) -> Optional[T]:
        """Return the record with this id, or None."""
        return self._records.get(record_id)

    def exists(self, record_id: int) -> bool:
        return record_id in self._records

    def _next_id(self) -> int:
        return self._high_water + 1

    def _insert(self, record_id: int, record: T) -> T:
        self._records[record_id] = record
        self._high_water = max(self._high_water, record_id)
        return record

    def _delete(self, record_id: int) -> T:
        return self._records.pop(record_id)
