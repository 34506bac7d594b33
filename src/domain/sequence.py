"""Per-instance identifier sequence."""

from collections.abc import Iterable


class SequenceGenerator:
    """
    Monotonic integer id source owned by a single service instance.

    Each service keeps its own generator so independent instances (and
    tests) never share a counter. Services peek the next id, persist the
    new record, then advance: an id is only consumed by a committed write.
    """

    def __init__(self, start: int = 1) -> None:
        self._next = start

    def peek(self) -> int:
        return self._next

    def advance_past(self, existing_ids: Iterable[int]) -> None:
        """Move the counter beyond every id already in use."""
        highest = max(existing_ids, default=0)
        if highest >= self._next:
            self._next = highest + 1
