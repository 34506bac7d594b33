"""
In-memory key-value store adapter - Implements KeyValueStore protocol.

Holds values in a dict for the lifetime of the process. Used by tests
and by ephemeral sessions that do not need durability.
"""


class InMemoryKeyValueStore:
    """
    Implements KeyValueStore protocol via a plain dict.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._values)
