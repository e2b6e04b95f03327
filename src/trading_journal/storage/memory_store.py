"""In-memory key-value store.

Values are round-tripped through JSON on write so callers get the same
isolation (no shared mutable state) as with the file-backed store.
"""

from __future__ import annotations

import json
from typing import Any


class MemoryStore:
    """Dict-backed implementation of ``IKeyValueStore``."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Any | None:
        raw = self._data.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    def put(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)
