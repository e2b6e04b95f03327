"""File-backed key-value store: one JSON document per key.

Layout under ``root``::

    trading-journal-trades.json
    trading-journal-consistency.json
    trading-journal-settings.json

Reads load the whole document, writes replace it atomically (see
``core.file_io.safe_write_text``).  There is no schema migration and no
concurrency control beyond last-writer-wins.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

from trading_journal.core.errors import StoreError
from trading_journal.core.file_io import read_text_or_none, safe_write_text

logger = logging.getLogger(__name__)

_SAFE_KEY = re.compile(r"^[A-Za-z0-9._-]+$")


class JsonFileStore:
    """Directory-backed implementation of ``IKeyValueStore``.

    Parameters
    ----------
    root : str | Path
        Directory holding the documents.  Created on first write.
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise StoreError(f"Invalid store key: {key!r}")
        return self._root / f"{key}.json"

    def get(self, key: str) -> Any | None:
        path = self._path(key)
        raw = read_text_or_none(path)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StoreError(f"Corrupt JSON in {path}: {exc}") from exc

    def put(self, key: str, value: Any) -> None:
        path = self._path(key)
        try:
            text = json.dumps(value, indent=2)
        except (TypeError, ValueError) as exc:
            raise StoreError(f"Value for {key!r} is not JSON-serializable: {exc}") from exc
        try:
            safe_write_text(path, text)
        except OSError as exc:
            raise StoreError(f"Failed to write {path}: {exc}") from exc

    def delete(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise StoreError(f"Failed to delete {path}: {exc}") from exc
        logger.debug("Deleted %s", path)
