"""Protocol interfaces for the trading journal.

Storage is a collaborator: the engines never see it, only the service
and repository do.  Implementations can be swapped (JSON files, memory)
without changing callers.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IKeyValueStore(Protocol):
    """String-keyed store of whole JSON values.

    Reads return the full value; writes replace it (last writer wins).
    """

    def get(self, key: str) -> Any | None: ...

    def put(self, key: str, value: Any) -> None: ...

    def delete(self, key: str) -> None: ...
