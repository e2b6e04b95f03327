"""Typed access to the journal's persisted records.

Wraps any ``IKeyValueStore`` and converts between the stored JSON blobs
and the domain models.  Every read loads the whole value and every write
replaces it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pydantic import TypeAdapter, ValidationError

from trading_journal.core.errors import StoreError
from trading_journal.core.interfaces import IKeyValueStore
from trading_journal.core.models import (
    DEFAULT_CONSISTENCY_PERCENTAGE,
    ConsistencyCycle,
    JournalSettings,
    Trade,
)

logger = logging.getLogger(__name__)

_TRADE_LIST = TypeAdapter(list[Trade])

TRADES_KEY = "trades"
CONSISTENCY_KEY = "consistency"
SETTINGS_KEY = "settings"


class JournalRepository:
    """Trade Store: trades, consistency cycle and settings.

    Parameters
    ----------
    store : IKeyValueStore
        Backing key-value store.
    key_prefix : str
        Prepended to every key.  Default ``"trading-journal-"``.
    default_percentage : float
        Allowed consistency percentage for a cycle created on first use.
    """

    def __init__(
        self,
        store: IKeyValueStore,
        *,
        key_prefix: str = "trading-journal-",
        default_percentage: float = DEFAULT_CONSISTENCY_PERCENTAGE,
    ) -> None:
        self._store = store
        self._prefix = key_prefix
        self._default_percentage = default_percentage

    def _key(self, name: str) -> str:
        return f"{self._prefix}{name}"

    # ------------------------------------------------------------------ #
    # Trades                                                              #
    # ------------------------------------------------------------------ #

    def get_trades(self) -> list[Trade]:
        raw = self._store.get(self._key(TRADES_KEY))
        if raw is None:
            return []
        try:
            return _TRADE_LIST.validate_python(raw)
        except ValidationError as exc:
            raise StoreError(f"Stored trades are malformed: {exc}") from exc

    def put_trades(self, trades: Sequence[Trade]) -> None:
        self._store.put(self._key(TRADES_KEY), [t.to_json_dict() for t in trades])
        logger.debug("Saved %d trades", len(trades))

    # ------------------------------------------------------------------ #
    # Consistency cycle                                                   #
    # ------------------------------------------------------------------ #

    def default_cycle(self) -> ConsistencyCycle:
        return ConsistencyCycle(consistency_percentage=self._default_percentage)

    def get_consistency_cycle(self) -> ConsistencyCycle:
        """The stored cycle, or a fresh zeroed one on first use."""
        raw = self._store.get(self._key(CONSISTENCY_KEY))
        if raw is None:
            return self.default_cycle()
        try:
            return ConsistencyCycle.model_validate(raw)
        except ValidationError as exc:
            raise StoreError(f"Stored consistency cycle is malformed: {exc}") from exc

    def put_consistency_cycle(self, cycle: ConsistencyCycle) -> None:
        self._store.put(self._key(CONSISTENCY_KEY), cycle.to_json_dict())

    # ------------------------------------------------------------------ #
    # Settings                                                            #
    # ------------------------------------------------------------------ #

    def default_settings(self) -> JournalSettings:
        return JournalSettings(consistency_percentage=self._default_percentage)

    def get_settings(self) -> JournalSettings:
        raw = self._store.get(self._key(SETTINGS_KEY))
        if raw is None:
            return self.default_settings()
        try:
            return JournalSettings.model_validate(raw)
        except ValidationError as exc:
            raise StoreError(f"Stored settings are malformed: {exc}") from exc

    def put_settings(self, settings: JournalSettings) -> None:
        self._store.put(self._key(SETTINGS_KEY), settings.to_json_dict())

    # ------------------------------------------------------------------ #
    # Housekeeping                                                        #
    # ------------------------------------------------------------------ #

    def reset_all(self) -> None:
        """Delete every trade and restore the default cycle and settings."""
        self._store.delete(self._key(TRADES_KEY))
        self.put_consistency_cycle(self.default_cycle())
        self.put_settings(self.default_settings())
        logger.info("Journal data reset to defaults")
