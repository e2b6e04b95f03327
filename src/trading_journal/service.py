"""Journal service: the single writer of the trade store.

Every change to the trade collection is persisted and immediately
followed by a full recomputation of the consistency cycle, which is
persisted too.  Reads hand a snapshot of the trades to the pure engines
in ``trading_journal.journal``.

Destructive operations (payout, delete, reset) are executed as soon as
they are called; asking the user for confirmation is the caller's job.

Usage::

    service = JournalService(JournalRepository(MemoryStore()))
    service.add_trade(Trade(date="2024-01-02", profit_loss=120.0))
    status = service.consistency_status()
    if status.is_violated:
        ...
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from trading_journal.core.clock import IClock, WallClock
from trading_journal.core.config import Settings
from trading_journal.core.enums import SortOrder, StorageBackend, TradeStatus
from trading_journal.core.models import (
    ConsistencyCycle,
    ConsistencyStatus,
    DailyPnL,
    DashboardSummary,
    EquityPoint,
    PerformanceMetrics,
    Trade,
)
from trading_journal.journal import consistency, dashboard, export, metrics, trade_log
from trading_journal.journal.equity import build_curve
from trading_journal.observability.logger import get_logger
from trading_journal.storage.json_store import JsonFileStore
from trading_journal.storage.memory_store import MemoryStore
from trading_journal.storage.repository import JournalRepository

logger = get_logger(__name__)


class JournalService:
    """Facade wiring the trade store to the analytics engines.

    Parameters
    ----------
    repository : JournalRepository
        Typed trade store.
    clock : IClock | None
        Time source for payouts, "today" and export names.
    dashboard_days : int
        Number of trading days in the dashboard chart.  Default 14.
    history_days : int
        Number of trading days in the daily history.  Default 30.
    """

    def __init__(
        self,
        repository: JournalRepository,
        clock: IClock | None = None,
        *,
        dashboard_days: int = 14,
        history_days: int = 30,
    ) -> None:
        self._repo = repository
        self._clock = clock or WallClock()
        self._dashboard_days = dashboard_days
        self._history_days = history_days

    @classmethod
    def from_settings(cls, settings: Settings, clock: IClock | None = None) -> JournalService:
        if settings.storage.backend == StorageBackend.MEMORY:
            store: Any = MemoryStore()
        else:
            store = JsonFileStore(settings.data_dir)
        repo = JournalRepository(
            store,
            key_prefix=settings.storage.key_prefix,
            default_percentage=settings.consistency.default_percentage,
        )
        return cls(
            repo,
            clock,
            dashboard_days=settings.display.dashboard_days,
            history_days=settings.display.history_days,
        )

    @property
    def repository(self) -> JournalRepository:
        return self._repo

    # ------------------------------------------------------------------ #
    # Trade mutations                                                     #
    # ------------------------------------------------------------------ #

    def trades(self) -> list[Trade]:
        return self._repo.get_trades()

    def add_trade(self, trade: Trade) -> Trade:
        """Store *trade* under a new id and return the stored copy."""
        updated = trade_log.add_trade(self._repo.get_trades(), trade)
        self._commit(updated)
        created = updated[-1]
        logger.info("trade_added", trade_id=created.id, date=created.date)
        return created

    def update_trade(self, trade_id: str, changes: dict[str, Any] | Trade) -> Trade:
        updated = trade_log.update_trade(self._repo.get_trades(), trade_id, changes)
        self._commit(updated)
        logger.info("trade_updated", trade_id=trade_id)
        return trade_log.find_trade(updated, trade_id)

    def delete_trade(self, trade_id: str) -> None:
        self._commit(trade_log.delete_trade(self._repo.get_trades(), trade_id))
        logger.info("trade_deleted", trade_id=trade_id)

    def replace_trades(self, trades: Sequence[Trade]) -> None:
        """Overwrite the whole collection, e.g. from an import.

        Raises ``DuplicateTradeIdError`` before anything is written if two
        trades share an id.
        """
        trade_log.ensure_unique_ids(trades)
        self._commit(list(trades))
        logger.info("trades_replaced", count=len(trades))

    def _commit(self, trades: list[Trade]) -> ConsistencyCycle:
        self._repo.put_trades(trades)
        return self.refresh_consistency(trades)

    def refresh_consistency(self, trades: Sequence[Trade] | None = None) -> ConsistencyCycle:
        """Recompute the stored cycle from the trade history and save it."""
        if trades is None:
            trades = self._repo.get_trades()
        cycle = consistency.recompute(trades, self._repo.get_consistency_cycle())
        self._repo.put_consistency_cycle(cycle)
        return cycle

    # ------------------------------------------------------------------ #
    # Analytics                                                           #
    # ------------------------------------------------------------------ #

    def metrics(self) -> PerformanceMetrics:
        return metrics.compute_metrics(self._repo.get_trades())

    def equity_curve(self) -> list[EquityPoint]:
        return build_curve(self._repo.get_trades())

    def dashboard(self) -> DashboardSummary:
        return dashboard.summarize(
            self._repo.get_trades(), clock=self._clock, days=self._dashboard_days
        )

    def daily_history(self) -> list[DailyPnL]:
        return metrics.daily_pnl_history(self._repo.get_trades(), self._history_days)

    def list_trades(
        self,
        *,
        status: TradeStatus | str | None = None,
        sort_field: str = "date",
        order: SortOrder | str = SortOrder.DESC,
    ) -> list[Trade]:
        shown = trade_log.filter_trades(self._repo.get_trades(), status)
        return trade_log.sort_trades(shown, sort_field, order)

    # ------------------------------------------------------------------ #
    # Consistency rule                                                    #
    # ------------------------------------------------------------------ #

    def consistency_status(self) -> ConsistencyStatus:
        return consistency.evaluate(self._repo.get_consistency_cycle())

    def set_threshold(self, value: float) -> bool:
        """Change the allowed percentage.  Returns False if *value* was rejected."""
        cycle = self._repo.get_consistency_cycle()
        updated = consistency.set_threshold(cycle, value)
        if updated is cycle:
            return False
        self._repo.put_consistency_cycle(updated)
        settings = self._repo.get_settings()
        self._repo.put_settings(
            settings.model_copy(update={"consistency_percentage": updated.consistency_percentage})
        )
        logger.info("threshold_updated", consistency_percentage=updated.consistency_percentage)
        return True

    def apply_payout(self) -> ConsistencyCycle:
        """Close the current cycle.  Irreversible."""
        cycle = consistency.apply_payout(self._repo.get_consistency_cycle(), self._clock)
        self._repo.put_consistency_cycle(cycle)
        logger.info("payout_applied", cycle_start_date=cycle.cycle_start_date.isoformat())
        return cycle

    # ------------------------------------------------------------------ #
    # Data management                                                     #
    # ------------------------------------------------------------------ #

    def export_json(self) -> str:
        return export.to_json(self._repo.get_trades())

    def export_csv(self) -> str:
        return export.to_csv(self._repo.get_trades())

    def export_filename(self, suffix: str = "json") -> str:
        return export.export_filename(self._clock, suffix=suffix)

    def import_json(self, payload: str | bytes) -> int:
        """Replace all trades with an exported JSON array.  Returns the count."""
        trades = export.from_json(payload)
        self.replace_trades(trades)
        return len(trades)

    def reset_all(self) -> None:
        """Delete all trades and restore default cycle and settings.  Irreversible."""
        self._repo.reset_all()
        logger.info("journal_reset")
