"""Shared fixtures for the trading-journal test suite."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable

import pytest

from trading_journal.core.clock import SimClock
from trading_journal.core.enums import Direction, TradeStatus
from trading_journal.core.models import Trade
from trading_journal.service import JournalService
from trading_journal.storage.memory_store import MemoryStore
from trading_journal.storage.repository import JournalRepository


def make_trade(
    date: str = "2024-01-01",
    profit_loss: float = 0.0,
    status: TradeStatus | str = TradeStatus.WIN,
    direction: Direction | str = Direction.BUY,
    **kwargs: Any,
) -> Trade:
    """Helper to create a Trade with sensible defaults."""
    return Trade(
        date=date,
        profit_loss=profit_loss,
        status=status,
        direction=direction,
        market=kwargs.pop("market", "EURUSD"),
        entry=kwargs.pop("entry", 1.1),
        stop_loss=kwargs.pop("stop_loss", 1.09),
        take_profit=kwargs.pop("take_profit", 1.12),
        **kwargs,
    )


@pytest.fixture
def trade_factory() -> Callable[..., Trade]:
    return make_trade


@pytest.fixture
def sim_clock() -> SimClock:
    return SimClock(datetime(2024, 1, 10, 15, 30, tzinfo=timezone.utc))


@pytest.fixture
def repository() -> JournalRepository:
    return JournalRepository(MemoryStore())


@pytest.fixture
def service(repository: JournalRepository, sim_clock: SimClock) -> JournalService:
    return JournalService(repository, sim_clock)


@pytest.fixture
def sample_trades() -> list[Trade]:
    """Three days: +500, +100, -50 (out of chronological order)."""
    return [
        make_trade("2024-01-02", 100.0, TradeStatus.WIN, Direction.SELL),
        make_trade("2024-01-01", 300.0, TradeStatus.WIN),
        make_trade("2024-01-03", -50.0, TradeStatus.LOSS, Direction.SELL),
        make_trade("2024-01-01", 200.0, TradeStatus.WIN),
    ]
