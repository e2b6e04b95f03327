"""Headline figures for the dashboard view."""

from __future__ import annotations

from collections.abc import Sequence

from trading_journal.core.clock import IClock, WallClock
from trading_journal.core.models import DashboardSummary, Trade

from .metrics import recent_daily_pnl, win_rate


def todays_pnl(trades: Sequence[Trade], clock: IClock | None = None) -> float:
    """P&L of trades whose date string is exactly today's ISO date."""
    today = (clock or WallClock()).now().date().isoformat()
    return sum(t.profit_loss for t in trades if t.date == today)


def summarize(
    trades: Sequence[Trade],
    *,
    clock: IClock | None = None,
    days: int = 14,
) -> DashboardSummary:
    return DashboardSummary(
        total_pnl=sum(t.profit_loss for t in trades),
        todays_pnl=todays_pnl(trades, clock),
        win_rate=win_rate(trades),
        total_trades=len(trades),
        recent_daily_pnl=recent_daily_pnl(trades, days),
    )
