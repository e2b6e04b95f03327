"""Performance metrics over a trade collection.

Every function here is pure: it takes a snapshot of trades (in any
order), never mutates it, and returns a defined value for every input.
Empty collections and zero denominators yield ``0`` rather than an
error, ``NaN`` or infinity.

Usage::

    metrics = compute_metrics(trades)
    print(metrics.win_rate, metrics.risk_reward_ratio)

    for day in daily_pnl(trades):
        print(day.date, day.pnl)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from trading_journal.core.enums import Direction, TradeStatus
from trading_journal.core.models import (
    DailyPnL,
    DirectionStats,
    PerformanceMetrics,
    Trade,
    parse_trade_date,
)

logger = logging.getLogger(__name__)


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def chronological(trades: Iterable[Trade]) -> list[Trade]:
    """Trades sorted ascending by date.

    ``sorted`` is stable, so trades sharing a date keep their original
    relative order.
    """
    return sorted(trades, key=lambda t: t.sort_key)


# ---------------------------------------------------------------------- #
# Ratios and averages                                                     #
# ---------------------------------------------------------------------- #

def win_rate(trades: Sequence[Trade]) -> float:
    """Percentage of trades labelled Win.  0 for an empty collection."""
    if not trades:
        return 0.0
    wins = sum(1 for t in trades if t.status == TradeStatus.WIN)
    return wins / len(trades) * 100


def average_win(trades: Iterable[Trade]) -> float:
    return _mean([t.profit_loss for t in trades if t.status == TradeStatus.WIN])


def average_loss(trades: Iterable[Trade]) -> float:
    """Signed mean P&L of Loss trades (usually negative)."""
    return _mean([t.profit_loss for t in trades if t.status == TradeStatus.LOSS])


def risk_reward_ratio(trades: Sequence[Trade]) -> float:
    """``|average_win / average_loss|``, or 0 when there is no average loss."""
    avg_loss = average_loss(trades)
    if avg_loss == 0:
        return 0.0
    return abs(average_win(trades) / avg_loss)


def largest_win(trades: Sequence[Trade]) -> float:
    """Maximum P&L across all trades, regardless of status."""
    return max((t.profit_loss for t in trades), default=0.0)


def largest_loss(trades: Sequence[Trade]) -> float:
    """Minimum P&L across all trades, regardless of status."""
    return min((t.profit_loss for t in trades), default=0.0)


# ---------------------------------------------------------------------- #
# Streaks                                                                 #
# ---------------------------------------------------------------------- #

def max_consecutive(trades: Iterable[Trade]) -> tuple[int, int]:
    """Longest Win and Loss streaks in chronological order.

    Any trade whose status differs from the running streak resets it;
    a BE trade resets both.

    Returns
    -------
    tuple[int, int]
        ``(max_consecutive_wins, max_consecutive_losses)``
    """
    max_wins = max_losses = 0
    cur_wins = cur_losses = 0
    for trade in chronological(trades):
        if trade.status == TradeStatus.WIN:
            cur_wins += 1
            cur_losses = 0
            max_wins = max(max_wins, cur_wins)
        elif trade.status == TradeStatus.LOSS:
            cur_losses += 1
            cur_wins = 0
            max_losses = max(max_losses, cur_losses)
        else:
            cur_wins = cur_losses = 0
    return max_wins, max_losses


# ---------------------------------------------------------------------- #
# Daily aggregation                                                       #
# ---------------------------------------------------------------------- #

def daily_totals(trades: Iterable[Trade]) -> dict[str, float]:
    """Sum of P&L per exact ``date`` string, in first-seen order.

    No normalisation: ``"2024-01-05"`` and ``"2024-01-05T00:00:00"`` are
    different buckets.
    """
    totals: dict[str, float] = {}
    for trade in trades:
        totals[trade.date] = totals.get(trade.date, 0.0) + trade.profit_loss
    return totals


def daily_pnl(trades: Iterable[Trade], *, descending: bool = False) -> list[DailyPnL]:
    """One ``DailyPnL`` per distinct date, sorted by date."""
    totals = daily_totals(trades)
    ordered = sorted(totals, key=parse_trade_date, reverse=descending)
    return [DailyPnL(date=d, pnl=totals[d]) for d in ordered]


def recent_daily_pnl(trades: Iterable[Trade], days: int = 14) -> list[DailyPnL]:
    """The latest *days* trading days, oldest first (dashboard chart)."""
    if days <= 0:
        return []
    return daily_pnl(trades)[-days:]


def daily_pnl_history(trades: Iterable[Trade], days: int = 30) -> list[DailyPnL]:
    """The latest *days* trading days, newest first (analytics calendar)."""
    if days <= 0:
        return []
    return daily_pnl(trades, descending=True)[:days]


# ---------------------------------------------------------------------- #
# Direction breakdown                                                     #
# ---------------------------------------------------------------------- #

def direction_stats(trades: Iterable[Trade], direction: Direction) -> DirectionStats:
    """Count, wins, win rate and total P&L for one direction."""
    subset = [t for t in trades if t.direction == direction]
    wins = sum(1 for t in subset if t.status == TradeStatus.WIN)
    return DirectionStats(
        direction=direction,
        trades=len(subset),
        wins=wins,
        win_rate=wins / len(subset) * 100 if subset else 0.0,
        pnl=sum(t.profit_loss for t in subset),
    )


def direction_breakdown(trades: Sequence[Trade]) -> list[DirectionStats]:
    return [direction_stats(trades, d) for d in (Direction.BUY, Direction.SELL)]


# ---------------------------------------------------------------------- #
# Aggregate                                                               #
# ---------------------------------------------------------------------- #

def compute_metrics(trades: Iterable[Trade]) -> PerformanceMetrics:
    """Compute every performance statistic for the given trades."""
    snapshot = list(trades)
    if not snapshot:
        return PerformanceMetrics(direction_breakdown=direction_breakdown([]))

    by_status = {s: 0 for s in TradeStatus}
    for trade in snapshot:
        by_status[trade.status] += 1
    max_wins, max_losses = max_consecutive(snapshot)

    metrics = PerformanceMetrics(
        total_trades=len(snapshot),
        total_pnl=sum(t.profit_loss for t in snapshot),
        win_count=by_status[TradeStatus.WIN],
        loss_count=by_status[TradeStatus.LOSS],
        breakeven_count=by_status[TradeStatus.BREAKEVEN],
        win_rate=win_rate(snapshot),
        average_win=average_win(snapshot),
        average_loss=average_loss(snapshot),
        risk_reward_ratio=risk_reward_ratio(snapshot),
        largest_win=largest_win(snapshot),
        largest_loss=largest_loss(snapshot),
        max_consecutive_wins=max_wins,
        max_consecutive_losses=max_losses,
        direction_breakdown=direction_breakdown(snapshot),
    )
    logger.debug(
        "Computed metrics over %d trades: win_rate=%.1f rr=%.2f",
        metrics.total_trades, metrics.win_rate, metrics.risk_reward_ratio,
    )
    return metrics
