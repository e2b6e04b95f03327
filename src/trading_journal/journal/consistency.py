"""Consistency rule engine for funded-account evaluation.

Prop-firm funded accounts typically cap how much of the total profit in a
payout cycle may come from a single day.  This module derives the cycle
figures from the trade history and evaluates the rule:

    used % = highest day profit / total profit * 100
    violated when used % > allowed %

The cycle is recomputed in full from the trades on every change rather
than accumulated incrementally, so repeated recomputation is idempotent.
A payout resets the cycle and moves its start date forward; only trades
dated after the payout day count towards the new cycle.

Usage::

    cycle = recompute(trades, cycle)
    if is_violated(cycle):
        print(f"{consistency_used_percent(cycle):.1f}% > {cycle.consistency_percentage}%")

    cycle = apply_payout(cycle, clock)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from trading_journal.core.clock import IClock, WallClock
from trading_journal.core.models import ConsistencyCycle, ConsistencyStatus, Trade

from .metrics import daily_totals

logger = logging.getLogger(__name__)


def cycle_trades(trades: Iterable[Trade], cycle: ConsistencyCycle) -> list[Trade]:
    """Trades that belong to *cycle*.

    Everything counts until the first payout.  Afterwards only trades
    whose calendar day is strictly after the payout day are included.
    """
    if cycle.cycle_start_date is None:
        return list(trades)
    start_day = cycle.cycle_start_date.date()
    return [t for t in trades if t.day > start_day]


def recompute(trades: Iterable[Trade], cycle: ConsistencyCycle) -> ConsistencyCycle:
    """Rebuild the cycle's profit figures from the trade history.

    ``total_profit`` is the sum of all daily net results in the cycle.
    ``highest_day_profit`` is the best daily result, floored at zero: a
    cycle made only of losing days reports 0.  The start date and the
    allowed percentage are carried over unchanged.
    """
    total = 0.0
    highest = 0.0
    for profit in daily_totals(cycle_trades(trades, cycle)).values():
        total += profit
        if profit > highest:
            highest = profit

    logger.debug("Recomputed consistency cycle: total=%.2f highest=%.2f", total, highest)
    return cycle.model_copy(
        update={"total_profit": total, "highest_day_profit": highest}
    )


def consistency_used_percent(cycle: ConsistencyCycle) -> float:
    """Share of total profit made on the best day, as a percentage.

    0 whenever the cycle is not in profit.
    """
    if cycle.total_profit <= 0:
        return 0.0
    return cycle.highest_day_profit / cycle.total_profit * 100


def is_violated(cycle: ConsistencyCycle) -> bool:
    """True when the best day exceeds the allowed share.  Equality complies."""
    return consistency_used_percent(cycle) > cycle.consistency_percentage


def evaluate(cycle: ConsistencyCycle) -> ConsistencyStatus:
    used = consistency_used_percent(cycle)
    return ConsistencyStatus(
        cycle=cycle,
        used_percent=used,
        allowed_percent=cycle.consistency_percentage,
        is_violated=used > cycle.consistency_percentage,
    )


def set_threshold(cycle: ConsistencyCycle, value: float) -> ConsistencyCycle:
    """Return a cycle with a new allowed percentage.

    Values outside [0, 100] are rejected: the cycle comes back unchanged.
    """
    if not 0 <= value <= 100:
        logger.warning(
            "Rejected consistency percentage %s (must be within 0-100); keeping %s",
            value, cycle.consistency_percentage,
        )
        return cycle
    logger.info("Consistency percentage set to %s", value)
    return cycle.model_copy(update={"consistency_percentage": float(value)})


def apply_payout(
    cycle: ConsistencyCycle,
    clock: IClock | None = None,
) -> ConsistencyCycle:
    """Close the current cycle after a payout.

    Zeroes the profit figures and stamps a new start date.  Trade history
    is not touched.  Callers are expected to have obtained the user's
    confirmation first.
    """
    now = (clock or WallClock()).now()
    logger.info(
        "Payout recorded: closing cycle with total=%.2f highest=%.2f",
        cycle.total_profit, cycle.highest_day_profit,
    )
    return cycle.model_copy(
        update={
            "total_profit": 0.0,
            "highest_day_profit": 0.0,
            "cycle_start_date": now,
        }
    )
