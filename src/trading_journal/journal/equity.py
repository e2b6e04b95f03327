"""Equity curve: running total of P&L in chronological order."""

from __future__ import annotations

from collections.abc import Iterable

from trading_journal.core.models import EquityPoint, Trade, parse_trade_date

from .metrics import chronological


def format_display_date(value: str) -> str:
    """Short chart label for a trade date, e.g. ``"Jan 5"``."""
    d = parse_trade_date(value)
    return f"{d:%b} {d.day}"


def build_curve(trades: Iterable[Trade]) -> list[EquityPoint]:
    """One point per trade, sorted by date, accumulating from zero.

    Trades sharing a date keep their original relative order.  The last
    point's equity equals the sum of all P&L.
    """
    curve: list[EquityPoint] = []
    equity = 0.0
    for trade in chronological(trades):
        equity += trade.profit_loss
        curve.append(
            EquityPoint(
                date=trade.date,
                label=format_display_date(trade.date),
                cumulative_equity=equity,
            )
        )
    return curve
