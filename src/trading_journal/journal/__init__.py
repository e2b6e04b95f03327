"""Trade journal analytics.

Pure transforms over a snapshot of the trade collection.

Key components
--------------
metrics       Win rate, averages, risk/reward, extremes, streaks, daily P&L
consistency   Funded-account consistency rule: recompute, evaluate, payout
equity        Chronological cumulative equity curve
dashboard     Headline figures (total, today, win rate, recent days)
trade_log     Add / edit / delete, filter and sort for display
export        JSON and CSV export
"""

from .consistency import (
    apply_payout,
    consistency_used_percent,
    evaluate,
    is_violated,
    recompute,
    set_threshold,
)
from .equity import build_curve
from .metrics import compute_metrics, daily_pnl

__all__ = [
    "apply_payout",
    "build_curve",
    "compute_metrics",
    "consistency_used_percent",
    "daily_pnl",
    "evaluate",
    "is_violated",
    "recompute",
    "set_threshold",
]
