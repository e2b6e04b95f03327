"""Trade export: JSON backup and CSV for external analysis.

The JSON form is the same array of trade objects the store persists, so
an export can be imported back without loss.

Usage::

    json_str = to_json(trades)
    filename = export_filename(clock)
    trades_again = from_json(json_str)
"""

from __future__ import annotations

import csv
import io
import json
import logging
from collections.abc import Sequence

from pydantic import TypeAdapter, ValidationError

from trading_journal.core.clock import IClock, WallClock
from trading_journal.core.errors import JournalError
from trading_journal.core.models import Trade

from .trade_log import ensure_unique_ids

logger = logging.getLogger(__name__)

_TRADE_LIST = TypeAdapter(list[Trade])

# CSV columns, persisted names
CSV_COLUMNS = [
    "id",
    "date",
    "market",
    "direction",
    "entry",
    "stopLoss",
    "takeProfit",
    "riskPercent",
    "lotSize",
    "profitLoss",
    "status",
    "notes",
]


def to_json(trades: Sequence[Trade], *, indent: int = 2) -> str:
    """Serialize trades as a JSON array."""
    return json.dumps([t.to_json_dict() for t in trades], indent=indent)


def from_json(payload: str | bytes) -> list[Trade]:
    """Parse a JSON array produced by :func:`to_json`.

    Raises
    ------
    JournalError
        The payload is not a valid array of trades, or repeats a trade id
        (``DuplicateTradeIdError``).
    """
    try:
        trades = _TRADE_LIST.validate_json(payload)
    except ValidationError as exc:
        raise JournalError(f"Invalid trade export: {exc}") from exc
    ensure_unique_ids(trades)
    return trades


def to_csv(trades: Sequence[Trade]) -> str:
    """Serialize trades as CSV with a header row.

    Newlines inside notes are flattened to spaces.
    """
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=CSV_COLUMNS, extrasaction="ignore")
    writer.writeheader()
    for trade in trades:
        row = trade.to_json_dict()
        row["notes"] = " ".join(row["notes"].splitlines()).strip()
        writer.writerow(row)
    return buf.getvalue()


def export_filename(clock: IClock | None = None, *, suffix: str = "json") -> str:
    """Suggested download name, e.g. ``trading-journal-2024-03-01.json``."""
    today = (clock or WallClock()).now().date().isoformat()
    return f"trading-journal-{today}.{suffix}"
