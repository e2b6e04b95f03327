"""Trade log operations: edit the collection, filter and sort it for display.

All functions return new lists; the input collection is never mutated.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from pydantic.alias_generators import to_camel

from trading_journal.core.enums import SortOrder, TradeStatus
from trading_journal.core.errors import DuplicateTradeIdError, TradeNotFoundError
from trading_journal.core.ids import new_id
from trading_journal.core.models import Trade

logger = logging.getLogger(__name__)

# Field lookup accepts both attribute and persisted (camelCase) names.
_SORT_FIELDS: dict[str, str] = {
    **{name: name for name in Trade.model_fields},
    **{to_camel(name): name for name in Trade.model_fields},
}


# ---------------------------------------------------------------------- #
# Editing                                                                 #
# ---------------------------------------------------------------------- #

def ensure_unique_ids(trades: Sequence[Trade]) -> None:
    """Raise ``DuplicateTradeIdError`` if any id appears more than once."""
    seen: set[str] = set()
    dupes: list[str] = []
    for trade in trades:
        if trade.id in seen and trade.id not in dupes:
            dupes.append(trade.id)
        seen.add(trade.id)
    if dupes:
        raise DuplicateTradeIdError(dupes)


def find_trade(trades: Sequence[Trade], trade_id: str) -> Trade:
    for trade in trades:
        if trade.id == trade_id:
            return trade
    raise TradeNotFoundError(trade_id)


def add_trade(trades: Sequence[Trade], trade: Trade) -> list[Trade]:
    """Append *trade* under a freshly assigned id."""
    created = trade.model_copy(update={"id": new_id()})
    logger.debug("Adding trade %s (%s %s)", created.id, created.market, created.date)
    return [*trades, created]


def update_trade(
    trades: Sequence[Trade],
    trade_id: str,
    changes: dict[str, Any] | Trade,
) -> list[Trade]:
    """Replace the fields of one trade, keeping its id and position.

    *changes* is either a full replacement ``Trade`` or a dict of field
    updates.  The result is re-validated.
    """
    current = find_trade(trades, trade_id)
    if isinstance(changes, Trade):
        data = changes.model_dump()
    else:
        data = {**current.model_dump(), **changes}
    data["id"] = trade_id
    updated = Trade.model_validate(data)
    return [updated if t.id == trade_id else t for t in trades]


def delete_trade(trades: Sequence[Trade], trade_id: str) -> list[Trade]:
    find_trade(trades, trade_id)
    return [t for t in trades if t.id != trade_id]


# ---------------------------------------------------------------------- #
# Display                                                                 #
# ---------------------------------------------------------------------- #

def filter_trades(
    trades: Sequence[Trade],
    status: TradeStatus | str | None = None,
) -> list[Trade]:
    """Trades with the given status.  ``None`` or ``"all"`` keeps everything."""
    if status is None or status == "all":
        return list(trades)
    wanted = TradeStatus(status)
    return [t for t in trades if t.status == wanted]


def sort_trades(
    trades: Sequence[Trade],
    field: str = "date",
    order: SortOrder | str = SortOrder.DESC,
) -> list[Trade]:
    """Sort by any trade field.

    Text fields compare as strings, numeric fields numerically.

    Raises
    ------
    ValueError
        *field* is not a trade field.
    """
    try:
        attr = _SORT_FIELDS[field]
    except KeyError:
        raise ValueError(f"Unknown sort field: {field!r}") from None
    reverse = SortOrder(order) == SortOrder.DESC
    return sorted(trades, key=lambda t: getattr(t, attr), reverse=reverse)
