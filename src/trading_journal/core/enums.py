"""Enumerations used across the trading journal."""

from enum import Enum


class Direction(str, Enum):
    BUY = "Buy"
    SELL = "Sell"


class TradeStatus(str, Enum):
    """User-assigned outcome label. Independent of the profit/loss sign."""

    WIN = "Win"
    LOSS = "Loss"
    BREAKEVEN = "BE"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class StorageBackend(str, Enum):
    JSON = "json"
    MEMORY = "memory"
