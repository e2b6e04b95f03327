"""Custom exception hierarchy for the trading journal."""


class JournalError(Exception):
    """Base exception for all trading journal errors."""


# --- Configuration ---
class ConfigError(JournalError):
    """Invalid or missing configuration."""


# --- Storage ---
class StoreError(JournalError):
    """A persisted blob could not be read or written."""


# --- Trades ---
class TradeError(JournalError):
    """Trade collection error."""


class TradeNotFoundError(TradeError):
    """No trade with the given id exists in the collection."""

    def __init__(self, trade_id: str):
        self.trade_id = trade_id
        super().__init__(f"Trade not found: {trade_id}")


class DuplicateTradeIdError(TradeError):
    """Two or more trades in a collection share an id."""

    def __init__(self, trade_ids: list[str]):
        self.trade_ids = trade_ids
        super().__init__(f"Duplicate trade ids: {', '.join(trade_ids)}")
