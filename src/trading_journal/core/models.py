"""Core domain models used across the trading journal.

Persisted records (``Trade``, ``ConsistencyCycle``, ``JournalSettings``)
round-trip through JSON with the camelCase field names the store has
always used (``profitLoss``, ``highestDayProfit`` ...).  Python code uses
the snake_case attribute names; both are accepted on input.

Derived records (``DailyPnL``, ``EquityPoint`` ...) are recomputed on
demand and never persisted.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .enums import Direction, TradeStatus
from .ids import new_id

DEFAULT_CONSISTENCY_PERCENTAGE = 40.0


def parse_trade_date(value: str) -> datetime:
    """Parse an ISO 8601 date or datetime string into a naive UTC datetime.

    Used as the chronological sort key.  Aware datetimes are converted to
    UTC before the tzinfo is dropped so mixed inputs stay comparable.
    """
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def trade_day(value: str) -> date:
    """Calendar day of a trade date string."""
    return parse_trade_date(value).date()


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
        frozen=True,
    )

    def to_json_dict(self) -> dict:
        """Plain JSON-safe dict using the persisted (camelCase) field names."""
        return self.model_dump(mode="json", by_alias=True)


# ---------------------------------------------------------------------------
# Persisted records
# ---------------------------------------------------------------------------

class Trade(_CamelModel):
    """One closed or logged position.

    ``status`` is the user's label and is never reconciled with the sign
    of ``profit_loss``.  ``date`` is kept exactly as entered: daily
    aggregation buckets on byte-identical strings.  A price of ``0``
    means the price was not recorded; negative prices are rejected.
    Money and price fields must be finite.
    """

    id: str = Field(default_factory=new_id)
    date: str
    market: str = ""
    direction: Direction = Direction.BUY
    entry: float = Field(default=0.0, ge=0)
    stop_loss: float = Field(default=0.0, ge=0)
    take_profit: float = Field(default=0.0, ge=0)
    risk_percent: float = 1.0
    lot_size: float = Field(default=0.01, gt=0)
    profit_loss: float = 0.0
    notes: str = ""
    status: TradeStatus = TradeStatus.WIN

    @field_validator("date")
    @classmethod
    def _check_iso_date(cls, v: str) -> str:
        try:
            parse_trade_date(v)
        except ValueError as exc:
            raise ValueError(f"date must be ISO 8601, got {v!r}") from exc
        return v

    @property
    def sort_key(self) -> datetime:
        return parse_trade_date(self.date)

    @property
    def day(self) -> date:
        return trade_day(self.date)


class ConsistencyCycle(_CamelModel):
    """Active evaluation period for the consistency rule.

    ``cycle_start_date`` is ``None`` for a cycle that has never been paid
    out; every trade then counts towards it.
    """

    total_profit: float = 0.0
    highest_day_profit: float = 0.0
    cycle_start_date: datetime | None = None
    consistency_percentage: float = DEFAULT_CONSISTENCY_PERCENTAGE

    @field_validator("consistency_percentage")
    @classmethod
    def _clamp_percentage(cls, v: float) -> float:
        return min(max(v, 0.0), 100.0)

    @field_validator("cycle_start_date")
    @classmethod
    def _ensure_utc(cls, v: datetime | None) -> datetime | None:
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class JournalSettings(_CamelModel):
    """User preferences persisted alongside the trades."""

    dark_mode: bool = True
    consistency_percentage: float = DEFAULT_CONSISTENCY_PERCENTAGE


# ---------------------------------------------------------------------------
# Derived records
# ---------------------------------------------------------------------------

class DailyPnL(_CamelModel):
    date: str
    pnl: float


class EquityPoint(_CamelModel):
    """Running total after one trade, in chronological order."""

    date: str  # Raw trade date
    label: str  # Display date, e.g. "Jan 5"
    cumulative_equity: float


class DirectionStats(_CamelModel):
    direction: Direction
    trades: int = 0
    wins: int = 0
    win_rate: float = 0.0
    pnl: float = 0.0


class PerformanceMetrics(_CamelModel):
    """Aggregate statistics over a trade collection."""

    total_trades: int = 0
    total_pnl: float = 0.0
    win_count: int = 0
    loss_count: int = 0
    breakeven_count: int = 0
    win_rate: float = 0.0
    average_win: float = 0.0
    average_loss: float = 0.0
    risk_reward_ratio: float = 0.0
    largest_win: float = 0.0
    largest_loss: float = 0.0
    max_consecutive_wins: int = 0
    max_consecutive_losses: int = 0
    direction_breakdown: list[DirectionStats] = Field(default_factory=list)


class ConsistencyStatus(_CamelModel):
    """A cycle plus the rule evaluation derived from it."""

    cycle: ConsistencyCycle
    used_percent: float
    allowed_percent: float
    is_violated: bool


class DashboardSummary(_CamelModel):
    total_pnl: float = 0.0
    todays_pnl: float = 0.0
    win_rate: float = 0.0
    total_trades: int = 0
    recent_daily_pnl: list[DailyPnL] = Field(default_factory=list)
