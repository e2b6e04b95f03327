"""CLI entry point for the trading journal."""

from __future__ import annotations

from pathlib import Path

import click
from pydantic import ValidationError

from .core.config import load_settings
from .core.enums import Direction, SortOrder, TradeStatus
from .core.errors import JournalError
from .core.models import Trade
from .observability.logger import setup_logging
from .service import JournalService

_STATUSES = [s.value for s in TradeStatus]
_DIRECTIONS = [d.value for d in Direction]


def _service(ctx: click.Context) -> JournalService:
    return ctx.obj["service"]


def _fail(exc: Exception) -> None:
    raise click.ClickException(str(exc)) from exc


def _money(value: float) -> str:
    return f"${value:,.2f}"


@click.group()
@click.option("--config", default=None, help="Config file path (TOML)")
@click.option("--data-dir", default=None, help="Directory holding the journal data")
@click.pass_context
def main(ctx: click.Context, config: str | None, data_dir: str | None) -> None:
    """Personal trading journal."""
    overrides = {"data_dir": data_dir} if data_dir else None
    try:
        settings = load_settings(config, overrides)
    except JournalError as exc:
        _fail(exc)
    setup_logging(settings.observability.log_level, settings.observability.log_format)
    ctx.obj = {"settings": settings, "service": JournalService.from_settings(settings)}


# ---------------------------------------------------------------------------
# Trade log
# ---------------------------------------------------------------------------

@main.command()
@click.option("--date", "date_", required=True, help="Trade date (YYYY-MM-DD)")
@click.option("--market", required=True, help="Instrument, e.g. EURUSD")
@click.option("--direction", type=click.Choice(_DIRECTIONS), default="Buy")
@click.option("--entry", type=float, default=0.0)
@click.option("--stop-loss", type=float, default=0.0)
@click.option("--take-profit", type=float, default=0.0)
@click.option("--risk-percent", type=float, default=1.0)
@click.option("--lot-size", type=float, default=0.01)
@click.option("--pnl", type=float, required=True, help="Realized profit/loss")
@click.option("--status", type=click.Choice(_STATUSES), default="Win")
@click.option("--notes", default="")
@click.pass_context
def add(
    ctx: click.Context,
    date_: str,
    market: str,
    direction: str,
    entry: float,
    stop_loss: float,
    take_profit: float,
    risk_percent: float,
    lot_size: float,
    pnl: float,
    status: str,
    notes: str,
) -> None:
    """Log a new trade."""
    try:
        trade = Trade(
            date=date_,
            market=market,
            direction=direction,
            entry=entry,
            stop_loss=stop_loss,
            take_profit=take_profit,
            risk_percent=risk_percent,
            lot_size=lot_size,
            profit_loss=pnl,
            notes=notes,
            status=status,
        )
        created = _service(ctx).add_trade(trade)
    except (ValidationError, JournalError) as exc:
        _fail(exc)
    click.echo(f"Added trade {created.id}")


@main.command()
@click.argument("trade_id")
@click.option("--date", "date_", default=None)
@click.option("--market", default=None)
@click.option("--direction", type=click.Choice(_DIRECTIONS), default=None)
@click.option("--entry", type=float, default=None)
@click.option("--stop-loss", type=float, default=None)
@click.option("--take-profit", type=float, default=None)
@click.option("--risk-percent", type=float, default=None)
@click.option("--lot-size", type=float, default=None)
@click.option("--pnl", type=float, default=None)
@click.option("--status", type=click.Choice(_STATUSES), default=None)
@click.option("--notes", default=None)
@click.pass_context
def edit(
    ctx: click.Context,
    trade_id: str,
    date_: str | None,
    market: str | None,
    direction: str | None,
    entry: float | None,
    stop_loss: float | None,
    take_profit: float | None,
    risk_percent: float | None,
    lot_size: float | None,
    pnl: float | None,
    status: str | None,
    notes: str | None,
) -> None:
    """Edit fields of an existing trade."""
    changes = {
        k: v
        for k, v in {
            "date": date_,
            "market": market,
            "direction": direction,
            "entry": entry,
            "stop_loss": stop_loss,
            "take_profit": take_profit,
            "risk_percent": risk_percent,
            "lot_size": lot_size,
            "profit_loss": pnl,
            "status": status,
            "notes": notes,
        }.items()
        if v is not None
    }
    try:
        _service(ctx).update_trade(trade_id, changes)
    except (ValidationError, JournalError) as exc:
        _fail(exc)
    click.echo(f"Updated trade {trade_id}")


@main.command()
@click.argument("trade_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete(ctx: click.Context, trade_id: str, yes: bool) -> None:
    """Delete a trade."""
    if not yes:
        click.confirm("Are you sure you want to delete this trade?", abort=True)
    try:
        _service(ctx).delete_trade(trade_id)
    except JournalError as exc:
        _fail(exc)
    click.echo(f"Deleted trade {trade_id}")


@main.command("list")
@click.option("--status", type=click.Choice(["all", *_STATUSES]), default="all")
@click.option("--sort", "sort_field", default="date", help="Trade field to sort by")
@click.option("--asc", is_flag=True, help="Ascending order (default descending)")
@click.pass_context
def list_trades(ctx: click.Context, status: str, sort_field: str, asc: bool) -> None:
    """Show the trade log."""
    order = SortOrder.ASC if asc else SortOrder.DESC
    try:
        trades = _service(ctx).list_trades(status=status, sort_field=sort_field, order=order)
    except ValueError as exc:
        _fail(exc)
    click.echo(f"{len(trades)} trades found")
    for t in trades:
        click.echo(
            f"{t.id}  {t.date}  {t.market:<10} {t.direction.value:<4} "
            f"{t.status.value:<4} {_money(t.profit_loss):>12}"
        )


# ---------------------------------------------------------------------------
# Analytics
# ---------------------------------------------------------------------------

@main.command()
@click.pass_context
def stats(ctx: click.Context) -> None:
    """Show performance analytics."""
    service = _service(ctx)
    m = service.metrics()
    click.echo(f"Trades:            {m.total_trades}")
    click.echo(f"Win rate:          {m.win_rate:.1f}%")
    click.echo(f"Average win:       {_money(m.average_win)}")
    click.echo(f"Average loss:      {_money(m.average_loss)}")
    click.echo(f"Risk/reward:       1:{m.risk_reward_ratio:.2f}")
    click.echo(f"Largest win:       {_money(m.largest_win)}")
    click.echo(f"Largest loss:      {_money(m.largest_loss)}")
    click.echo(f"Max consec. wins:  {m.max_consecutive_wins}")
    click.echo(f"Max consec. losses:{m.max_consecutive_losses:>2}")
    for d in m.direction_breakdown:
        click.echo(
            f"{d.direction.value:<5} {d.trades} trades, {d.win_rate:.1f}% win, "
            f"{_money(d.pnl)}"
        )
    history = service.daily_history()
    if history:
        click.echo("Daily P&L:")
        for day in history:
            click.echo(f"  {day.date}  {_money(day.pnl):>12}")


@main.command("dashboard")
@click.pass_context
def dashboard_cmd(ctx: click.Context) -> None:
    """Show headline figures."""
    s = _service(ctx).dashboard()
    click.echo(f"Total P&L:   {_money(s.total_pnl)}")
    click.echo(f"Today's P&L: {_money(s.todays_pnl)}")
    click.echo(f"Win rate:    {s.win_rate:.1f}%")
    click.echo(f"Trades:      {s.total_trades}")


@main.command()
@click.pass_context
def equity(ctx: click.Context) -> None:
    """Show the equity curve."""
    for point in _service(ctx).equity_curve():
        click.echo(f"{point.label:<8} {_money(point.cumulative_equity):>12}")


# ---------------------------------------------------------------------------
# Consistency rule
# ---------------------------------------------------------------------------

@main.command("consistency")
@click.pass_context
def consistency_cmd(ctx: click.Context) -> None:
    """Show the consistency rule tracker."""
    status = _service(ctx).consistency_status()
    cycle = status.cycle
    state = "Rule Violated" if status.is_violated else "Within Rule"
    start = cycle.cycle_start_date.date().isoformat() if cycle.cycle_start_date else "first trade"
    click.echo(state)
    click.echo(f"Total profit:     {_money(cycle.total_profit)}")
    click.echo(f"Highest day:      {_money(cycle.highest_day_profit)}")
    click.echo(f"Consistency used: {status.used_percent:.1f}% / {status.allowed_percent:g}%")
    click.echo(f"Cycle start:      {start}")


@main.command()
@click.argument("value", type=float)
@click.pass_context
def threshold(ctx: click.Context, value: float) -> None:
    """Set the allowed consistency percentage (0-100)."""
    if not _service(ctx).set_threshold(value):
        raise click.ClickException("Please enter a value between 0 and 100")
    click.echo(f"Consistency percentage updated to {value:g}%")


@main.command()
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def payout(ctx: click.Context, yes: bool) -> None:
    """Mark a payout day and reset the consistency cycle."""
    if not yes:
        click.confirm(
            "Are you sure you want to mark a payout day? "
            "This will reset the consistency tracking cycle.",
            abort=True,
        )
    cycle = _service(ctx).apply_payout()
    click.echo(f"Payout recorded; new cycle started {cycle.cycle_start_date.date().isoformat()}")


# ---------------------------------------------------------------------------
# Data management
# ---------------------------------------------------------------------------

@main.command("export")
@click.option("--output", default=None, help="Output file (default: dated name)")
@click.option("--csv", "as_csv", is_flag=True, help="Export CSV instead of JSON")
@click.pass_context
def export_cmd(ctx: click.Context, output: str | None, as_csv: bool) -> None:
    """Export all trades."""
    service = _service(ctx)
    payload = service.export_csv() if as_csv else service.export_json()
    path = Path(output or service.export_filename("csv" if as_csv else "json"))
    path.write_text(payload, encoding="utf-8")
    click.echo(f"Trades exported to {path}")


@main.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def import_cmd(ctx: click.Context, path: str, yes: bool) -> None:
    """Replace all trades with a JSON export."""
    if not yes:
        click.confirm("This will replace all existing trades. Continue?", abort=True)
    try:
        count = _service(ctx).import_json(Path(path).read_bytes())
    except JournalError as exc:
        _fail(exc)
    click.echo(f"Imported {count} trades")


@main.command()
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def reset(ctx: click.Context, yes: bool) -> None:
    """Delete all trades, consistency data and settings."""
    if not yes:
        click.confirm(
            "Are you sure you want to reset ALL data? This action cannot be undone!",
            abort=True,
        )
        click.confirm(
            "This will delete all trades, consistency data, and settings. "
            "Are you absolutely sure?",
            abort=True,
        )
    _service(ctx).reset_all()
    click.echo("All data has been reset")


if __name__ == "__main__":
    main()
