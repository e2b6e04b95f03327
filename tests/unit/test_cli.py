"""Tests for the click CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from trading_journal.cli import main


@pytest.fixture(autouse=True)
def _quiet_logs(monkeypatch):
    monkeypatch.setenv("JOURNAL_OBSERVABILITY__LOG_LEVEL", "WARNING")


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def invoke(runner, tmp_path: Path):
    data_dir = str(tmp_path / "data")

    def _invoke(*args: str, input: str | None = None):
        return runner.invoke(main, ["--data-dir", data_dir, *args], input=input)

    return _invoke


def _add(invoke, date: str, pnl: float, status: str = "Win", direction: str = "Buy"):
    result = invoke(
        "add", "--date", date, "--market", "EURUSD", f"--pnl={pnl}",
        "--status", status, "--direction", direction,
    )
    assert result.exit_code == 0, result.output
    return result.output.split("Added trade ")[1].strip()


class TestTradeCommands:
    def test_add_and_list(self, invoke):
        _add(invoke, "2024-01-01", 500)
        _add(invoke, "2024-01-02", -50, status="Loss")
        result = invoke("list")
        assert result.exit_code == 0
        assert "2 trades found" in result.output

    def test_list_filter(self, invoke):
        _add(invoke, "2024-01-01", 500)
        _add(invoke, "2024-01-02", -50, status="Loss")
        result = invoke("list", "--status", "Loss")
        assert "1 trades found" in result.output

    def test_list_bad_sort_field(self, invoke):
        result = invoke("list", "--sort", "colour")
        assert result.exit_code != 0
        assert "Unknown sort field" in result.output

    def test_add_rejects_bad_date(self, invoke):
        result = invoke("add", "--date", "tomorrow", "--market", "X", "--pnl", "1")
        assert result.exit_code != 0
        assert "ISO 8601" in result.output

    @pytest.mark.parametrize("pnl", ["nan", "inf"])
    def test_add_rejects_non_finite_pnl(self, invoke, tmp_path, pnl):
        result = invoke("add", "--date", "2024-01-01", "--market", "X", "--pnl", pnl)
        assert result.exit_code != 0
        assert not (tmp_path / "data" / "trading-journal-trades.json").exists()

    def test_edit(self, invoke, tmp_path):
        trade_id = _add(invoke, "2024-01-01", 500)
        result = invoke("edit", trade_id, "--pnl", "250")
        assert result.exit_code == 0
        stored = json.loads((tmp_path / "data" / "trading-journal-trades.json").read_text())
        assert stored[0]["profitLoss"] == 250.0

    def test_edit_prices_risk_and_lot(self, invoke, tmp_path):
        trade_id = _add(invoke, "2024-01-01", 500)
        result = invoke(
            "edit", trade_id,
            "--entry", "1.25", "--stop-loss", "1.24", "--take-profit", "1.28",
            "--risk-percent", "0.5", "--lot-size", "0.3",
        )
        assert result.exit_code == 0, result.output
        stored = json.loads((tmp_path / "data" / "trading-journal-trades.json").read_text())[0]
        assert (stored["entry"], stored["stopLoss"], stored["takeProfit"]) == (1.25, 1.24, 1.28)
        assert stored["riskPercent"] == 0.5
        assert stored["lotSize"] == 0.3
        assert stored["profitLoss"] == 500.0

    def test_edit_rejects_invalid_lot_size(self, invoke):
        trade_id = _add(invoke, "2024-01-01", 500)
        result = invoke("edit", trade_id, "--lot-size", "0")
        assert result.exit_code != 0

    def test_edit_unknown(self, invoke):
        result = invoke("edit", "missing", "--pnl", "1")
        assert result.exit_code != 0
        assert "Trade not found" in result.output

    def test_delete_requires_confirmation(self, invoke):
        trade_id = _add(invoke, "2024-01-01", 500)
        result = invoke("delete", trade_id, input="n\n")
        assert result.exit_code != 0
        assert "1 trades found" in invoke("list").output

    def test_delete_confirmed(self, invoke):
        trade_id = _add(invoke, "2024-01-01", 500)
        result = invoke("delete", trade_id, input="y\n")
        assert result.exit_code == 0
        assert "0 trades found" in invoke("list").output


class TestAnalyticsCommands:
    def test_stats(self, invoke):
        _add(invoke, "2024-01-01", 200)
        _add(invoke, "2024-01-02", -100, status="Loss")
        result = invoke("stats")
        assert result.exit_code == 0
        assert "Win rate:          50.0%" in result.output
        assert "Risk/reward:       1:2.00" in result.output

    def test_stats_empty(self, invoke):
        result = invoke("stats")
        assert result.exit_code == 0
        assert "Win rate:          0.0%" in result.output

    def test_dashboard(self, invoke):
        _add(invoke, "2024-01-01", 1234.5)
        result = invoke("dashboard")
        assert "Total P&L:   $1,234.50" in result.output

    def test_equity(self, invoke):
        _add(invoke, "2024-01-02", 10)
        _add(invoke, "2024-01-01", 5)
        lines = invoke("equity").output.strip().splitlines()
        assert lines[0].startswith("Jan 1")
        assert lines[-1].endswith("$15.00")


class TestConsistencyCommands:
    def test_violation_reported(self, invoke):
        _add(invoke, "2024-01-01", 500)
        _add(invoke, "2024-01-02", 100)
        _add(invoke, "2024-01-03", -50, status="Loss")
        result = invoke("consistency")
        assert "Rule Violated" in result.output
        assert "90.9% / 40%" in result.output

    def test_within_rule(self, invoke):
        result = invoke("consistency")
        assert "Within Rule" in result.output
        assert "first trade" in result.output

    def test_threshold(self, invoke):
        assert invoke("threshold", "95").exit_code == 0
        _add(invoke, "2024-01-01", 500)
        _add(invoke, "2024-01-02", 100)
        assert "Within Rule" in invoke("consistency").output

    def test_threshold_out_of_range(self, invoke):
        result = invoke("threshold", "150")
        assert result.exit_code != 0
        assert "between 0 and 100" in result.output
        assert "/ 40%" in invoke("consistency").output

    def test_payout_aborts_without_confirmation(self, invoke):
        _add(invoke, "2024-01-01", 500)
        result = invoke("payout", input="n\n")
        assert result.exit_code != 0
        assert "Total profit:     $500.00" in invoke("consistency").output

    def test_payout(self, invoke):
        _add(invoke, "2024-01-01", 500)
        result = invoke("payout", "--yes")
        assert result.exit_code == 0
        assert "Payout recorded" in result.output
        assert "Total profit:     $0.00" in invoke("consistency").output


class TestDataCommands:
    def test_export_and_import(self, invoke, tmp_path):
        _add(invoke, "2024-01-01", 500)
        out = tmp_path / "backup.json"
        assert invoke("export", "--output", str(out)).exit_code == 0
        exported = json.loads(out.read_text())
        assert exported[0]["profitLoss"] == 500.0

        invoke("reset", "--yes")
        result = invoke("import", str(out), "--yes")
        assert "Imported 1 trades" in result.output
        assert "1 trades found" in invoke("list").output

    def test_import_rejects_repeated_ids(self, invoke, tmp_path):
        _add(invoke, "2024-01-01", 500)
        out = tmp_path / "backup.json"
        invoke("export", "--output", str(out))
        exported = json.loads(out.read_text())
        out.write_text(json.dumps(exported * 2))

        result = invoke("import", str(out), "--yes")
        assert result.exit_code != 0
        assert "Duplicate trade ids" in result.output
        assert "1 trades found" in invoke("list").output

    def test_export_csv(self, invoke, tmp_path):
        _add(invoke, "2024-01-01", 500)
        out = tmp_path / "trades.csv"
        invoke("export", "--csv", "--output", str(out))
        assert out.read_text().startswith("id,date,market")

    def test_reset_needs_two_confirmations(self, invoke):
        _add(invoke, "2024-01-01", 500)
        result = invoke("reset", input="y\nn\n")
        assert result.exit_code != 0
        assert "1 trades found" in invoke("list").output

        result = invoke("reset", input="y\ny\n")
        assert result.exit_code == 0
        assert "All data has been reset" in result.output
        assert "0 trades found" in invoke("list").output
