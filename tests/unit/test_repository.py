"""Tests for JournalRepository: typed access to the trade store."""

from datetime import datetime, timezone

import pytest

from trading_journal.core.errors import StoreError
from trading_journal.core.models import ConsistencyCycle, JournalSettings
from trading_journal.storage.json_store import JsonFileStore
from trading_journal.storage.memory_store import MemoryStore
from trading_journal.storage.repository import JournalRepository

from ..conftest import make_trade


class TestTrades:
    def test_empty_on_first_use(self, repository):
        assert repository.get_trades() == []

    def test_round_trip_preserves_order(self, repository, sample_trades):
        repository.put_trades(sample_trades)
        assert repository.get_trades() == sample_trades

    def test_persisted_as_camel_case_array(self, sample_trades):
        store = MemoryStore()
        JournalRepository(store).put_trades(sample_trades[:1])
        blob = store.get("trading-journal-trades")
        assert blob[0]["profitLoss"] == 100.0

    def test_malformed_blob_raises(self):
        store = MemoryStore()
        store.put("trading-journal-trades", [{"date": "nope"}])
        with pytest.raises(StoreError, match="trades are malformed"):
            JournalRepository(store).get_trades()


class TestConsistencyCycle:
    def test_default_cycle_on_first_use(self, repository):
        assert repository.get_consistency_cycle() == ConsistencyCycle()

    def test_default_percentage_configurable(self):
        repo = JournalRepository(MemoryStore(), default_percentage=25)
        assert repo.get_consistency_cycle().consistency_percentage == 25

    def test_round_trip(self, repository):
        cycle = ConsistencyCycle(
            total_profit=10.0,
            highest_day_profit=7.0,
            cycle_start_date=datetime(2024, 1, 2, 3, 4, tzinfo=timezone.utc),
            consistency_percentage=30,
        )
        repository.put_consistency_cycle(cycle)
        assert repository.get_consistency_cycle() == cycle

    def test_malformed_blob_raises(self):
        store = MemoryStore()
        store.put("trading-journal-consistency", {"totalProfit": "lots"})
        with pytest.raises(StoreError):
            JournalRepository(store).get_consistency_cycle()


class TestSettings:
    def test_defaults(self, repository):
        assert repository.get_settings() == JournalSettings()

    def test_round_trip(self, repository):
        repository.put_settings(JournalSettings(dark_mode=False, consistency_percentage=20))
        assert repository.get_settings().dark_mode is False


class TestKeyPrefix:
    def test_prefix_applied(self):
        store = MemoryStore()
        repo = JournalRepository(store, key_prefix="acct1-")
        repo.put_trades([make_trade()])
        assert store.get("acct1-trades") is not None
        assert store.get("trading-journal-trades") is None


class TestResetAll:
    def test_restores_defaults(self, repository, sample_trades):
        repository.put_trades(sample_trades)
        repository.put_consistency_cycle(ConsistencyCycle(total_profit=5.0, consistency_percentage=10))
        repository.put_settings(JournalSettings(dark_mode=False, consistency_percentage=10))

        repository.reset_all()

        assert repository.get_trades() == []
        assert repository.get_consistency_cycle() == ConsistencyCycle()
        assert repository.get_settings() == JournalSettings()

    def test_removes_trades_document(self, tmp_path, sample_trades):
        repo = JournalRepository(JsonFileStore(tmp_path))
        repo.put_trades(sample_trades)
        assert (tmp_path / "trading-journal-trades.json").exists()

        repo.reset_all()

        assert not (tmp_path / "trading-journal-trades.json").exists()
        assert (tmp_path / "trading-journal-consistency.json").exists()
        assert repo.get_trades() == []
