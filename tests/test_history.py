from datetime import timedelta

import pytest

from stellaraid.fee.error import InvalidFeeValue
from stellaraid.fee.history import FeeHistory, FeeRecord, FeeStats


def _age(record, seconds):
    record.timestamp = record.timestamp - timedelta(seconds=seconds)


def test_fee_record_creation():
    record = FeeRecord.create(100, "Horizon")
    assert record.base_fee_stroops == 100
    assert record.source == "Horizon"
    assert record.age_seconds() >= 0


def test_fee_record_invalid():
    with pytest.raises(InvalidFeeValue):
        FeeRecord.create(-100, "Horizon")


def test_fee_history_add():
    history = FeeHistory(10)
    history.add(100, "Horizon")
    history.add(110, "Horizon")
    assert len(history) == 2


def test_fee_history_add_negative_rejected():
    history = FeeHistory(10)
    with pytest.raises(InvalidFeeValue):
        history.add(-1, "Horizon")
    assert len(history) == 0


def test_fee_history_latest():
    history = FeeHistory(10)
    history.add(100, "Horizon")
    history.add(150, "Horizon")
    assert history.latest().base_fee_stroops == 150


def test_fee_history_oldest():
    history = FeeHistory(10)
    history.add(100, "Horizon")
    history.add(150, "Horizon")
    assert history.oldest().base_fee_stroops == 100


def test_empty_history_has_no_latest_or_oldest():
    history = FeeHistory(10)
    assert history.latest() is None
    assert history.oldest() is None
    assert history.stats() is None


def test_fee_history_capacity_limit():
    history = FeeHistory(3)
    for fee in (100, 110, 120, 130):
        history.add(fee, "Horizon")
    assert len(history) == 3
    assert history.oldest().base_fee_stroops == 110
    assert [r.base_fee_stroops for r in history.all()] == [110, 120, 130]


def test_default_capacity():
    assert FeeHistory.default_capacity().max_records == 1000


def test_fee_stats_calculation():
    records = [FeeRecord.create(f, "Horizon") for f in (100, 150, 200)]
    stats = FeeStats.calculate(records)
    assert stats.min_fee == 100
    assert stats.max_fee == 200
    assert stats.avg_fee == 150.0
    assert stats.total_records == 3
    assert stats.median_fee == 150


def test_fee_stats_median():
    records = [FeeRecord.create(f, "Horizon") for f in (100, 150, 200, 250)]
    stats = FeeStats.calculate(records)
    assert stats.median_fee == 175


def test_fee_stats_constant_fees_have_zero_deviation():
    records = [FeeRecord.create(100, "Horizon") for _ in range(4)]
    stats = FeeStats.calculate(records)
    assert stats.std_dev == 0.0
    assert stats.median_fee == 100


def test_fee_stats_empty():
    assert FeeStats.calculate([]) is None


def test_fee_history_clear():
    history = FeeHistory(10)
    history.add(100, "Horizon")
    assert len(history) == 1
    history.clear()
    assert len(history) == 0
    assert not history


def test_fee_history_stats():
    history = FeeHistory(10)
    for fee in (100, 150, 200):
        history.add(fee, "Horizon")
    stats = history.stats()
    assert stats.min_fee == 100
    assert stats.max_fee == 200
    assert stats.total_records == 3


def test_fee_history_within_time_window():
    history = FeeHistory(10)
    history.add(100, "Horizon")
    assert len(history.within_time_window(60)) == 1


def test_old_records_fall_outside_window():
    history = FeeHistory(10)
    history.add(100, "Horizon")
    history.add(200, "Horizon")
    _age(history.oldest(), 120)
    recent = history.within_time_window(60)
    assert [r.base_fee_stroops for r in recent] == [200]
    assert history.recent_stats(60).total_records == 1


def test_prune_older_than():
    history = FeeHistory(10)
    history.add(100, "Horizon")
    history.add(200, "Horizon")
    _age(history.oldest(), 120)
    history.prune_older_than(60)
    assert len(history) == 1
    assert history.oldest().base_fee_stroops == 200


def test_max_change_percent():
    history = FeeHistory(10)
    history.add(100, "Horizon")
    history.add(150, "Horizon")
    assert history.max_change_percent(60) == 50.0


def test_max_change_percent_needs_two_records():
    history = FeeHistory(10)
    history.add(100, "Horizon")
    assert history.max_change_percent(60) is None


def test_max_change_percent_zero_minimum():
    history = FeeHistory(10)
    history.add(0, "Horizon")
    history.add(100, "Horizon")
    assert history.max_change_percent(60) is None