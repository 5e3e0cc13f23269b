"""Tests for the cumulative P&L series."""

from datetime import datetime, timedelta, timezone

from journal_analytics.core.enums import TradeStatus
from journal_analytics.journal.cumulative import chronological, cumulative_pnl

from .conftest import make_series, make_trade


def test_empty():
    assert cumulative_pnl([]) == []


def test_no_qualifying_trades_gives_empty_series():
    trades = [make_trade(10.0, status=TradeStatus.OPEN), make_trade(None)]
    assert cumulative_pnl(trades) == []


def test_running_total():
    points = cumulative_pnl(make_series([100.0, -40.0, 15.0]))
    assert [p.cumulative_pnl for p in points] == [100.0, 60.0, 75.0]
    assert [p.trade_count for p in points] == [1, 2, 3]
    assert [p.trade_pnl for p in points] == [100.0, -40.0, 15.0]


def test_sorted_regardless_of_input_order(base_time):
    trades = [
        make_trade(1.0, trade_id="late", exit_date=base_time + timedelta(days=2)),
        make_trade(2.0, trade_id="early", exit_date=base_time - timedelta(days=2)),
        make_trade(3.0, trade_id="mid", exit_date=base_time),
    ]
    points = cumulative_pnl(trades)
    assert [p.trade_id for p in points] == ["early", "mid", "late"]
    assert points[-1].cumulative_pnl == 6.0


def test_ties_keep_input_order(base_time):
    trades = [
        make_trade(1.0, trade_id="first", exit_date=base_time),
        make_trade(2.0, trade_id="second", exit_date=base_time),
    ]
    assert [t.trade_id for t in chronological(trades)] == ["first", "second"]


def test_mixed_naive_and_aware_dates():
    trades = [
        make_trade(1.0, trade_id="aware", exit_date=datetime(2030, 1, 1, tzinfo=timezone.utc)),
        make_trade(2.0, trade_id="naive", exit_date=datetime(2020, 1, 1)),
    ]
    assert [p.trade_id for p in cumulative_pnl(trades)] == ["naive", "aware"]


def test_entry_date_used_when_no_exit(base_time):
    trades = [
        make_trade(5.0, trade_id="b", exit_date=base_time),
        make_trade(5.0, trade_id="a", entry_date=base_time - timedelta(hours=3)),
    ]
    assert [p.trade_id for p in cumulative_pnl(trades)] == ["a", "b"]


def test_last_point_equals_realized_total():
    pnls = [12.5, -3.25, 0.0, 40.0]
    points = cumulative_pnl(make_series(pnls))
    assert points[-1].cumulative_pnl == sum(pnls)


def test_to_dict():
    data = cumulative_pnl(make_series([1.0]))[0].to_dict()
    assert data["cumulative_pnl"] == 1.0
    assert isinstance(data["date"], str)
