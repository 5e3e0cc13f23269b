"""Tests for MAE / MFE efficiency."""

import pytest

from journal_analytics.core.enums import TradeStatus
from journal_analytics.journal.efficiency import (
    EfficiencyStats,
    compute_efficiency,
    efficiency_points,
    mae_recovery,
    mfe_capture,
)

from .conftest import make_excursion_trade, make_trade


class TestMaeRecovery:
    def test_winner_recovers_fully(self):
        assert mae_recovery(make_excursion_trade(50.0, mae=80.0, mfe=120.0)) == 1.0

    def test_partial_recovery(self):
        # Down 100 at worst, closed down 25
        assert mae_recovery(make_excursion_trade(-25.0, mae=100.0, mfe=10.0)) == 0.75

    def test_closed_beyond_mae_clamps_to_zero(self):
        assert mae_recovery(make_excursion_trade(-150.0, mae=100.0, mfe=0.0)) == 0.0

    def test_zero_mae_is_full_recovery(self):
        assert mae_recovery(make_excursion_trade(-10.0, mae=0.0, mfe=5.0)) == 1.0

    def test_negative_mae_uses_magnitude(self):
        assert mae_recovery(make_excursion_trade(-50.0, mae=-100.0, mfe=0.0)) == 0.5


class TestMfeCapture:
    def test_partial_capture(self):
        assert mfe_capture(make_excursion_trade(60.0, mae=10.0, mfe=120.0)) == 0.5

    def test_loser_captures_nothing(self):
        assert mfe_capture(make_excursion_trade(-60.0, mae=80.0, mfe=120.0)) == 0.0

    def test_zero_mfe(self):
        assert mfe_capture(make_excursion_trade(10.0, mae=0.0, mfe=0.0)) == 0.0

    def test_capped_at_one(self):
        assert mfe_capture(make_excursion_trade(150.0, mae=0.0, mfe=100.0)) == 1.0


class TestComputeEfficiency:
    def test_empty(self):
        assert compute_efficiency([]) == EfficiencyStats()

    def test_ineligible_trades_ignored(self):
        trades = [
            make_trade(10.0, trade_id="a", max_adverse_price=5.0),
            make_trade(10.0, trade_id="b", max_favorable_price=5.0),
            make_excursion_trade(10.0, mae=1.0, mfe=20.0, status=TradeStatus.OPEN),
        ]
        assert compute_efficiency(trades).eligible_trades == 0

    def test_averages(self):
        trades = [
            make_excursion_trade(60.0, mae=20.0, mfe=120.0, trade_id="w"),
            make_excursion_trade(-25.0, mae=100.0, mfe=40.0, trade_id="l"),
        ]
        eff = compute_efficiency(trades)
        assert eff.eligible_trades == 2
        # MAE: winner 1.0, loser 0.75
        assert eff.mae_efficiency == pytest.approx(87.5)
        # MFE: winner 0.5, loser 0.0
        assert eff.mfe_efficiency == pytest.approx(25.0)
        assert eff.avg_mae == 60.0
        assert eff.avg_mfe == 80.0
        assert eff.avg_mae_winners == 20.0
        assert eff.avg_mae_losers == 100.0
        assert eff.avg_mfe_winners == 120.0
        assert eff.avg_mfe_losers == 40.0

    def test_percentages_bounded(self):
        trades = [
            make_excursion_trade(-500.0, mae=10.0, mfe=1.0, trade_id="a"),
            make_excursion_trade(500.0, mae=0.0, mfe=10.0, trade_id="b"),
        ]
        eff = compute_efficiency(trades)
        assert 0.0 <= eff.mae_efficiency <= 100.0
        assert 0.0 <= eff.mfe_efficiency <= 100.0

    def test_avg_etd_from_recorded_drawdowns(self):
        trades = [
            make_excursion_trade(10.0, mae=1.0, mfe=30.0, trade_id="a", max_drawdown=20.0),
            make_excursion_trade(10.0, mae=1.0, mfe=30.0, trade_id="b"),
        ]
        assert compute_efficiency(trades).avg_etd == 20.0


def test_efficiency_points_sorted_by_pnl():
    trades = [
        make_excursion_trade(30.0, mae=5.0, mfe=60.0, trade_id="b"),
        make_excursion_trade(-10.0, mae=20.0, mfe=5.0, trade_id="a"),
        make_trade(99.0, trade_id="skip"),
    ]
    points = efficiency_points(trades)
    assert [p.trade_id for p in points] == ["a", "b"]
    assert points[1].mfe_capture == 0.5
    assert points[0].mae_recovery == 0.5
