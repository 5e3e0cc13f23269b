"""Test the journal-analytics CLI."""

import json
import sys

import pytest
from click.testing import CliRunner

from journal_analytics.cli import load_trades, main
from journal_analytics.core.errors import TradeDataError

TRADES = [
    {
        "id": "a", "symbol": "ES", "status": "CLOSED", "strategy": "orb",
        "exitDate": "2024-03-14T15:00:00", "netPnl": 150, "commission": 5,
        "entryPrice": 100, "quantity": 10,
        "maxAdversePrice": 40, "maxFavorablePrice": 300,
    },
    {
        "id": "b", "symbol": "NQ", "status": "CLOSED", "strategy": "fade",
        "exitDate": "2024-03-15T10:00:00", "netPnl": -50, "commission": 5,
        "entryPrice": 100, "quantity": 10,
        "maxAdversePrice": 100, "maxFavorablePrice": 20,
        "breakEvenWorked": False, "maxPotentialProfit": 120,
    },
    {"id": "c", "symbol": "CL", "status": "OPEN", "netPnl": 999},
]


@pytest.fixture
def trades_file(tmp_path):
    path = tmp_path / "trades.json"
    path.write_text(json.dumps(TRADES))
    return str(path)


def run(*args, input=None):
    result = CliRunner().invoke(main, ["--log-level", "ERROR", *args], input=input)
    return result


def output_json(result):
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


class TestLoadTrades:
    def test_list(self, tmp_path):
        path = tmp_path / "t.json"
        path.write_text(json.dumps(TRADES))
        with open(path) as f:
            assert [t.trade_id for t in load_trades(f)] == ["a", "b", "c"]

    def test_wrapped_object(self, tmp_path):
        path = tmp_path / "t.json"
        path.write_text(json.dumps({"trades": TRADES[:1]}))
        with open(path) as f:
            assert len(load_trades(f)) == 1

    def test_non_objects_skipped(self, tmp_path):
        path = tmp_path / "t.json"
        path.write_text(json.dumps([TRADES[0], 42, "x"]))
        with open(path) as f:
            assert len(load_trades(f)) == 1

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "t.json"
        path.write_text("{nope")
        with open(path) as f, pytest.raises(TradeDataError, match="valid JSON"):
            load_trades(f)

    @pytest.mark.skipif(
        not hasattr(sys, "set_int_max_str_digits"),
        reason="interpreter has no int-string length limit",
    )
    def test_integer_past_digit_limit(self, tmp_path):
        path = tmp_path / "t.json"
        path.write_text('[{"netPnl": ' + "9" * 5000 + "}]")
        with open(path) as f, pytest.raises(TradeDataError, match="valid JSON"):
            load_trades(f)

    def test_wrong_shape(self, tmp_path):
        path = tmp_path / "t.json"
        path.write_text('{"count": 3}')
        with open(path) as f, pytest.raises(TradeDataError):
            load_trades(f)


class TestCommands:
    def test_stats(self, trades_file):
        data = output_json(run("stats", trades_file))
        assert data["total_trades"] == 2
        assert data["open_trades"] == 1
        assert data["win_rate"] == 50.0
        assert data["profit_factor"] == 3.0

    def test_stats_by_strategy(self, trades_file):
        data = output_json(run("stats", trades_file, "--by-strategy"))
        assert [row["strategy"] for row in data] == ["orb", "fade"]

    def test_stats_from_stdin(self):
        data = output_json(run("stats", input=json.dumps(TRADES)))
        assert data["total_trades"] == 2

    def test_daily(self, trades_file):
        data = output_json(run("daily", trades_file, "--days", "3", "--today", "2024-03-15"))
        assert [d["date"] for d in data["days"]] == ["2024-03-13", "2024-03-14", "2024-03-15"]
        assert [d["pnl"] for d in data["days"]] == [0.0, 150.0, -50.0]
        assert data["summary"]["trading_days"] == 2

    def test_daily_period(self, trades_file):
        data = output_json(run("daily", trades_file, "--period", "month"))
        assert data == [{"period": "2024-03", "pnl": 100.0, "cumulative_pnl": 100.0, "trade_count": 2}]

    def test_daily_invalid_window(self, trades_file):
        result = run("daily", trades_file, "--days", "0")
        assert result.exit_code != 0
        assert "at least 1 day" in result.output

    def test_cumulative(self, trades_file):
        data = output_json(run("cumulative", trades_file))
        assert [p["cumulative_pnl"] for p in data] == [150.0, 100.0]

    def test_efficiency(self, trades_file):
        data = output_json(run("efficiency", trades_file))
        assert data["eligible_trades"] == 2
        # winner 1.0, loser 0.5
        assert data["mae_efficiency"] == 75.0

    def test_efficiency_per_trade(self, trades_file):
        data = output_json(run("efficiency", trades_file, "--per-trade"))
        assert [p["trade_id"] for p in data] == ["b", "a"]

    def test_streaks(self, trades_file):
        data = output_json(run("streaks", trades_file))
        assert data == {"current_streak": -1, "max_win_streak": 1, "max_loss_streak": 1}

    def test_what_if_all(self, trades_file):
        data = output_json(run("what-if", trades_file))
        assert len(data) == 4

    def test_what_if_single(self, trades_file):
        data = output_json(run("what-if", trades_file, "--scenario", "no_stop_loss"))
        # (300 - 5) + (20 - 5)
        assert data["scenario_pnl"] == 310.0

    def test_report(self, trades_file):
        data = output_json(run("report", trades_file, "--days", "7", "--today", "2024-03-15", "--pretty"))
        assert data["window_days"] == 7
        assert len(data["daily_pnl"]) == 7
        assert data["stats"]["net_pnl"] == 100.0
        assert data["breakeven"]["trades_with_be"] == 1

    def test_bad_input_is_click_error(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("[1, 2")
        result = run("stats", str(path))
        assert result.exit_code == 1
        assert "valid JSON" in result.output

    def test_bad_config(self, tmp_path, trades_file):
        cfg = tmp_path / "c.toml"
        cfg.write_text("default_window_days = 0\n")
        result = CliRunner().invoke(main, ["--config", str(cfg), "stats", trades_file])
        assert result.exit_code == 1

    def test_config_window(self, tmp_path, trades_file):
        cfg = tmp_path / "c.toml"
        cfg.write_text("default_window_days = 2\n")
        result = CliRunner().invoke(
            main,
            ["--config", str(cfg), "--log-level", "ERROR", "daily", trades_file, "--today", "2024-03-15"],
        )
        assert len(output_json(result)["days"]) == 2
