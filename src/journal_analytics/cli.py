"""CLI entry point for journal analytics."""

from __future__ import annotations

import json
from typing import IO, Any

import click

from .core.config import Settings, load_settings
from .core.enums import PnlPeriod, WhatIfScenario
from .core.errors import JournalAnalyticsError, TradeDataError
from .journal.record import TradeRecord
from .observability.logger import get_logger, new_run_id, setup_logging

logger = get_logger(__name__)


@click.group()
@click.option("--config", default=None, help="TOML config file path")
@click.option("--log-level", default=None, help="Override log level (DEBUG, INFO, ...)")
@click.pass_context
def main(ctx: click.Context, config: str | None, log_level: str | None) -> None:
    """Trade journal analytics."""
    try:
        settings = load_settings(config)
    except JournalAnalyticsError as exc:
        raise click.ClickException(str(exc)) from exc

    obs = settings.observability
    setup_logging(level=log_level or obs.log_level, format=obs.log_format)
    new_run_id()
    ctx.obj = settings


def load_trades(stream: IO[str]) -> list[TradeRecord]:
    """Read a JSON list of trade objects (or ``{"trades": [...]}``)."""
    try:
        payload = json.load(stream)
    except ValueError as exc:
        # JSONDecodeError, or an integer literal past the int-string limit
        raise TradeDataError(f"Input is not valid JSON: {exc}") from exc

    if isinstance(payload, dict) and isinstance(payload.get("trades"), list):
        payload = payload["trades"]
    if not isinstance(payload, list):
        raise TradeDataError("Expected a JSON list of trade objects")

    trades = []
    for i, raw in enumerate(payload):
        if not isinstance(raw, dict):
            logger.warning("trade_entry_skipped", index=i, reason="not an object")
            continue
        trades.append(TradeRecord.from_dict(raw))
    logger.info("trades_loaded", count=len(trades))
    return trades


def _read(trades_file: IO[str]) -> list[TradeRecord]:
    try:
        return load_trades(trades_file)
    except JournalAnalyticsError as exc:
        raise click.ClickException(str(exc)) from exc


def _emit(data: Any, pretty: bool) -> None:
    click.echo(json.dumps(data, indent=2 if pretty else None, default=str))


_trades_arg = click.argument("trades_file", type=click.File("r"), default="-")
_pretty_opt = click.option("--pretty", is_flag=True, help="Indent JSON output")


@main.command()
@_trades_arg
@_pretty_opt
@click.option("--by-strategy", is_flag=True, help="Break down per strategy")
@click.pass_obj
def stats(settings: Settings, trades_file: IO[str], pretty: bool, by_strategy: bool) -> None:
    """Win rate, profit factor and averages."""
    from .journal.stats import compute_trade_stats, stats_by_strategy

    trades = _read(trades_file)
    cap = settings.profit_factor_cap
    if by_strategy:
        _emit([p.to_dict() for p in stats_by_strategy(trades, profit_factor_cap=cap)], pretty)
    else:
        _emit(compute_trade_stats(trades, profit_factor_cap=cap).to_dict(), pretty)


@main.command()
@_trades_arg
@_pretty_opt
@click.option("--days", default=None, type=int, help="Window length (default from config)")
@click.option("--today", default=None, type=click.DateTime(["%Y-%m-%d"]), help="Last day of the window")
@click.option(
    "--period",
    default=None,
    type=click.Choice([p.value for p in PnlPeriod]),
    help="Sparse whole-history buckets instead of a dense window",
)
@click.pass_obj
def daily(
    settings: Settings,
    trades_file: IO[str],
    pretty: bool,
    days: int | None,
    today: Any,
    period: str | None,
) -> None:
    """Daily P&L over a trailing window."""
    from .journal.daily import daily_pnl, period_pnl, summarize_daily
    from .journal.dates import resolve_tz

    trades = _read(trades_file)
    try:
        tz = resolve_tz(settings.timezone)
        if period:
            _emit([p.to_dict() for p in period_pnl(trades, period, tz=tz)], pretty)
            return
        points = daily_pnl(
            trades,
            days if days is not None else settings.default_window_days,
            today=today,
            tz=tz,
        )
    except JournalAnalyticsError as exc:
        raise click.ClickException(str(exc)) from exc

    _emit({
        "days": [p.to_dict() for p in points],
        "summary": summarize_daily(points).to_dict(),
    }, pretty)


@main.command()
@_trades_arg
@_pretty_opt
def cumulative(trades_file: IO[str], pretty: bool) -> None:
    """Chronological running P&L."""
    from .journal.cumulative import cumulative_pnl

    _emit([p.to_dict() for p in cumulative_pnl(_read(trades_file))], pretty)


@main.command()
@_trades_arg
@_pretty_opt
@click.option("--per-trade", is_flag=True, help="Emit per-trade ratios")
def efficiency(trades_file: IO[str], pretty: bool, per_trade: bool) -> None:
    """MAE recovery and MFE capture."""
    from .journal.efficiency import compute_efficiency, efficiency_points

    trades = _read(trades_file)
    if per_trade:
        _emit([p.to_dict() for p in efficiency_points(trades)], pretty)
    else:
        _emit(compute_efficiency(trades).to_dict(), pretty)


@main.command()
@_trades_arg
@_pretty_opt
def streaks(trades_file: IO[str], pretty: bool) -> None:
    """Current and longest win/loss streaks."""
    from .journal.streaks import compute_streaks

    _emit(compute_streaks(_read(trades_file)).to_dict(), pretty)


@main.command("what-if")
@_trades_arg
@_pretty_opt
@click.option(
    "--scenario",
    default=None,
    type=click.Choice([s.value for s in WhatIfScenario]),
    help="Single scenario (default: all)",
)
def what_if_cmd(trades_file: IO[str], pretty: bool, scenario: str | None) -> None:
    """Replay trades under alternative management."""
    from .journal.what_if import all_scenarios, what_if

    trades = _read(trades_file)
    if scenario:
        _emit(what_if(trades, scenario).to_dict(), pretty)
    else:
        _emit([r.to_dict() for r in all_scenarios(trades)], pretty)


@main.command()
@_trades_arg
@_pretty_opt
@click.option("--days", default=None, type=int, help="Window length (default from config)")
@click.option("--today", default=None, type=click.DateTime(["%Y-%m-%d"]), help="Last day of the window")
@click.pass_obj
def report(
    settings: Settings,
    trades_file: IO[str],
    pretty: bool,
    days: int | None,
    today: Any,
) -> None:
    """Full dashboard snapshot."""
    from .journal.aggregator import TradePerformanceAggregator

    trades = _read(trades_file)
    try:
        derived = TradePerformanceAggregator(settings).aggregate(
            trades, window_days=days, today=today,
        )
    except JournalAnalyticsError as exc:
        raise click.ClickException(str(exc)) from exc
    _emit(derived.to_dict(), pretty)


if __name__ == "__main__":
    main()
