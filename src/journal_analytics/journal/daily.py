"""Daily and periodic P&L bucketing.

``daily_pnl`` produces a dense calendar: one bucket per day of the
reporting window, zero-filled where nothing was traded, so a chart
always has exactly ``days`` bars.  ``period_pnl`` is the sparse
counterpart used for day/week/month/year P&L charts over the whole
history.

Usage::

    points = daily_pnl(trades, 30)
    summary = summarize_daily(points)
    print(summary.profit_days, summary.avg_daily_pnl)
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import asdict, dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Any, Iterable

from ..core.enums import PnlPeriod
from ..core.errors import InvalidWindowError, UnknownPeriodError
from .dates import as_day, local_day
from .record import TradeRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DailyPnLPoint:
    """One calendar day of realized P&L."""

    date: date
    pnl: float = 0.0
    trade_count: int = 0
    win_count: int = 0
    loss_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "pnl": round(self.pnl, 4),
            "trade_count": self.trade_count,
            "win_count": self.win_count,
            "loss_count": self.loss_count,
        }


@dataclass(frozen=True)
class DailySummary:
    """Headline numbers over a daily window."""

    total_pnl: float = 0.0
    avg_daily_pnl: float = 0.0   # Over days with at least one trade
    profit_days: int = 0
    loss_days: int = 0
    trading_days: int = 0
    total_trades: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            k: round(v, 4) if isinstance(v, float) else v
            for k, v in asdict(self).items()
        }


@dataclass(frozen=True)
class PeriodPnLPoint:
    """Realized P&L for one period plus the running total."""

    period: str
    pnl: float
    cumulative_pnl: float
    trade_count: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class _DayAccumulator:
    pnl: float = 0.0
    trades: int = 0
    wins: int = 0
    losses: int = 0

    def record(self, pnl: float) -> None:
        self.pnl += pnl
        self.trades += 1
        if pnl > 0:
            self.wins += 1
        elif pnl < 0:
            self.losses += 1


def daily_pnl(
    trades: Iterable[TradeRecord],
    days: int,
    *,
    today: date | datetime | None = None,
    tz: tzinfo | None = None,
) -> list[DailyPnLPoint]:
    """Bucket realized P&L by calendar day over the last ``days`` days.

    Parameters
    ----------
    trades : Iterable[TradeRecord]
        Trades to bucket.  Unrealized trades and trades without a usable
        date are skipped.
    days : int
        Window length, ``>= 1``.  The window is ``[today - days + 1, today]``.
    today : date | datetime | None
        Last day of the window.  Defaults to the current local date.
    tz : tzinfo | None
        Reporting timezone for aware datetimes.  ``None`` = system local.

    Returns
    -------
    list[DailyPnLPoint]
        Exactly ``days`` points in ascending date order.

    Raises
    ------
    InvalidWindowError
        If ``days < 1``.
    """
    if days < 1:
        raise InvalidWindowError(days)

    end = as_day(today, tz)
    start = end - timedelta(days=days - 1)
    buckets: dict[date, _DayAccumulator] = {
        start + timedelta(days=i): _DayAccumulator() for i in range(days)
    }

    skipped = 0
    for trade in trades:
        if not trade.is_realized:
            continue
        ts = trade.bucket_date
        if ts is None:
            skipped += 1
            continue
        day = local_day(ts, tz)
        # Outside the window: dropped, not clamped
        if day < start or day > end:
            continue
        buckets[day].record(trade.net_pnl)

    if skipped:
        logger.debug("daily_pnl skipped %d realized trades without a date", skipped)

    return [
        DailyPnLPoint(
            date=day,
            pnl=acc.pnl,
            trade_count=acc.trades,
            win_count=acc.wins,
            loss_count=acc.losses,
        )
        for day, acc in sorted(buckets.items())
    ]


def summarize_daily(points: Iterable[DailyPnLPoint]) -> DailySummary:
    """Profit/loss day counts and averages over a daily series."""
    total_pnl = 0.0
    profit_days = loss_days = trading_days = total_trades = 0
    for p in points:
        total_pnl += p.pnl
        total_trades += p.trade_count
        if p.trade_count > 0:
            trading_days += 1
        if p.pnl > 0:
            profit_days += 1
        elif p.pnl < 0:
            loss_days += 1

    return DailySummary(
        total_pnl=total_pnl,
        avg_daily_pnl=total_pnl / trading_days if trading_days else 0.0,
        profit_days=profit_days,
        loss_days=loss_days,
        trading_days=trading_days,
        total_trades=total_trades,
    )


def period_pnl(
    trades: Iterable[TradeRecord],
    period: PnlPeriod | str = PnlPeriod.DAY,
    *,
    tz: tzinfo | None = None,
) -> list[PeriodPnLPoint]:
    """Sparse P&L per period over the whole history, with running total.

    Keys are ``YYYY-MM-DD`` for days and weeks (weeks start on Sunday),
    ``YYYY-MM`` for months and ``YYYY`` for years.  Values are rounded
    to cents.

    Raises
    ------
    UnknownPeriodError
        If ``period`` is not one of day/week/month/year.
    """
    try:
        period = PnlPeriod(period)
    except ValueError as exc:
        raise UnknownPeriodError(f"Unknown period: {period!r}") from exc

    groups: dict[str, list[float]] = defaultdict(list)
    for trade in trades:
        if not trade.is_realized or trade.bucket_date is None:
            continue
        key = _period_key(local_day(trade.bucket_date, tz), period)
        groups[key].append(trade.net_pnl)

    points: list[PeriodPnLPoint] = []
    cumulative = 0.0
    for key in sorted(groups):
        pnl = sum(groups[key])
        cumulative += pnl
        points.append(PeriodPnLPoint(
            period=key,
            pnl=round(pnl, 2),
            cumulative_pnl=round(cumulative, 2),
            trade_count=len(groups[key]),
        ))
    return points


def _period_key(day: date, period: PnlPeriod) -> str:
    if period == PnlPeriod.WEEK:
        # isoweekday: Monday=1 .. Sunday=7
        week_start = day - timedelta(days=day.isoweekday() % 7)
        return week_start.isoformat()
    if period == PnlPeriod.MONTH:
        return f"{day.year:04d}-{day.month:02d}"
    if period == PnlPeriod.YEAR:
        return f"{day.year:04d}"
    return day.isoformat()
