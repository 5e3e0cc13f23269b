"""Cumulative P&L series — the equity curve of the journal."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable

from .dates import sort_timestamp
from .record import TradeRecord


@dataclass(frozen=True)
class CumulativePnLPoint:
    """Running total after one trade."""

    date: datetime
    trade_pnl: float
    cumulative_pnl: float
    trade_count: int
    trade_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "trade_pnl": round(self.trade_pnl, 4),
            "cumulative_pnl": round(self.cumulative_pnl, 4),
            "trade_count": self.trade_count,
            "trade_id": self.trade_id,
        }


def chronological(trades: Iterable[TradeRecord]) -> list[TradeRecord]:
    """Realized, dated trades ordered by exit (else entry) date.

    The sort is stable: trades sharing a timestamp keep their input order.
    """
    dated = [t for t in trades if t.is_realized and t.bucket_date is not None]
    return sorted(dated, key=lambda t: sort_timestamp(t.bucket_date))


def cumulative_pnl(trades: Iterable[TradeRecord]) -> list[CumulativePnLPoint]:
    """Running sum of net P&L in chronological order.

    Returns an empty list when no trade qualifies, never a zero point.
    """
    points: list[CumulativePnLPoint] = []
    running = 0.0
    for count, trade in enumerate(chronological(trades), start=1):
        running += trade.net_pnl
        points.append(CumulativePnLPoint(
            date=trade.bucket_date,
            trade_pnl=trade.net_pnl,
            cumulative_pnl=running,
            trade_count=count,
            trade_id=trade.trade_id,
        ))
    return points
