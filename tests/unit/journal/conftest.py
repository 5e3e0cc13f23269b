"""Shared helpers for journal tests."""

from __future__ import annotations

from datetime import datetime, timedelta

from journal_analytics.core.enums import TradeDirection, TradeStatus
from journal_analytics.journal.record import TradeRecord

_BASE = datetime(2024, 3, 15, 12, 0, 0)


def make_trade(
    net_pnl: float | None = 100.0,
    *,
    trade_id: str = "t1",
    symbol: str = "ES",
    strategy: str = "",
    status: TradeStatus = TradeStatus.CLOSED,
    exit_date: datetime | None = None,
    entry_date: datetime | None = None,
    commission: float = 0.0,
    **kwargs,
) -> TradeRecord:
    """Create a closed trade exiting at noon on 2024-03-15 unless told otherwise."""
    if exit_date is None and entry_date is None:
        exit_date = _BASE
    return TradeRecord(
        trade_id=trade_id,
        symbol=symbol,
        direction=kwargs.pop("direction", TradeDirection.LONG),
        strategy=strategy,
        status=status,
        entry_date=entry_date,
        exit_date=exit_date,
        net_pnl=net_pnl,
        commission=commission,
        **kwargs,
    )


def make_series(pnls: list[float], start: datetime | None = None) -> list[TradeRecord]:
    """One closed trade per hour, in order, with the given net P&Ls."""
    start = start or _BASE
    return [
        make_trade(pnl, trade_id=f"t{i}", exit_date=start + timedelta(hours=i))
        for i, pnl in enumerate(pnls)
    ]


def make_excursion_trade(
    net_pnl: float,
    mae: float,
    mfe: float,
    *,
    trade_id: str = "x1",
    **kwargs,
) -> TradeRecord:
    """Closed trade carrying both MAE and MFE (currency units)."""
    return make_trade(
        net_pnl,
        trade_id=trade_id,
        max_adverse_price=mae,
        max_favorable_price=mfe,
        **kwargs,
    )
