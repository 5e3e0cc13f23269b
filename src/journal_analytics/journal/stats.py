"""Win / loss / profit-factor aggregation.

One pass over the realized trades (closed, with a known net P&L)
produces the headline numbers of the dashboard: counts, win rate,
average win and loss, profit factor, expectancy.

Usage::

    stats = compute_trade_stats(trades)
    print(stats.win_rate, stats.profit_factor)
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import asdict, dataclass
from typing import Any, Iterable

import numpy as np

from ..core.config import PROFIT_FACTOR_CAP
from .record import TradeRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TradeStats:
    """Aggregate statistics over the realized trades."""

    total_trades: int = 0
    win_trades: int = 0
    loss_trades: int = 0
    breakeven_trades: int = 0
    open_trades: int = 0
    win_rate: float = 0.0          # Percentage, 0-100
    total_pnl: float = 0.0         # Gross, before commission
    net_pnl: float = 0.0
    total_commission: float = 0.0
    gross_wins: float = 0.0
    gross_losses: float = 0.0      # Absolute value
    avg_win: float = 0.0
    avg_loss: float = 0.0          # Negative or zero
    max_win: float = 0.0
    max_loss: float = 0.0
    profit_factor: float = 0.0
    expectancy: float = 0.0
    avg_r_multiple: float = 0.0
    sharpe_ratio: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            k: round(v, 4) if isinstance(v, float) else v
            for k, v in asdict(self).items()
        }


@dataclass(frozen=True)
class StrategyPerformance:
    """Stats for the trades tagged with one strategy."""

    strategy: str
    stats: TradeStats

    def to_dict(self) -> dict[str, Any]:
        return {"strategy": self.strategy, **self.stats.to_dict()}


def profit_factor(
    gross_wins: float,
    gross_losses: float,
    *,
    cap: float = PROFIT_FACTOR_CAP,
) -> float:
    """Gross profit over absolute gross loss.

    With no losses the ratio is unbounded: ``cap`` is reported when
    there are wins, ``0.0`` when there is nothing at all.
    """
    gross_losses = abs(gross_losses)
    if gross_losses > 0:
        return gross_wins / gross_losses
    return cap if gross_wins > 0 else 0.0


def compute_trade_stats(
    trades: Iterable[TradeRecord],
    *,
    profit_factor_cap: float = PROFIT_FACTOR_CAP,
) -> TradeStats:
    """Compute win/loss statistics for the given trades.

    Trades that are not realized are counted in ``open_trades`` only.
    Breakeven trades (net P&L exactly zero) count toward
    ``total_trades`` and therefore lower the win rate.
    """
    total = wins = losses = breakevens = open_count = 0
    gross_wins = gross_losses = commission = gross_pnl = 0.0
    max_win = max_loss = 0.0
    r_values: list[float] = []
    returns: list[float] = []

    for trade in trades:
        if not trade.is_realized:
            open_count += 1
            continue
        pnl = trade.net_pnl
        total += 1
        commission += trade.commission
        gross_pnl += trade.gross_pnl
        if pnl > 0:
            wins += 1
            gross_wins += pnl
            max_win = max(max_win, pnl)
        elif pnl < 0:
            losses += 1
            gross_losses += pnl
            max_loss = min(max_loss, pnl)
        else:
            breakevens += 1
        if trade.r_multiple is not None:
            r_values.append(trade.r_multiple)
        if trade.pnl_percentage is not None:
            returns.append(trade.pnl_percentage)

    if total == 0:
        return TradeStats(open_trades=open_count)

    win_rate = wins / total * 100
    loss_rate = losses / total * 100
    avg_win = gross_wins / wins if wins else 0.0
    avg_loss = gross_losses / losses if losses else 0.0

    return TradeStats(
        total_trades=total,
        win_trades=wins,
        loss_trades=losses,
        breakeven_trades=breakevens,
        open_trades=open_count,
        win_rate=win_rate,
        total_pnl=gross_pnl,
        net_pnl=gross_wins + gross_losses,
        total_commission=commission,
        gross_wins=gross_wins,
        gross_losses=abs(gross_losses),
        avg_win=avg_win,
        avg_loss=avg_loss,
        max_win=max_win,
        max_loss=max_loss,
        profit_factor=profit_factor(gross_wins, gross_losses, cap=profit_factor_cap),
        expectancy=win_rate / 100 * avg_win + loss_rate / 100 * avg_loss,
        avg_r_multiple=float(np.mean(r_values)) if r_values else 0.0,
        sharpe_ratio=_sharpe(returns),
    )


def stats_by_strategy(
    trades: Iterable[TradeRecord],
    *,
    profit_factor_cap: float = PROFIT_FACTOR_CAP,
) -> list[StrategyPerformance]:
    """Per-strategy stats, best net P&L first.  Untagged trades are skipped."""
    groups: dict[str, list[TradeRecord]] = defaultdict(list)
    for trade in trades:
        if trade.strategy:
            groups[trade.strategy].append(trade)

    performance = [
        StrategyPerformance(
            strategy=name,
            stats=compute_trade_stats(group, profit_factor_cap=profit_factor_cap),
        )
        for name, group in groups.items()
    ]
    performance.sort(key=lambda p: p.stats.net_pnl, reverse=True)
    return performance


def _sharpe(returns: list[float]) -> float:
    """Mean over population std of per-trade returns (risk-free rate 0)."""
    if len(returns) < 2:
        return 0.0
    arr = np.asarray(returns, dtype=float)
    std = float(arr.std())
    if std == 0:
        return 0.0
    return float(arr.mean()) / std
