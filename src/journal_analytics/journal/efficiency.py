"""MAE / MFE efficiency (Maximum Adverse / Favorable Excursion).

Measures trade management quality from the excursions recorded by
the broker import:

* **MAE recovery** — how much of the worst open loss was clawed back
  by the close.  A winner recovered everything (1.0); a loser that
  closed at or beyond its MAE recovered nothing (0.0).
* **MFE capture** — how much of the best open profit was actually
  banked.  Losers capture nothing by definition.

Only realized trades carrying both excursion fields are eligible;
everything else is left out of these aggregates without error.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Iterable

from .record import TradeRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EfficiencyPoint:
    """Per-trade excursion ratios, both in [0, 1]."""

    trade_id: str
    symbol: str
    pnl: float
    mae_recovery: float
    mfe_capture: float

    def to_dict(self) -> dict[str, Any]:
        return {
            k: round(v, 4) if isinstance(v, float) else v
            for k, v in asdict(self).items()
        }


@dataclass(frozen=True)
class EfficiencyStats:
    """Averaged excursion metrics over the eligible trades."""

    eligible_trades: int = 0
    mae_efficiency: float = 0.0   # Percentage, 0-100
    mfe_efficiency: float = 0.0   # Percentage, 0-100
    avg_mae: float = 0.0
    avg_mfe: float = 0.0
    avg_etd: float = 0.0          # Mean max drawdown from peak, where recorded
    avg_mae_winners: float = 0.0
    avg_mae_losers: float = 0.0
    avg_mfe_winners: float = 0.0
    avg_mfe_losers: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            k: round(v, 4) if isinstance(v, float) else v
            for k, v in asdict(self).items()
        }


def is_eligible(trade: TradeRecord) -> bool:
    return trade.is_realized and trade.has_excursions


def mae_recovery(trade: TradeRecord) -> float:
    """Fraction of the adverse excursion recovered by the close.

    No adverse movement at all counts as full recovery.
    """
    pnl = trade.net_pnl or 0.0
    if pnl > 0:
        return 1.0
    mae = abs(trade.max_adverse_price or 0.0)
    if mae == 0:
        return 1.0
    return min(1.0, max(0.0, 1.0 + pnl / mae))


def mfe_capture(trade: TradeRecord) -> float:
    """Fraction of the favorable excursion banked by the close."""
    pnl = trade.net_pnl or 0.0
    mfe = trade.max_favorable_price or 0.0
    if pnl <= 0 or mfe <= 0:
        return 0.0
    return min(1.0, pnl / mfe)


def efficiency_points(trades: Iterable[TradeRecord]) -> list[EfficiencyPoint]:
    """Per-trade ratios for eligible trades, ordered by P&L (scatter plot order)."""
    points = [
        EfficiencyPoint(
            trade_id=t.trade_id,
            symbol=t.symbol,
            pnl=t.net_pnl,
            mae_recovery=mae_recovery(t),
            mfe_capture=mfe_capture(t),
        )
        for t in trades
        if is_eligible(t)
    ]
    points.sort(key=lambda p: p.pnl)
    return points


def compute_efficiency(trades: Iterable[TradeRecord]) -> EfficiencyStats:
    """Average MAE recovery and MFE capture, as percentages."""
    eligible = [t for t in trades if is_eligible(t)]
    if not eligible:
        return EfficiencyStats()

    n = len(eligible)
    winners = [t for t in eligible if t.net_pnl > 0]
    losers = [t for t in eligible if t.net_pnl < 0]
    drawdowns = [t.max_drawdown for t in eligible if t.max_drawdown is not None]

    return EfficiencyStats(
        eligible_trades=n,
        mae_efficiency=sum(mae_recovery(t) for t in eligible) / n * 100,
        mfe_efficiency=sum(mfe_capture(t) for t in eligible) / n * 100,
        avg_mae=_mean(t.max_adverse_price for t in eligible),
        avg_mfe=_mean(t.max_favorable_price for t in eligible),
        avg_etd=_mean(drawdowns),
        avg_mae_winners=_mean(t.max_adverse_price for t in winners),
        avg_mae_losers=_mean(t.max_adverse_price for t in losers),
        avg_mfe_winners=_mean(t.max_favorable_price for t in winners),
        avg_mfe_losers=_mean(t.max_favorable_price for t in losers),
    )


def _mean(values: Iterable[float]) -> float:
    values = list(values)
    return sum(values) / len(values) if values else 0.0
