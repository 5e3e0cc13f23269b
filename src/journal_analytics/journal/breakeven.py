"""Break-even stop impact analysis.

For trades where the journal records whether moving the stop to
break-even "worked" (protected the trade) or not (stopped out a trade
that would have run), estimate how much profit the habit protected,
how much it gave away, and what the journal would look like without it.

``max_potential_profit`` is read in currency units: the most the
trade could have made had it been held to its favorable extreme.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Iterable

from .record import TradeRecord

logger = logging.getLogger(__name__)

# Share of protected profit assumed to survive anyway without the BE stop
_PROTECTED_RETENTION = 0.3


@dataclass(frozen=True)
class BreakEvenMetrics:
    trades_with_be: int = 0
    be_success_rate: float = 0.0        # Percentage
    be_failure_rate: float = 0.0        # Percentage
    avg_profit_capture_rate: float = 0.0  # Percentage of potential banked
    protected_profit: float = 0.0
    missed_profit: float = 0.0
    risk_reduction: float = 0.0         # Protected profit as % of realized P&L
    performance_with_be: float = 0.0
    performance_without_be: float = 0.0
    be_impact: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            k: round(v, 4) if isinstance(v, float) else v
            for k, v in asdict(self).items()
        }


def compute_breakeven_metrics(trades: Iterable[TradeRecord]) -> BreakEvenMetrics:
    """Aggregate break-even stop outcomes.

    ``performance_with_be`` is the realized P&L of every trade given;
    the without-BE estimate adds back missed profit and removes the
    part of protected profit that would not have survived.
    """
    trades = list(trades)
    realized_pnl = sum((t.net_pnl for t in trades if t.is_realized), 0.0)

    tagged = [t for t in trades if t.is_realized and t.break_even_worked is not None]
    if not tagged:
        return BreakEvenMetrics(
            performance_with_be=realized_pnl,
            performance_without_be=realized_pnl,
        )

    worked = 0
    protected = missed = 0.0
    capture_total = 0.0
    capture_count = 0

    for trade in tagged:
        actual = trade.net_pnl or 0.0
        potential = trade.max_potential_profit
        if potential is not None and potential > 0 and actual > 0:
            capture_total += min(1.0, actual / potential) * 100
            capture_count += 1

        if trade.break_even_worked:
            worked += 1
            protected += max(0.0, actual)
        elif potential is not None and potential > actual:
            missed += potential - actual

    success_rate = worked / len(tagged) * 100
    without_be = realized_pnl + missed - protected * _PROTECTED_RETENTION

    return BreakEvenMetrics(
        trades_with_be=len(tagged),
        be_success_rate=success_rate,
        be_failure_rate=100.0 - success_rate,
        avg_profit_capture_rate=capture_total / capture_count if capture_count else 0.0,
        protected_profit=protected,
        missed_profit=missed,
        risk_reduction=protected / max(1.0, abs(realized_pnl)) * 100,
        performance_with_be=realized_pnl,
        performance_without_be=without_be,
        be_impact=realized_pnl - without_be,
    )
