"""What-if scenarios: replay realized trades under alternative management.

Each scenario rewrites the P&L of every realized trade from its
recorded excursions (currency units) and compares the total with what
actually happened.  Trades missing the field a scenario needs keep
their actual P&L.

This is not a price-based replay: direction, exit price and quantity
are not used to re-price the exit.  ``max_adverse_price`` and
``max_favorable_price`` are read as currency excursions, the same units
the efficiency metrics use, and only the tight stop looks at entry
notional (``entry_price * quantity``).
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Callable, Iterable

from ..core.enums import WhatIfScenario
from ..core.errors import UnknownScenarioError
from .record import TradeRecord

TIGHT_STOP_PCT = 0.01


@dataclass(frozen=True)
class WhatIfResult:
    scenario: str
    original_pnl: float
    scenario_pnl: float
    difference: float
    improvement: float  # Percentage of |original_pnl|

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _perfect_entry(trade: TradeRecord) -> float:
    # Entering at the worst point removes the adverse excursion
    if not trade.max_adverse_price:
        return trade.net_pnl
    return trade.net_pnl + abs(trade.max_adverse_price)


def _perfect_exit(trade: TradeRecord) -> float:
    if not trade.max_favorable_price:
        return trade.net_pnl
    return max(trade.net_pnl, trade.max_favorable_price - trade.commission)


def _no_stop_loss(trade: TradeRecord) -> float:
    if not trade.max_favorable_price:
        return trade.net_pnl
    return trade.max_favorable_price - trade.commission


def _tight_stop_loss(trade: TradeRecord) -> float:
    if (
        trade.max_adverse_price is None
        or trade.entry_price is None
        or trade.quantity is None
    ):
        return trade.net_pnl
    risk = abs(trade.entry_price * trade.quantity) * TIGHT_STOP_PCT
    if abs(trade.max_adverse_price) >= risk:
        return -risk - trade.commission
    return trade.net_pnl


_SCENARIOS: dict[WhatIfScenario, Callable[[TradeRecord], float]] = {
    WhatIfScenario.PERFECT_ENTRY: _perfect_entry,
    WhatIfScenario.PERFECT_EXIT: _perfect_exit,
    WhatIfScenario.NO_STOP_LOSS: _no_stop_loss,
    WhatIfScenario.TIGHT_STOP_LOSS: _tight_stop_loss,
}


def what_if(
    trades: Iterable[TradeRecord],
    scenario: WhatIfScenario | str,
) -> WhatIfResult:
    """Total P&L of the realized trades under ``scenario``.

    Raises
    ------
    UnknownScenarioError
        If ``scenario`` is not a known scenario name.
    """
    try:
        scenario = WhatIfScenario(scenario)
    except ValueError as exc:
        raise UnknownScenarioError(f"Unknown scenario: {scenario!r}") from exc

    rewrite = _SCENARIOS[scenario]
    realized = [t for t in trades if t.is_realized]
    original = sum((t.net_pnl for t in realized), 0.0)
    rewritten = sum((rewrite(t) for t in realized), 0.0)
    difference = rewritten - original
    improvement = difference / abs(original) * 100 if original != 0 else 0.0

    return WhatIfResult(
        scenario=scenario.value,
        original_pnl=round(original, 2),
        scenario_pnl=round(rewritten, 2),
        difference=round(difference, 2),
        improvement=round(improvement, 2),
    )


def all_scenarios(trades: Iterable[TradeRecord]) -> list[WhatIfResult]:
    trades = list(trades)
    return [what_if(trades, s) for s in WhatIfScenario]
