"""Trade record — the core data model.

A TradeRecord is one journal entry as handed over by the trade-entry
layer: identity, prices, realized P&L and, when the broker import
provides them, the maximum adverse / favorable excursions.

Records are immutable and hashable so a collection of them can key
the aggregator's memo cache.  ``TradeRecord.from_dict`` is the lenient
entry point for user-entered data: malformed optional fields become
``None`` instead of raising.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, fields
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any

from ..core.enums import TradeDirection, TradeOutcome, TradeStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TradeRecord:
    """Immutable record for one logical trade.

    Parameters
    ----------
    trade_id : str
        Identifier assigned by the journal.
    symbol : str
        Instrument symbol (e.g. ``"ES"``, ``"AAPL"``).
    direction : TradeDirection
        Long or short.
    net_pnl : float | None
        Realized P&L after commission.  ``None`` while unknown.
    max_adverse_price / max_favorable_price : float | None
        MAE / MFE in currency units, as reported by the broker import.
    """

    # Identity
    trade_id: str = ""
    symbol: str = ""
    direction: TradeDirection = TradeDirection.LONG
    strategy: str = ""
    status: TradeStatus = TradeStatus.CLOSED

    # Timing
    entry_date: datetime | None = None
    exit_date: datetime | None = None

    # Prices and size
    entry_price: float | None = None
    exit_price: float | None = None
    quantity: float | None = None
    stop_loss: float | None = None
    take_profit: float | None = None

    # Results
    net_pnl: float | None = None
    pnl: float | None = None          # Gross, before commission
    commission: float = 0.0
    pnl_percentage: float | None = None
    r_multiple: float | None = None

    # Excursions (broker-import dependent)
    max_adverse_price: float | None = None
    max_favorable_price: float | None = None
    max_drawdown: float | None = None

    # Break-even management
    break_even_worked: bool | None = None
    max_potential_profit: float | None = None

    # ------------------------------------------------------------------ #
    # Computed properties                                                  #
    # ------------------------------------------------------------------ #

    @property
    def is_realized(self) -> bool:
        """Closed with a known P&L — the only trades that count as realized."""
        return self.status == TradeStatus.CLOSED and self.net_pnl is not None

    @property
    def outcome(self) -> TradeOutcome:
        """Win / loss / break-even classification of the net P&L."""
        pnl = self.net_pnl or 0.0
        if pnl > 0:
            return TradeOutcome.WIN
        if pnl < 0:
            return TradeOutcome.LOSS
        return TradeOutcome.BREAKEVEN

    @property
    def bucket_date(self) -> datetime | None:
        """Date used for time bucketing: exit date, else entry date."""
        return self.exit_date or self.entry_date

    @property
    def has_excursions(self) -> bool:
        return self.max_adverse_price is not None and self.max_favorable_price is not None

    @property
    def gross_pnl(self) -> float:
        """Gross P&L; derived from net + commission when not recorded."""
        if self.pnl is not None:
            return self.pnl
        return (self.net_pnl or 0.0) + self.commission

    # ------------------------------------------------------------------ #
    # Construction                                                         #
    # ------------------------------------------------------------------ #

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> TradeRecord:
        """Build a record from a raw mapping (camelCase or snake_case keys).

        Never raises on bad field values: unparseable numbers and dates
        are dropped to ``None`` so the trade is simply excluded from the
        metrics that need them.
        """
        exit_price = _to_float(_pick(raw, "exit_price", "exitPrice"))
        exit_date = _to_datetime(_pick(raw, "exit_date", "exitDate"))

        status = _to_status(_pick(raw, "status"))
        if status is None:
            # No explicit status: a trade with an exit is closed
            has_exit = exit_price is not None or exit_date is not None
            status = TradeStatus.CLOSED if has_exit else TradeStatus.OPEN

        trade_id = _pick(raw, "trade_id", "tradeId", "id")
        record = cls(
            trade_id="" if trade_id is None else str(trade_id),
            symbol=str(_pick(raw, "symbol") or ""),
            direction=_to_direction(_pick(raw, "direction", "side")),
            strategy=_to_strategy(_pick(raw, "strategy", "strategy_id", "strategyId")),
            status=status,
            entry_date=_to_datetime(_pick(raw, "entry_date", "entryDate")),
            exit_date=exit_date,
            entry_price=_to_float(_pick(raw, "entry_price", "entryPrice")),
            exit_price=exit_price,
            quantity=_to_float(_pick(raw, "quantity", "qty")),
            stop_loss=_to_float(_pick(raw, "stop_loss", "stopLoss")),
            take_profit=_to_float(_pick(raw, "take_profit", "takeProfit")),
            net_pnl=_to_float(_pick(raw, "net_pnl", "netPnl")),
            pnl=_to_float(_pick(raw, "pnl", "gross_pnl", "grossPnl")),
            commission=_to_float(_pick(raw, "commission")) or 0.0,
            pnl_percentage=_to_float(_pick(raw, "pnl_percentage", "pnlPercentage")),
            r_multiple=_to_float(_pick(raw, "r_multiple", "rMultiple")),
            max_adverse_price=_to_float(_pick(raw, "max_adverse_price", "maxAdversePrice")),
            max_favorable_price=_to_float(_pick(raw, "max_favorable_price", "maxFavorablePrice")),
            max_drawdown=_to_float(_pick(raw, "max_drawdown", "maxDrawdown")),
            break_even_worked=_to_bool(_pick(raw, "break_even_worked", "breakEvenWorked")),
            max_potential_profit=_to_float(
                _pick(raw, "max_potential_profit", "maxPotentialProfit")
            ),
        )
        if record.is_realized and record.bucket_date is None:
            logger.debug("Trade %s has no usable date", record.trade_id or "<no id>")
        return record

    # ------------------------------------------------------------------ #
    # Serialisation                                                        #
    # ------------------------------------------------------------------ #

    def to_dict(self) -> dict[str, Any]:
        """Export to a flat, JSON-friendly dictionary."""
        out: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, datetime):
                value = value.isoformat()
            elif isinstance(value, (TradeDirection, TradeStatus)):
                value = value.value
            out[f.name] = value
        out["outcome"] = self.outcome.value if self.is_realized else None
        return out


# ---------------------------------------------------------------------- #
# Coercion helpers                                                         #
# ---------------------------------------------------------------------- #

def _pick(raw: dict[str, Any], *keys: str) -> Any:
    """First non-None value among ``keys``."""
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def _to_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        try:
            result = float(value)
        except (OverflowError, ValueError):
            logger.debug("Dropping out-of-range number %r", value)
            return None
    elif isinstance(value, str):
        text = value.strip().replace(",", "")
        if not text:
            return None
        try:
            result = float(text)
        except ValueError:
            logger.debug("Dropping unparseable number %r", value)
            return None
    else:
        return None
    if math.isnan(result) or math.isinf(result):
        return None
    return result


def _to_datetime(value: Any) -> datetime | None:
    """Parse datetimes, dates, ISO-8601 strings and epoch milliseconds."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            logger.debug("Dropping out-of-range timestamp %r", value)
            return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            logger.debug("Dropping unparseable date %r", value)
            return None
    return None


def _to_direction(value: Any) -> TradeDirection:
    text = str(value or "").strip().lower()
    if text in ("short", "sell"):
        return TradeDirection.SHORT
    return TradeDirection.LONG


def _to_status(value: Any) -> TradeStatus | None:
    text = str(value or "").strip().lower()
    try:
        return TradeStatus(text)
    except ValueError:
        return None


def _to_strategy(value: Any) -> str:
    # The journal API nests strategies as {"id": ..., "name": ...}
    if isinstance(value, dict):
        value = value.get("name")
    return str(value or "")


def _to_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ("true", "yes", "1"):
            return True
        if text in ("false", "no", "0"):
            return False
    return None
