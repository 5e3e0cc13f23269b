"""Enumerations used across the journal analytics package."""

from enum import Enum


class TradeDirection(str, Enum):
    LONG = "long"
    SHORT = "short"


class TradeStatus(str, Enum):
    DRAFT = "draft"
    OPEN = "open"
    CLOSED = "closed"


class TradeOutcome(str, Enum):
    """Win / loss / break-even classification."""

    WIN = "win"
    LOSS = "loss"
    BREAKEVEN = "breakeven"


class PnlPeriod(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class WhatIfScenario(str, Enum):
    PERFECT_ENTRY = "perfect_entry"    # Entry at the best price seen
    PERFECT_EXIT = "perfect_exit"      # Exit at the best price seen
    NO_STOP_LOSS = "no_stop_loss"      # Every trade runs to its favorable extreme
    TIGHT_STOP_LOSS = "tight_stop_loss"  # Stop 1% from entry
