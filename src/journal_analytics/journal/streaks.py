"""Win / loss streak tracking.

A streak is signed: ``+3`` means three wins in a row, ``-2`` two
losses in a row.  Breakeven trades leave the running streak untouched.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Iterable

from ..core.enums import TradeOutcome
from .cumulative import chronological
from .record import TradeRecord


@dataclass(frozen=True)
class StreakStats:
    current_streak: int = 0
    max_win_streak: int = 0
    max_loss_streak: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class StreakTracker:
    """Incremental streak counter fed one outcome at a time."""

    def __init__(self) -> None:
        self.streak = 0
        self.max_win_streak = 0
        self.max_loss_streak = 0

    def process(self, outcome: TradeOutcome) -> None:
        if outcome == TradeOutcome.WIN:
            self.streak = self.streak + 1 if self.streak > 0 else 1
            self.max_win_streak = max(self.max_win_streak, self.streak)
        elif outcome == TradeOutcome.LOSS:
            self.streak = self.streak - 1 if self.streak < 0 else -1
            self.max_loss_streak = max(self.max_loss_streak, -self.streak)

    def snapshot(self) -> StreakStats:
        return StreakStats(
            current_streak=self.streak,
            max_win_streak=self.max_win_streak,
            max_loss_streak=self.max_loss_streak,
        )


def compute_streaks(trades: Iterable[TradeRecord]) -> StreakStats:
    """Streaks over realized trades in chronological order."""
    tracker = StreakTracker()
    for trade in chronological(trades):
        tracker.process(trade.outcome)
    return tracker.snapshot()
