"""Trade performance aggregator — one call, every dashboard number.

Combines the individual aggregates into a ``DerivedStats`` snapshot and
memoizes it on the trade collection plus the reporting window, so
repeated renders over an unchanged journal skip the O(n) passes.

Usage::

    aggregator = TradePerformanceAggregator(load_settings())
    derived = aggregator.aggregate(trades, window_days=7)
    print(derived.stats.win_rate, len(derived.daily_pnl))
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable

from ..core.config import Settings
from .breakeven import BreakEvenMetrics, compute_breakeven_metrics
from .cumulative import CumulativePnLPoint, cumulative_pnl
from .daily import DailyPnLPoint, DailySummary, daily_pnl, summarize_daily
from .dates import as_day, resolve_tz
from .efficiency import EfficiencyStats, compute_efficiency
from .record import TradeRecord
from .stats import StrategyPerformance, TradeStats, compute_trade_stats, stats_by_strategy
from .streaks import StreakStats, compute_streaks

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DerivedStats:
    """Pure projection of a trade collection.  Never persisted."""

    window_days: int
    window_end: date
    stats: TradeStats
    daily_pnl: tuple[DailyPnLPoint, ...]
    daily_summary: DailySummary
    cumulative_pnl: tuple[CumulativePnLPoint, ...]
    efficiency: EfficiencyStats
    streaks: StreakStats
    breakeven: BreakEvenMetrics
    by_strategy: tuple[StrategyPerformance, ...]

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable view (no infinities, no NaN)."""
        return {
            "window_days": self.window_days,
            "window_end": self.window_end.isoformat(),
            "stats": self.stats.to_dict(),
            "daily_pnl": [p.to_dict() for p in self.daily_pnl],
            "daily_summary": self.daily_summary.to_dict(),
            "cumulative_pnl": [p.to_dict() for p in self.cumulative_pnl],
            "efficiency": self.efficiency.to_dict(),
            "streaks": self.streaks.to_dict(),
            "breakeven": self.breakeven.to_dict(),
            "by_strategy": [p.to_dict() for p in self.by_strategy],
        }


class TradePerformanceAggregator:
    """Memoizing façade over the journal aggregates.

    Parameters
    ----------
    settings : Settings | None
        Window default, profit-factor cap, timezone and cache size.
        Defaults to ``Settings()``.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or Settings()
        self._tz = resolve_tz(self._settings.timezone)
        self._cache: OrderedDict[tuple, DerivedStats] = OrderedDict()
        self._hits = 0
        self._misses = 0

    @property
    def settings(self) -> Settings:
        return self._settings

    # ------------------------------------------------------------------ #
    # Aggregation                                                          #
    # ------------------------------------------------------------------ #

    def aggregate(
        self,
        trades: Iterable[TradeRecord],
        *,
        window_days: int | None = None,
        today: date | datetime | None = None,
    ) -> DerivedStats:
        """Compute (or fetch from cache) every derived statistic."""
        trades = tuple(trades)
        days = window_days if window_days is not None else self._settings.default_window_days
        end = as_day(today, self._tz)
        key = (trades, days, end)

        cached = self._cache.get(key)
        if cached is not None:
            self._hits += 1
            self._cache.move_to_end(key)
            return cached

        self._misses += 1
        derived = self._compute(trades, days, end)
        if self._settings.cache_size > 0:
            self._cache[key] = derived
            while len(self._cache) > self._settings.cache_size:
                self._cache.popitem(last=False)
        return derived

    def _compute(
        self,
        trades: tuple[TradeRecord, ...],
        days: int,
        end: date,
    ) -> DerivedStats:
        cap = self._settings.profit_factor_cap
        daily = daily_pnl(trades, days, today=end, tz=self._tz)
        derived = DerivedStats(
            window_days=days,
            window_end=end,
            stats=compute_trade_stats(trades, profit_factor_cap=cap),
            daily_pnl=tuple(daily),
            daily_summary=summarize_daily(daily),
            cumulative_pnl=tuple(cumulative_pnl(trades)),
            efficiency=compute_efficiency(trades),
            streaks=compute_streaks(trades),
            breakeven=compute_breakeven_metrics(trades),
            by_strategy=tuple(stats_by_strategy(trades, profit_factor_cap=cap)),
        )
        logger.debug(
            "Aggregated %d trades over %d days ending %s",
            len(trades), days, end.isoformat(),
        )
        return derived

    # ------------------------------------------------------------------ #
    # Cache management                                                     #
    # ------------------------------------------------------------------ #

    def cache_info(self) -> dict[str, int]:
        return {
            "hits": self._hits,
            "misses": self._misses,
            "size": len(self._cache),
            "max_size": self._settings.cache_size,
        }

    def clear_cache(self) -> None:
        self._cache.clear()
        self._hits = 0
        self._misses = 0
