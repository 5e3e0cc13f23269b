"""Trade Journal Analytics — dashboard statistics from trade records.

Derives every number a journal dashboard shows from the current list
of trades.  All functions are pure: they read the trades and allocate
new result objects.

Key components
--------------
**Core aggregates**

TradeRecord                 Immutable journal entry with lenient ``from_dict``
compute_trade_stats         Win rate, averages, profit factor, expectancy
daily_pnl                   Dense per-day P&L over a trailing window
cumulative_pnl              Chronological running P&L (equity curve)
compute_efficiency          MAE recovery / MFE capture percentages
compute_streaks             Current and longest win/loss streaks

**Supplementary analysis**

stats_by_strategy           Win/loss stats per strategy tag
period_pnl                  Day/week/month/year P&L buckets
compute_breakeven_metrics   Impact of moving stops to break-even
what_if                     Alternative-management scenario P&L

**Façade**

TradePerformanceAggregator  Memoized ``DerivedStats`` snapshot
"""

from .record import TradeRecord
from .stats import (
    StrategyPerformance,
    TradeStats,
    compute_trade_stats,
    profit_factor,
    stats_by_strategy,
)
from .daily import DailyPnLPoint, DailySummary, PeriodPnLPoint, daily_pnl, period_pnl, summarize_daily
from .cumulative import CumulativePnLPoint, cumulative_pnl
from .efficiency import (
    EfficiencyPoint,
    EfficiencyStats,
    compute_efficiency,
    efficiency_points,
    mae_recovery,
    mfe_capture,
)
from .streaks import StreakStats, StreakTracker, compute_streaks
from .breakeven import BreakEvenMetrics, compute_breakeven_metrics
from .what_if import WhatIfResult, all_scenarios, what_if
from .aggregator import DerivedStats, TradePerformanceAggregator

__all__ = [
    "TradeRecord",
    "StrategyPerformance",
    "TradeStats",
    "compute_trade_stats",
    "profit_factor",
    "stats_by_strategy",
    "DailyPnLPoint",
    "DailySummary",
    "PeriodPnLPoint",
    "daily_pnl",
    "period_pnl",
    "summarize_daily",
    "CumulativePnLPoint",
    "cumulative_pnl",
    "EfficiencyPoint",
    "EfficiencyStats",
    "compute_efficiency",
    "efficiency_points",
    "mae_recovery",
    "mfe_capture",
    "StreakStats",
    "StreakTracker",
    "compute_streaks",
    "BreakEvenMetrics",
    "compute_breakeven_metrics",
    "WhatIfResult",
    "all_scenarios",
    "what_if",
    "DerivedStats",
    "TradePerformanceAggregator",
]
