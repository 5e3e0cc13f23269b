"""Custom exception hierarchy for journal analytics."""


class JournalAnalyticsError(Exception):
    """Base exception for all journal analytics errors."""


# --- Configuration ---
class ConfigError(JournalAnalyticsError):
    """Invalid or missing configuration."""


# --- Data ---
class TradeDataError(JournalAnalyticsError):
    """Trade input could not be read as a list of trade objects."""


# --- Arguments ---
class InvalidWindowError(JournalAnalyticsError, ValueError):
    """Reporting window must cover at least one day."""

    def __init__(self, days: int):
        self.days = days
        super().__init__(f"Window must be at least 1 day, got {days}")


class UnknownPeriodError(JournalAnalyticsError, ValueError):
    """Unsupported P&L grouping period."""


class UnknownScenarioError(JournalAnalyticsError, ValueError):
    """Unsupported what-if scenario."""
