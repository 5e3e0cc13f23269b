"""Trade journal analytics: P&L statistics derived from trade records."""

__version__ = "0.1.0"
