"""Shared fixtures for the journal-analytics test suite."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from journal_analytics.core.config import Settings


@pytest.fixture
def base_time() -> datetime:
    return datetime(2024, 3, 15, 12, 0, 0)


@pytest.fixture
def report_day() -> date:
    """Last day of the reporting window used across tests."""
    return date(2024, 3, 15)


@pytest.fixture
def settings() -> Settings:
    return Settings(timezone="UTC", cache_size=4)

