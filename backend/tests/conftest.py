"""Shared fixtures for Hostly tests."""
import pytest

from hostly.core.config import Settings
from tests.helpers import FixedClock


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def test_settings(monkeypatch):
    """Settings with the scheduler disabled."""
    monkeypatch.setenv("SCHEDULER_ENABLED", "false")
    monkeypatch.setenv("ICAL_FETCH_MAX_ATTEMPTS", "1")
    monkeypatch.setenv("ICAL_FETCH_BACKOFF_SECONDS", "0")
    return Settings()
