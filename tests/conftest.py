"""Shared fixtures for ritual schedule tests."""

from datetime import date
import logging

import pytest

from ritual_schedule import const

# March 2024 starts on a Friday: Fridays are the 1st, 8th, 15th, 22nd and 29th.
MARCH_2024_FRIDAYS = [
    date(2024, 3, 1),
    date(2024, 3, 8),
    date(2024, 3, 15),
    date(2024, 3, 22),
    date(2024, 3, 29),
]


@pytest.fixture
def march_2024_fridays() -> list[date]:
    """Return every Friday of March 2024, in order."""
    return list(MARCH_2024_FRIDAYS)


@pytest.fixture
def monday() -> date:
    """Return a Monday (2024-03-04)."""
    return date(2024, 3, 4)


@pytest.fixture
def tuesday() -> date:
    """Return a Tuesday (2024-03-05)."""
    return date(2024, 3, 5)


@pytest.fixture
def engine_debug_logs(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    """Capture DEBUG records from the package logger."""
    caplog.set_level(logging.DEBUG, logger=const.LOGGER.name)
    return caplog
