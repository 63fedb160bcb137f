"""Pytest configuration and shared fixtures."""

import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_structlog():
    """Restore structlog defaults so logging configuration never leaks between tests."""
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()
