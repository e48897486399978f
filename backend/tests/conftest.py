"""Shared test configuration, pytest markers and sample texts."""

import pytest

from services.pipeline.stage_registry import clear as clear_registry


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "scenario: end-to-end decision scenarios through the full pipeline"
    )


@pytest.fixture
def fresh_registry():
    """Start and finish a test with no cached stage instances."""
    clear_registry()
    yield
    clear_registry()
