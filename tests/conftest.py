"""Root-level pytest configuration for all tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Restore default structlog configuration after each test."""
    yield
    structlog.reset_defaults()
