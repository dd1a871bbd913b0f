"""Test configuration and fixtures.

Provides:
- Settings pointed at tmp_path
- Mock async computations to memoize
- Cache file locations under tmp_path
"""

from collections.abc import Callable
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from file_memoize.shared.config import Settings


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing default cache files at tmp_path."""
    return Settings(build_id="test-build", cache_dir=str(tmp_path))


# ============================================================================
# Computations
# ============================================================================


@pytest.fixture
def mock_fn() -> AsyncMock:
    """Async computation returning 'Result for <param>'."""

    async def compute(param: str) -> str:
        return f"Result for {param}"

    return AsyncMock(side_effect=compute)


# ============================================================================
# Cache locations
# ============================================================================


@pytest.fixture
def cache_file(tmp_path: Path) -> Path:
    """Backing-file location inside tmp_path (not created)."""
    return tmp_path / "default_testFunction.json"


@pytest.fixture
def location(cache_file: Path) -> Callable[[], Path]:
    """Location provider for cache_file."""
    return lambda: cache_file
