"""Test configuration and fixtures.

Provides:
- Python path setup for imports
- Environment isolation for every test
"""

import sys
from pathlib import Path

import pytest

# Add project root to Python path for imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep CI and FILE_MEMOIZE_* variables from the host out of tests."""
    monkeypatch.delenv("CI_COMMIT_SHA", raising=False)
    for name in ("CACHE_DIR", "ATOMIC_WRITES", "LOG_LEVEL"):
        monkeypatch.delenv(f"FILE_MEMOIZE_{name}", raising=False)
    # No stray .env from the working directory
    monkeypatch.chdir(tmp_path)
