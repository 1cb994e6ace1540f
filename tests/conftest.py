"""
Global pytest configuration and fixtures.
"""

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def clean_docshape_env(monkeypatch):
    """Keep DOCSHAPE_* settings from the developer's shell out of tests.

    Tests that exercise environment overrides set the variables themselves.
    """
    for name in ("DOCSHAPE_DEBUG", "DOCSHAPE_FAIL_FAST", "DOCSHAPE_MAX_DEPTH"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to the test fixtures directory."""
    return FIXTURES_DIR
