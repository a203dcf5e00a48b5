"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

TESTS_ROOT = Path(__file__).resolve().parent
FIXTURES_ROOT = TESTS_ROOT / "fixtures"


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    src_path = TESTS_ROOT.parent / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def fixtures_root() -> Path:
    """Return the tests/fixtures directory."""
    return FIXTURES_ROOT


@pytest.fixture
def score_documents() -> list[dict[str, object]]:
    """Three documents stored out of score order."""
    return [
        {"id": "1", "score": 3},
        {"id": "2", "score": 1},
        {"id": "3", "score": 2},
    ]
