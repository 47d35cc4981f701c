"""Pytest configuration for wisp tests."""

import sys
from pathlib import Path

import pytest

# Import the in-repo package even when it is not installed
repo_root = Path(__file__).parent.parent
sys.path.insert(0, str(repo_root))

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def sample_path() -> Path:
    return FIXTURES_DIR / "sample.json"
