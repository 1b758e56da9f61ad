"""
Pytest configuration and shared fixtures for Merkle tree tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

make_elements = _common.make_elements
make_tree = _common.make_tree


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def abc_tree():
    """Provide the three-element tree ["a", "b", "c"]."""
    from core.merkle import build_merkle_tree
    return build_merkle_tree(["a", "b", "c"])


@pytest.fixture
def six_tree():
    """Provide a tree over six distinct elements."""
    return make_tree(6)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """
    Isolate a test from ARBOR_* variables and config files.

    Runs the test inside tmp_path so no ./arbor.json is picked up.
    """
    for var in [
        "ARBOR_LOG_LEVEL",
        "ARBOR_LOG_FILE",
        "ARBOR_OUTPUT_FORMAT",
        "ARBOR_SHOW_NODES",
        "ARBOR_ELEMENT_ENCODING",
    ]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    return tmp_path


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
