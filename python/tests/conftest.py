"""Shared fixtures for llsparse tests."""

import pytest

from llsparse import _runtime


@pytest.fixture(autouse=True)
def reset_runtime_options():
    """Restore process-wide options after each test."""
    yield
    _runtime._reset_from_env()


@pytest.fixture
def debug_checks():
    """Run the test with store invariant checks after every mutation."""
    _runtime.set_debug_checks(True)
    yield
