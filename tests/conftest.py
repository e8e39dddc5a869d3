"""Shared pytest fixtures for ctxwire tests."""

import pytest

from tests.helpers import CallCounter


@pytest.fixture()
def call_counter() -> CallCounter:
    """Fresh resolver call counter."""
    return CallCounter()
