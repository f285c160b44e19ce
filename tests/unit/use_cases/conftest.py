"""Fixtures for use case tests over an in-memory store."""

import pytest


@pytest.fixture
def make(repository, clock):
    """Build a use case bound to the shared in-memory repository."""

    def _make(use_case_cls):
        return use_case_cls(repository=repository, clock=clock)

    return _make
