"""Pytest configuration and shared fixtures."""

import os

import pytest
from hypothesis import Verbosity, settings

# Configure Hypothesis profiles
settings.register_profile("ci", max_examples=200, deadline=None)
settings.register_profile("dev", max_examples=50, deadline=None)
settings.register_profile("debug", max_examples=10, verbosity=Verbosity.verbose)

# Load profile from environment or default to "dev"
profile = os.environ.get("HYPOTHESIS_PROFILE", "dev")
settings.load_profile(profile)


@pytest.fixture
def engine():
    """Provide a fresh CalculatorEngine with no persistence."""
    from basic_calculator import CalculatorEngine

    return CalculatorEngine()


@pytest.fixture
def store():
    """Provide an empty in-memory history store."""
    from basic_calculator import MemoryHistoryStore

    return MemoryHistoryStore()


@pytest.fixture
def persisted_engine(store):
    """Provide an engine whose history is saved to ``store``."""
    from basic_calculator import CalculatorEngine

    return CalculatorEngine(store=store)


def press(engine, *keys: str):
    """Feed keyboard keys to ``engine`` in order."""
    from basic_calculator import dispatch_key

    for key in keys:
        assert dispatch_key(engine, key), f"unbound key {key!r}"
    return engine


@pytest.fixture
def keys():
    """Provide the ``press`` helper for typing key sequences."""
    return press
