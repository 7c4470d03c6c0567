"""Pytest configuration and shared fixtures for prosediff test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

from pathlib import Path
from typing import Generator

import pytest
from utils import FIXTURES_DIR

from prosediff.logging_utils import reset_logging

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Phase, Verbosity, settings

    # Register custom Hypothesis profiles
    settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=50)
    settings.register_profile(
        "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
    )

    # Load profile from environment or use default
    import os

    profile = os.getenv("HYPOTHESIS_PROFILE", "dev")
    settings.load_profile(profile)
except ImportError:
    # Hypothesis not installed, skip configuration
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests - full pipeline tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests using Hypothesis")


@pytest.fixture(autouse=True)
def reset_package_logging() -> Generator[None, None, None]:
    """Remove handlers installed by ``configure_logging`` during a test."""
    try:
        yield
    finally:
        reset_logging()


@pytest.fixture
def fixtures_dir() -> Path:
    """Provide the directory holding the sample diff files.

    Returns
    -------
    Path
        Path of ``tests/fixtures/diffs``

    """
    return FIXTURES_DIR


@pytest.fixture
def unified_change() -> str:
    """Provide a minimal unified diff changing one word.

    Returns
    -------
    str
        ``foo bar`` changed into ``foo baz``

    """
    return "@@ -1 +1 @@\n-foo bar\n+foo baz\n"


@pytest.fixture
def normal_change() -> str:
    """Provide a minimal normal format diff changing one word.

    Returns
    -------
    str
        ``foo bar`` changed into ``foo baz``

    """
    return "1c1\n< foo bar\n---\n> foo baz\n"
