"""Pytest configuration and shared fixtures for the editor2md test suite."""

import os

import pytest

from editor2md.context import SerializationContext, SerializerState
from editor2md.serializer import MarkdownSerializer

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Verbosity, settings

    settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=50)
    settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
except ImportError:
    # Hypothesis not installed; property tests are skipped via importorskip
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests - full pipeline tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def serializer():
    return MarkdownSerializer()


@pytest.fixture
def state():
    return SerializerState()


@pytest.fixture
def ctx():
    return SerializationContext()
