"""Pytest configuration for integration tests."""

import pytest


def pytest_collection_modifyitems(items):
    """Tag everything under integration_tests so `-m "not integration"` skips it."""
    for item in items:
        if "integration_tests" in str(item.path):
            item.add_marker(pytest.mark.integration)
