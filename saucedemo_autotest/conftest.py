"""
================================================================================
Package Pytest Configuration
================================================================================

This module registers the markers shared by the unit and end-to-end suites
and tags tests by directory.

================================================================================
"""

import pytest

from saucedemo_autotest.common.config_loader import get_settings


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests against the live store"
    )
    config.addinivalue_line(
        "markers", "ui: UI tests that drive a real browser"
    )
    config.addinivalue_line(
        "markers", "unit: Browser-free tests against the fake driver"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "auth: Tests related to login and logout"
    )
    config.addinivalue_line(
        "markers", "checkout: Tests related to cart and checkout"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-tag tests by the directory they live in."""
    for item in items:
        path = str(item.fspath)
        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)
        elif "unit" in path:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "SauceDemo Resilient UI Harness",
        *get_settings().summary(),
        "=" * 60,
        "",
    ]
