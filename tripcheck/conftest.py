"""
================================================================================
Root Pytest Configuration
================================================================================

Registers the project markers and provides fixtures shared by the unit and
UI suites.

================================================================================
"""

import pytest

from tripcheck.ui_testing.framework.runtime_store import RuntimeStore


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

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests against the live site (deselected by default)"
    )
    config.addinivalue_line(
        "markers", "unit: Framework tests that run without a browser"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "ui: UI-specific tests"
    )
    config.addinivalue_line(
        "markers", "hotel: Hotel search flow"
    )
    config.addinivalue_line(
        "markers", "flight: Flight + Hotel search flow"
    )


def pytest_collection_modifyitems(config, items):
    """Add suite markers based on where a test lives."""
    for item in items:
        path = str(item.fspath)
        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)
        if "tripcheck/unit" in path.replace("\\", "/"):
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "tripcheck - Travel Booking UI Automation",
        "=" * 60,
        "",
    ]


@pytest.fixture
def runtime_store(request) -> RuntimeStore:
    """Fresh RuntimeStore per test, named after the test."""
    return RuntimeStore(request.node.name)
