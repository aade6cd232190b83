"""Test-layer conftest: marker registration."""

from __future__ import annotations


def pytest_configure(config):
    """Register custom markers so --strict-markers does not complain."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated, no browser)")
    config.addinivalue_line("markers", "integration: Tests wiring several suite components")
    config.addinivalue_line("markers", "e2e: End-to-end Playwright tests against a live Evershop admin")
