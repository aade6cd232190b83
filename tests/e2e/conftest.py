"""Pytest configuration for E2E tests with Playwright."""

from __future__ import annotations

import pytest
from playwright.sync_api import expect, sync_playwright

from evershop_qa.context import build_suite_context
from evershop_qa.factories import get_user
from evershop_qa.settings import BrowserSettings
from tests.e2e.artifacts import finish_page
from tests.e2e.pages import PageFactory


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Keep each phase's report on the item so fixtures can see failures."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


@pytest.fixture(scope="session")
def suite():
    """Logger, settings and resolved profile shared by the whole session."""
    context = build_suite_context()
    yield context
    context.close()


@pytest.fixture(scope="session", params=BrowserSettings.from_env().browsers)
def browser(request, suite):
    """Launch each configured browser once per session."""
    with sync_playwright() as p:
        browser = getattr(p, request.param).launch(headless=suite.settings.headless)
        yield browser
        browser.close()


@pytest.fixture(scope="function")
def page(browser, suite, request):
    """Create a new page for each test, with tracing, video and failure screenshots."""
    settings = suite.settings
    artifacts = settings.artifact_dir(request.node.name)
    context = browser.new_context(
        viewport=settings.viewport,
        record_video_dir=str(artifacts / "video") if settings.record_video else None,
    )
    context.set_default_navigation_timeout(settings.navigation_timeout_ms)
    context.set_default_timeout(settings.action_timeout_ms)
    expect.set_options(timeout=settings.expect_timeout_ms)
    if settings.record_trace:
        context.tracing.start(screenshots=True, snapshots=True, sources=True)

    page = context.new_page()
    yield page

    report = getattr(request.node, "rep_call", None)
    finish_page(page, context, settings, artifacts, failed=report is not None and report.failed)


@pytest.fixture
def test_logger(suite, request):
    return suite.logger.create_test_logger(request.node.name)


@pytest.fixture
def page_factory(page, suite, test_logger):
    """PageFactory for a page already signed in as the default admin."""
    workflow = suite.logger.create_workflow_logger("admin-login")
    factory = PageFactory(page, suite)
    admin_login = factory.get_admin_login_page()
    admin_login.go()
    admin_login.login_as_admin(get_user(suite.profile, "default_user", log=workflow))
    test_logger.info("Admin session ready")
    yield factory
