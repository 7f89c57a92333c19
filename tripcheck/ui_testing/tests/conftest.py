"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Fixtures for browser lifecycle and page objects used by the e2e suites.

Key Features:
- One browser per test (isolated context, config-driven launch)
- Page Object fixtures sharing the test's RuntimeStore
- Screenshot, URL and runtime values attached to Allure on failure

================================================================================
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from loguru import logger
from playwright.async_api import Page

from tripcheck.ui_testing.framework.browser_manager import BrowserManager
from tripcheck.ui_testing.framework.page_base import BasePage
from tripcheck.ui_testing.framework.runtime_store import RuntimeStore
from tripcheck.ui_testing.pages.flight_search_page import FlightSearchPage
from tripcheck.ui_testing.pages.hotel_search_page import HotelSearchPage


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest_asyncio.fixture
async def browser_manager() -> AsyncGenerator[BrowserManager, None]:
    """Browser started from config (browser.type / headless / slow_mo)."""
    async with BrowserManager() as manager:
        yield manager


@pytest_asyncio.fixture
async def page(browser_manager: BrowserManager) -> AsyncGenerator[Page, None]:
    """Fresh page in its own context."""
    page = await browser_manager.new_page()
    yield page
    await page.close()


# ================================================================================
# Page Object Fixtures
# ================================================================================

async def _capture_if_failed(request, page_object: BasePage) -> None:
    report = getattr(request.node, "rep_call", None)
    if report is not None and report.failed:
        logger.error(f"Test failed → {request.node.name}")
        page_object.store.dump()
        await page_object.capture_failure(request.node.name)


@pytest_asyncio.fixture
async def hotel_page(request, page: Page, runtime_store: RuntimeStore) -> AsyncGenerator[HotelSearchPage, None]:
    hotel = HotelSearchPage(page, store=runtime_store)
    yield hotel
    await _capture_if_failed(request, hotel)


@pytest_asyncio.fixture
async def flight_page(request, page: Page, runtime_store: RuntimeStore) -> AsyncGenerator[FlightSearchPage, None]:
    flight = FlightSearchPage(page, store=runtime_store)
    yield flight
    await _capture_if_failed(request, flight)


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose each phase's report on the item (`item.rep_call`) for fixtures."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)
