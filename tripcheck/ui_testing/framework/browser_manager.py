"""
================================================================================
Browser Manager
================================================================================

Browser lifecycle management for the booking suites.

Features:
    - One browser per worker, one isolated context per test
    - Launch settings from config (browser.type / headless / slow_mo)
    - Default navigation and action timeouts applied to every context

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from loguru import logger
from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
)

from .config_loader import ConfigurationError, get_config


SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")


class BrowserManager:
    """
    Manages the browser and its contexts.

    Usage:
        async with BrowserManager() as manager:
            page = await manager.new_page()
            await HotelSearchPage(page).goto()
    """

    DEFAULT_LAUNCH_ARGS: List[str] = [
        "--start-maximized",
        "--disable-blink-features=AutomationControlled",
    ]

    DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
        "viewport": {"width": 1920, "height": 1080},
        "ignore_https_errors": True,
        "locale": "en-IN",
    }

    def __init__(
        self,
        browser_type: Optional[str] = None,
        headless: Optional[bool] = None,
        slow_mo: Optional[int] = None,
    ):
        """
        Args:
            browser_type: 'chromium', 'firefox' or 'webkit' (defaults to browser.type)
            headless: Headless mode (defaults to browser.headless)
            slow_mo: Delay between Playwright operations in ms (defaults to browser.slow_mo)
        """
        config = get_config()
        self.browser_type = browser_type or config.get("browser.type", "chromium")
        self.headless = config.get("browser.headless", True) if headless is None else headless
        self.slow_mo = config.get("browser.slow_mo", 0) if slow_mo is None else slow_mo
        self.action_timeout = config.get_timeout("action")
        self.navigation_timeout = config.get_timeout("navigation")

        if self.browser_type not in SUPPORTED_BROWSERS:
            raise ConfigurationError(
                f"Environment configuration invalid: unsupported browser '{self.browser_type}'"
            )

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._contexts: List[BrowserContext] = []

    async def __aenter__(self) -> "BrowserManager":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def start(self) -> None:
        """Start Playwright and launch the configured browser."""
        self._playwright = await async_playwright().start()
        launcher = getattr(self._playwright, self.browser_type)

        launch_options: Dict[str, Any] = {
            "headless": self.headless,
            "slow_mo": self.slow_mo,
        }
        if self.browser_type == "chromium":
            launch_options["args"] = list(self.DEFAULT_LAUNCH_ARGS)

        self._browser = await launcher.launch(**launch_options)
        logger.info(
            f"Browser started: {self.browser_type} "
            f"(headless={self.headless}, slow_mo={self.slow_mo})"
        )

    async def close(self) -> None:
        """Close all contexts, the browser and Playwright."""
        for context in self._contexts:
            try:
                await context.close()
            except Exception as e:
                logger.debug(f"Context already closed: {e}")
        self._contexts.clear()

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        logger.debug("Browser closed")

    async def new_context(self, **options: Any) -> BrowserContext:
        """
        Create an isolated browser context (own cookies and storage).

        Args:
            **options: Overrides for DEFAULT_CONTEXT_OPTIONS
        """
        if not self._browser:
            raise RuntimeError("Browser not started. Call start() first.")

        context = await self._browser.new_context(**{**self.DEFAULT_CONTEXT_OPTIONS, **options})
        context.set_default_timeout(self.action_timeout)
        context.set_default_navigation_timeout(self.navigation_timeout)
        self._contexts.append(context)
        return context

    async def new_page(
        self,
        context: Optional[BrowserContext] = None,
        **context_options: Any,
    ) -> Page:
        """Create a page in `context`, or in a fresh context when omitted."""
        if context is None:
            context = await self.new_context(**context_options)
        return await context.new_page()

    @property
    def browser(self) -> Optional[Browser]:
        return self._browser


__all__ = [
    "BrowserManager",
    "SUPPORTED_BROWSERS",
]
