"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Labelled element declaration (`self.target(selector, label)`)
    - Navigation with load-state synchronisation
    - Retried element interactions (delegated to ElementActions)
    - Wait utilities (delegated to wait_utils)
    - Runtime store capture helpers (text / input value / attribute)
    - Screenshot and failure capture

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

import allure
from loguru import logger
from playwright.async_api import Page

from . import wait_utils
from .config_loader import get_config
from .element_actions import ElementActions
from .error_handler import ErrorHandler
from .runtime_store import RuntimeStore
from .target import Target, resolve_locator


# Used when artifacts.screenshots is not configured
SCREENSHOT_DIR = Path("test-results") / "screenshots"


class BasePage:
    """
    Base class for all page objects.

    Usage:
        class HotelSearchPage(BasePage):
            def __init__(self, page, **kwargs):
                super().__init__(page, **kwargs)
                self.city_input = self.target("//input[@id='txtCity']", "City input")

            async def search_city(self, city: str) -> None:
                await self.type_text(self.city_input, city)
    """

    # Override in subclasses
    URL_PATH: str = "/"
    PAGE_TITLE: str = ""

    def __init__(
        self,
        page: Page,
        base_url: Optional[str] = None,
        store: Optional[RuntimeStore] = None,
        actions: Optional[ElementActions] = None,
    ):
        """
        Initialize page object.

        Args:
            page: Playwright Page object
            base_url: Base URL for the application (defaults to app.base_url)
            store: Runtime store shared by the page objects of one test
            actions: ElementActions to use (defaults built from config)
        """
        self.page = page
        config = get_config()
        self.base_url = (base_url or config.get("app.base_url", "")).rstrip("/")
        self.navigation_timeout = config.get_timeout("navigation")
        self.store = store if store is not None else RuntimeStore(type(self).__name__)
        self.actions = actions or ElementActions()

    def target(self, selector: str, label: str) -> Target:
        """
        Declare a labelled element.

        XPath selectors may be given as `//...`, `(//...)[1]` or `xpath=...`.
        """
        return Target(resolve_locator(self.page, selector), label)

    @property
    def url(self) -> str:
        """Full URL of this page."""
        return f"{self.base_url}{self.URL_PATH}"

    # =========================================================================
    # Navigation
    # =========================================================================

    async def navigate_to(self, url: str, wait_for: str = "domcontentloaded") -> "BasePage":
        """
        Navigate to an absolute URL.

        Args:
            url: Full URL
            wait_for: 'load', 'domcontentloaded' or 'networkidle'
        """
        logger.info(f"Navigate To → {url}")
        with allure.step(f"Navigate to {url}"):
            await ErrorHandler.handle(
                lambda: self.page.goto(url, wait_until=wait_for, timeout=self.navigation_timeout),
                context=f"{type(self).__name__}.navigate_to",
            )
        return self

    async def goto(self, path: str = "") -> "BasePage":
        """Navigate to a path relative to base_url (defaults to URL_PATH)."""
        return await self.navigate_to(f"{self.base_url}{path or self.URL_PATH}")

    async def reload(self) -> "BasePage":
        with allure.step("Reload page"):
            await ErrorHandler.handle(
                lambda: self.page.reload(wait_until="domcontentloaded", timeout=self.navigation_timeout),
                context=f"{type(self).__name__}.reload",
            )
        return self

    async def get_title(self) -> str:
        title = await self.page.title()
        logger.debug(f"getTitle → {title}")
        return title

    # =========================================================================
    # Element interactions
    # =========================================================================

    async def click(self, target: Target, **kwargs) -> "BasePage":
        await self.actions.click(target, **kwargs)
        return self

    async def double_click(self, target: Target, **kwargs) -> "BasePage":
        await self.actions.double_click(target, **kwargs)
        return self

    async def fill(self, target: Target, value: str, **kwargs) -> "BasePage":
        await self.actions.fill(target, value, **kwargs)
        return self

    async def type_text(self, target: Target, text: str, **kwargs) -> "BasePage":
        await self.actions.type_text(target, text, **kwargs)
        return self

    async def clear(self, target: Target, **kwargs) -> "BasePage":
        await self.actions.clear(target, **kwargs)
        return self

    async def select_option(self, target: Target, value: Union[str, List[str]], **kwargs) -> "BasePage":
        await self.actions.select_option(target, value, **kwargs)
        return self

    async def check(self, target: Target, **kwargs) -> "BasePage":
        await self.actions.check(target, **kwargs)
        return self

    async def uncheck(self, target: Target, **kwargs) -> "BasePage":
        await self.actions.uncheck(target, **kwargs)
        return self

    async def hover(self, target: Target, **kwargs) -> "BasePage":
        await self.actions.hover(target, **kwargs)
        return self

    async def press(self, target: Target, key: str, **kwargs) -> "BasePage":
        await self.actions.press(target, key, **kwargs)
        return self

    async def get_text(self, target: Target) -> str:
        return await self.actions.get_text(target)

    async def is_visible(self, target: Target, timeout: int = 5000) -> bool:
        return await self.actions.is_visible(target, timeout=timeout)

    # =========================================================================
    # Waits
    # =========================================================================

    async def wait_for_visible(self, target: Target, timeout: Optional[int] = None) -> "BasePage":
        await wait_utils.wait_for_visible(target, timeout)
        return self

    async def wait_for_disappear(self, target: Target, timeout: Optional[int] = None) -> "BasePage":
        await wait_utils.wait_for_disappear(target, timeout)
        return self

    async def wait_for_load_state(self, state: str = "networkidle", timeout: Optional[int] = None) -> "BasePage":
        await wait_utils.wait_for_load_state(self.page, state, timeout)
        return self

    async def wait_for_url_contains(self, substring: str, timeout: Optional[int] = None) -> "BasePage":
        await wait_utils.wait_for_url_contains(self.page, substring, timeout)
        return self

    async def wait_for_text(self, target: Target, expected: str, timeout: Optional[int] = None) -> "BasePage":
        await wait_utils.wait_for_text(target, expected, timeout)
        return self

    # =========================================================================
    # Runtime store capture
    # =========================================================================

    async def store_text_content(self, target: Target, key: str) -> str:
        """Store the element's trimmed text under `key` and return it."""
        value = await self.actions.get_text(target)
        self.store.set(key, value)
        return value

    async def store_input_value(self, target: Target, key: str) -> str:
        """Store an input/textarea value; stores "" for non-input elements."""
        try:
            value = (await self.actions.get_input_value(target)).strip()
        except Exception as e:
            logger.debug(f"No input value for {target.label}: {e}")
            value = ""
        self.store.set(key, value)
        return value

    async def store_attribute_value(self, target: Target, attribute: str, key: str) -> str:
        """Store the trimmed attribute value ("" when missing)."""
        value = (await self.actions.get_attribute(target, attribute) or "").strip()
        self.store.set(key, value)
        return value

    # =========================================================================
    # Screenshot and Debug Utilities
    # =========================================================================

    async def screenshot(self, name: str, full_page: bool = False) -> Path:
        """
        Take a screenshot and attach it to Allure.

        Args:
            name: Screenshot name (without extension)
            full_page: Capture full scrollable page

        Returns:
            Path to saved screenshot
        """
        target_dir = Path(get_config().get("artifacts.screenshots", str(SCREENSHOT_DIR)))
        target_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = target_dir / f"{name}_{timestamp}.png"

        await self.page.screenshot(path=str(filepath), full_page=full_page)
        allure.attach.file(str(filepath), name=name, attachment_type=allure.attachment_type.PNG)

        logger.debug(f"Screenshot saved: {filepath}")
        return filepath

    async def capture_failure(self, test_name: str) -> None:
        """Attach screenshot, current URL and runtime values after a failure."""
        with allure.step("Capture failure details"):
            await ErrorHandler.capture_screenshot(self.page, f"failure_{test_name}")
            allure.attach(
                self.page.url,
                name="Current URL",
                attachment_type=allure.attachment_type.TEXT,
            )
            if len(self.store):
                allure.attach(
                    self.store.dump(),
                    name="Runtime Values",
                    attachment_type=allure.attachment_type.JSON,
                )


__all__ = [
    "BasePage",
]
