# ================================================================================
# Element Actions Module
# ================================================================================
#
# This module provides UI element interaction utilities with built-in retry
# logic, wait mechanisms, and Allure integration.
#
# Key Features:
#   - Wait for visibility + best-effort scroll before every interaction
#   - Retry with backoff around every interaction (see retry_utils.py)
#   - Bounding-box click fallback when a direct click is blocked by an overlay
#   - Allure step integration
#   - Keyboard actions and read helpers
#
# NOTE:
#   The fallback click dispatches a mouse click at the element's center. It does
#   not reproduce focus or accessibility side effects of a semantic click.
#
# ================================================================================

from __future__ import annotations

from typing import Awaitable, Callable, List, Optional, TypeVar, Union

import allure
from loguru import logger

from .config_loader import get_config
from .error_handler import FrameworkError, error_message
from .retry_utils import RetryOptions, retry
from .target import Target


T = TypeVar("T")

SCROLL_TIMEOUT_MS = 4000


class ElementActionError(FrameworkError):
    """Raised when an interaction cannot be performed at all."""
    pass


class ElementActions:
    """
    Reliable element interactions for page objects.

    Every action waits for the element, scrolls it into view when possible,
    and runs inside the retry engine.

    Example:
        actions = ElementActions()
        await actions.click(search_button)
        await actions.fill(city_input, "Goa")
    """

    def __init__(
        self,
        retry_options: Optional[RetryOptions] = None,
        default_timeout: Optional[int] = None,
    ):
        """
        Args:
            retry_options: RetryOptions for every action (defaults from config)
            default_timeout: Action timeout in milliseconds (defaults to timeouts.action)
        """
        self.retry_options = retry_options or RetryOptions.from_config()
        self.default_timeout = default_timeout or get_config().get_timeout("action")

    async def _run(
        self,
        step: str,
        body: Callable[[], Awaitable[T]],
        retry_options: Optional[RetryOptions] = None,
    ) -> T:
        with allure.step(step):
            return await retry(body, retry_options or self.retry_options)

    async def _prepare(self, target: Target, timeout: int) -> None:
        await target.locator.wait_for(state="visible", timeout=timeout)
        await self._scroll_into_view(target)

    @staticmethod
    async def _scroll_into_view(target: Target) -> None:
        try:
            await target.locator.scroll_into_view_if_needed(timeout=SCROLL_TIMEOUT_MS)
        except Exception as e:
            logger.debug(f"Scroll skipped for {target.label}: {error_message(e)}")

    # =========================================================================
    # Click
    # =========================================================================

    async def click(
        self,
        target: Target,
        timeout: Optional[int] = None,
        force: bool = False,
        retry_options: Optional[RetryOptions] = None,
    ) -> None:
        """
        Click an element, falling back to a coordinate click when blocked.

        1) wait for visible  2) scroll into view  3) direct click
        4) on failure, click the center of the element's bounding box

        Raises:
            ElementActionError: No bounding box (element not rendered)
        """
        timeout = timeout or self.default_timeout

        async def attempt() -> None:
            logger.debug(f"Click → {target.label}")
            await self._prepare(target, timeout)

            try:
                await target.locator.click(timeout=timeout, force=force)
                return
            except Exception as e:
                logger.warning(f"Normal click failed for → {target.label}: {error_message(e)}")
                logger.warning("Trying bounding-box fallback click...")

            box = await target.locator.bounding_box()
            if not box:
                raise ElementActionError(f"Bounding box not found → {target.label}")

            logger.debug(f"BoundingBoxClick → {target.label}")
            await target.page.mouse.click(
                box["x"] + box["width"] / 2,
                box["y"] + box["height"] / 2,
            )

        await self._run(f"Click: {target.label}", attempt, retry_options)

    async def double_click(
        self,
        target: Target,
        timeout: Optional[int] = None,
        retry_options: Optional[RetryOptions] = None,
    ) -> None:
        timeout = timeout or self.default_timeout

        async def attempt() -> None:
            logger.debug(f"DoubleClick → {target.label}")
            await self._prepare(target, timeout)
            await target.locator.dblclick(timeout=timeout)

        await self._run(f"Double click: {target.label}", attempt, retry_options)

    async def right_click(
        self,
        target: Target,
        timeout: Optional[int] = None,
        retry_options: Optional[RetryOptions] = None,
    ) -> None:
        """Right-click (context menu)."""
        timeout = timeout or self.default_timeout

        async def attempt() -> None:
            logger.debug(f"RightClick → {target.label}")
            await self._prepare(target, timeout)
            await target.locator.click(button="right", timeout=timeout)

        await self._run(f"Right click: {target.label}", attempt, retry_options)

    # =========================================================================
    # Text input
    # =========================================================================

    async def fill(
        self,
        target: Target,
        value: str,
        timeout: Optional[int] = None,
        retry_options: Optional[RetryOptions] = None,
    ) -> None:
        """Fill an input instantly (no key events per character)."""
        timeout = timeout or self.default_timeout

        async def attempt() -> None:
            logger.debug(f"Fill → {target.label} | {value[:50]}")
            await self._prepare(target, timeout)
            await target.locator.fill(value, timeout=timeout)

        await self._run(f"Fill: {target.label}", attempt, retry_options)

    async def type_text(
        self,
        target: Target,
        text: str,
        delay: int = 50,
        timeout: Optional[int] = None,
        retry_options: Optional[RetryOptions] = None,
    ) -> None:
        """
        Type text key by key (fires keydown/keyup/input events).

        Use for autocomplete inputs and search bars.

        Args:
            target: Input element
            text: Text to type
            delay: Delay between keystrokes in milliseconds
        """
        timeout = timeout or self.default_timeout

        async def attempt() -> None:
            logger.debug(f'Type → {target.label} | value="{text}"')
            await self._prepare(target, timeout)
            await target.locator.press_sequentially(text, delay=delay, timeout=timeout)

        await self._run(f"Type: {target.label}", attempt, retry_options)

    async def clear(
        self,
        target: Target,
        timeout: Optional[int] = None,
        retry_options: Optional[RetryOptions] = None,
    ) -> None:
        timeout = timeout or self.default_timeout

        async def attempt() -> None:
            logger.debug(f"Clear → {target.label}")
            await self._prepare(target, timeout)
            await target.locator.clear(timeout=timeout)

        await self._run(f"Clear: {target.label}", attempt, retry_options)

    async def press(
        self,
        target: Target,
        key: str,
        timeout: Optional[int] = None,
        retry_options: Optional[RetryOptions] = None,
    ) -> None:
        """Press a keyboard key on the element (e.g. "Enter", "Tab")."""
        timeout = timeout or self.default_timeout

        async def attempt() -> None:
            logger.debug(f'Press "{key}" → {target.label}')
            await self._prepare(target, timeout)
            await target.locator.press(key, timeout=timeout)

        await self._run(f"Press {key}: {target.label}", attempt, retry_options)

    # =========================================================================
    # Form controls
    # =========================================================================

    async def select_option(
        self,
        target: Target,
        value: Union[str, List[str]],
        timeout: Optional[int] = None,
        retry_options: Optional[RetryOptions] = None,
    ) -> List[str]:
        """
        Select option(s) by value or label.

        Returns:
            Values of the selected options
        """
        timeout = timeout or self.default_timeout

        async def attempt() -> List[str]:
            logger.debug(f"SelectOption → {target.label} | {value}")
            await self._prepare(target, timeout)
            return await target.locator.select_option(value, timeout=timeout)

        return await self._run(f"Select option {value}: {target.label}", attempt, retry_options)

    async def check(
        self,
        target: Target,
        timeout: Optional[int] = None,
        retry_options: Optional[RetryOptions] = None,
    ) -> None:
        timeout = timeout or self.default_timeout

        async def attempt() -> None:
            logger.debug(f"Check → {target.label}")
            await self._prepare(target, timeout)
            await target.locator.check(timeout=timeout)

        await self._run(f"Check: {target.label}", attempt, retry_options)

    async def uncheck(
        self,
        target: Target,
        timeout: Optional[int] = None,
        retry_options: Optional[RetryOptions] = None,
    ) -> None:
        timeout = timeout or self.default_timeout

        async def attempt() -> None:
            logger.debug(f"Uncheck → {target.label}")
            await self._prepare(target, timeout)
            await target.locator.uncheck(timeout=timeout)

        await self._run(f"Uncheck: {target.label}", attempt, retry_options)

    # =========================================================================
    # Pointer / focus
    # =========================================================================

    async def hover(
        self,
        target: Target,
        timeout: Optional[int] = None,
        retry_options: Optional[RetryOptions] = None,
    ) -> None:
        timeout = timeout or self.default_timeout

        async def attempt() -> None:
            logger.debug(f"Hover → {target.label}")
            await self._prepare(target, timeout)
            await target.locator.hover(timeout=timeout)

        await self._run(f"Hover: {target.label}", attempt, retry_options)

    async def focus(
        self,
        target: Target,
        timeout: Optional[int] = None,
        retry_options: Optional[RetryOptions] = None,
    ) -> None:
        timeout = timeout or self.default_timeout

        async def attempt() -> None:
            logger.debug(f"Focus → {target.label}")
            await self._prepare(target, timeout)
            await target.locator.focus(timeout=timeout)

        await self._run(f"Focus: {target.label}", attempt, retry_options)

    # =========================================================================
    # Read helpers
    # =========================================================================

    async def get_text(self, target: Target, timeout: Optional[int] = None) -> str:
        """Trimmed text content; empty string when the element has none."""
        timeout = timeout or self.default_timeout
        logger.debug(f"GetText → {target.label}")
        text = await target.locator.text_content(timeout=timeout)
        return (text or "").strip()

    async def get_input_value(self, target: Target, timeout: Optional[int] = None) -> str:
        timeout = timeout or self.default_timeout
        logger.debug(f"GetInputValue → {target.label}")
        return await target.locator.input_value(timeout=timeout)

    async def get_attribute(
        self,
        target: Target,
        attribute: str,
        timeout: Optional[int] = None,
    ) -> Optional[str]:
        timeout = timeout or self.default_timeout
        logger.debug(f'Attribute "{attribute}" → {target.label}')
        return await target.locator.get_attribute(attribute, timeout=timeout)

    async def count(self, target: Target) -> int:
        logger.debug(f"Count elements → {target.label}")
        return await target.locator.count()

    async def is_visible(self, target: Target, timeout: int = 5000) -> bool:
        """True if the element becomes visible within `timeout`; never raises."""
        try:
            logger.debug(f"Check visible → {target.label}")
            await target.locator.wait_for(state="visible", timeout=timeout)
            return await target.locator.is_visible()
        except Exception:
            return False

    async def is_enabled(self, target: Target) -> bool:
        try:
            return await target.locator.is_enabled()
        except Exception:
            return False

    async def is_checked(self, target: Target) -> bool:
        try:
            return await target.locator.is_checked()
        except Exception:
            return False


__all__ = [
    "ElementActionError",
    "ElementActions",
]
