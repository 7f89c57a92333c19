# ================================================================================
# Wait Utilities Module
# ================================================================================
#
# Waits that synchronize tests with asynchronous UI state.
#
# Key Features:
#   - Visibility / disappearance / enabled-state waits
#   - Page load-state and URL waits
#   - Text polling with a custom interval
#   - Elapsed-time tracking and labelled timeout errors
#   - Allure integration for step reporting
#
# Usage:
#   await wait_for_visible(page_obj.search_button)
#   await wait_for_disappear(page_obj.loader, timeout=60000)
#   await wait_for_text(page_obj.toast, "Saved")
#
# ================================================================================

from __future__ import annotations

import asyncio
import re
import time
from typing import Awaitable, Callable, Optional

import allure
from loguru import logger
from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .config_loader import get_config
from .error_handler import FrameworkError
from .target import Target


LOAD_STATES = ("load", "domcontentloaded", "networkidle")
DEFAULT_POLL_INTERVAL_MS = 250


class WaitTimeoutError(FrameworkError, TimeoutError):
    """Raised when a wait operation times out."""

    def __init__(self, label: str, condition: str, elapsed_ms: float, detail: str = ""):
        self.label = label
        self.condition = condition
        self.elapsed_ms = elapsed_ms
        message = f"Timeout after {elapsed_ms:.0f}ms waiting for {label} to {condition}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


def _default_timeout(timeout: Optional[int]) -> int:
    return timeout if timeout is not None else get_config().get_timeout("wait")


def _elapsed_ms(start: float) -> float:
    return (time.monotonic() - start) * 1000


async def _wait_for_state(
    target: Target,
    state: str,
    condition: str,
    timeout: Optional[int],
    start: Optional[float] = None,
) -> None:
    """Wait for a locator state; `start` lets a caller share one deadline across phases."""
    timeout = _default_timeout(timeout)
    if start is None:
        start = time.monotonic()
        remaining = timeout
    else:
        # Playwright treats timeout=0 as "no timeout"
        remaining = max(timeout - _elapsed_ms(start), 1)
    logger.debug(f"Wait: {state} → {target.label} | timeout: {remaining:.0f}ms")

    try:
        await target.locator.wait_for(state=state, timeout=remaining)
    except PlaywrightTimeoutError as err:
        elapsed = _elapsed_ms(start)
        logger.error(f"Timeout after {elapsed:.0f}ms → {target.label}")
        lines = str(err).splitlines()
        raise WaitTimeoutError(target.label, condition, elapsed, lines[0] if lines else "") from err

    logger.debug(f"{state.capitalize()} in {_elapsed_ms(start):.0f}ms → {target.label}")


async def _poll_until(
    check: Callable[[], Awaitable[bool]],
    label: str,
    condition: str,
    timeout: int,
    poll_interval_ms: int,
    start: Optional[float] = None,
) -> float:
    """Run `check` every poll interval until it returns True; return elapsed ms since `start`."""
    start = time.monotonic() if start is None else start
    while True:
        if await check():
            return _elapsed_ms(start)
        elapsed = _elapsed_ms(start)
        if elapsed >= timeout:
            logger.error(f"Condition '{condition}' not met after {elapsed:.0f}ms → {label}")
            raise WaitTimeoutError(label, condition, elapsed)
        await asyncio.sleep(min(poll_interval_ms, max(timeout - elapsed, 0)) / 1000)


async def wait_for_visible(target: Target, timeout: Optional[int] = None) -> None:
    """
    Wait until an element becomes visible.

    Args:
        target: Element to wait on
        timeout: Timeout in milliseconds (defaults to timeouts.wait)

    Raises:
        WaitTimeoutError: Element did not become visible in time
    """
    with allure.step(f"Wait visible: {target.label}"):
        await _wait_for_state(target, "visible", "become visible", timeout)


async def wait_for_disappear(target: Target, timeout: Optional[int] = None) -> None:
    """
    Wait until an element is hidden or removed from the page.

    Typical use: loaders, spinners, auto-hiding toasts, closing modals.
    """
    with allure.step(f"Wait hidden: {target.label}"):
        await _wait_for_state(target, "hidden", "disappear", timeout)


async def wait_for_enabled(
    target: Target,
    timeout: Optional[int] = None,
    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
) -> None:
    """Wait until an element is visible and enabled, both within one `timeout`."""
    timeout = _default_timeout(timeout)
    start = time.monotonic()
    with allure.step(f"Wait enabled: {target.label}"):
        await _wait_for_state(target, "visible", "become visible", timeout, start=start)

        async def check() -> bool:
            try:
                return await target.locator.is_enabled()
            except Exception:
                return False

        elapsed = await _poll_until(check, target.label, "become enabled", timeout, poll_interval_ms, start=start)
        logger.debug(f"Enabled in {elapsed:.0f}ms → {target.label}")


async def wait_for_load_state(
    page: Page,
    state: str = "networkidle",
    timeout: Optional[int] = None,
) -> None:
    """
    Wait for the page to reach a load state.

    Args:
        page: Playwright Page
        state: 'load', 'domcontentloaded' or 'networkidle'
        timeout: Timeout in milliseconds
    """
    if state not in LOAD_STATES:
        raise ValueError(f"Unknown load state: {state} (expected one of {LOAD_STATES})")

    timeout = _default_timeout(timeout)
    with allure.step(f"Wait for load state: {state}"):
        logger.debug(f"Wait: loadState → {state}")
        start = time.monotonic()
        try:
            await page.wait_for_load_state(state, timeout=timeout)
        except PlaywrightTimeoutError as err:
            elapsed = _elapsed_ms(start)
            logger.error(f"LoadState timeout ({state}) after {elapsed:.0f}ms")
            raise WaitTimeoutError("page", f"reach load state '{state}'", elapsed) from err
        logger.debug(f"LoadState reached ({state}) in {_elapsed_ms(start):.0f}ms")


async def wait_for_url_contains(
    page: Page,
    substring: str,
    timeout: Optional[int] = None,
    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
) -> None:
    """
    Wait until the page URL matches `substring` (interpreted as a regex).

    Example:
        await wait_for_url_contains(page, "hotels/.*city=goa")
    """
    timeout = _default_timeout(timeout)
    pattern = re.compile(substring)

    async def check() -> bool:
        return bool(pattern.search(page.url or ""))

    with allure.step(f"Wait for URL: {substring}"):
        logger.debug(f'Wait: URL contains → "{substring}"')
        try:
            elapsed = await _poll_until(check, f'URL "{substring}"', "match", timeout, poll_interval_ms)
        except WaitTimeoutError:
            logger.error(f'URL did not contain "{substring}" | current: {page.url}')
            raise
        logger.debug(f'URL matched "{substring}" in {elapsed:.0f}ms')


async def _read_text(target: Target, timeout_ms: int) -> Optional[str]:
    try:
        return await target.locator.text_content(timeout=timeout_ms)
    except Exception:
        return None


async def wait_for_text(
    target: Target,
    expected: str,
    timeout: Optional[int] = None,
    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
) -> None:
    """
    Poll an element's text content until it contains `expected`.

    Polls manually at `poll_interval_ms`; read errors count as "not yet".
    """
    timeout = _default_timeout(timeout)

    async def check() -> bool:
        text = await _read_text(target, poll_interval_ms)
        return text is not None and expected in text

    with allure.step(f'Wait for text "{expected}" in {target.label}'):
        logger.debug(f'Wait: text "{expected}" → {target.label}')
        elapsed = await _poll_until(check, target.label, f'contain text "{expected}"', timeout, poll_interval_ms)
        logger.debug(f'Text found in {elapsed:.0f}ms → "{expected}"')


async def wait_for_text_to_disappear(
    target: Target,
    text: str,
    timeout: Optional[int] = None,
    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
) -> None:
    """Poll until the element no longer contains `text` (or is gone)."""
    timeout = _default_timeout(timeout)

    async def check() -> bool:
        current = await _read_text(target, poll_interval_ms)
        return current is None or text not in current

    with allure.step(f'Wait for text "{text}" to disappear from {target.label}'):
        elapsed = await _poll_until(check, target.label, f'stop showing "{text}"', timeout, poll_interval_ms)
        logger.debug(f'Text "{text}" gone in {elapsed:.0f}ms → {target.label}')


__all__ = [
    "LOAD_STATES",
    "WaitTimeoutError",
    "wait_for_disappear",
    "wait_for_enabled",
    "wait_for_load_state",
    "wait_for_text",
    "wait_for_text_to_disappear",
    "wait_for_url_contains",
    "wait_for_visible",
]
