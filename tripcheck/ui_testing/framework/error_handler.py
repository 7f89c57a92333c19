"""
================================================================================
Error Handler
================================================================================

Error classification and contextual error reporting for UI actions.

Classifiers decide whether retrying can help:
    - Fatal: malformed selector, destroyed browser/context/page, programming
      errors (TypeError, NameError, ...), failed navigation
    - Retryable: timeouts, element-not-ready, transient network blips

Structured checks on exception types come first; message patterns are the
fallback for opaque errors coming out of the browser driver.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, TypeVar

import allure
from loguru import logger
from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError


T = TypeVar("T")

# Used when artifacts.error_screenshots is not configured
ERROR_SCREENSHOT_DIR = Path("test-results") / "errors"

FATAL_EXCEPTION_TYPES = (
    TypeError,
    NameError,
    AttributeError,
    ModuleNotFoundError,
)

FATAL_PATTERNS = (
    "Invalid selector",
    "Malformed selector",
    "not a function",
    "TypeError",
    "ReferenceError",
    "Cannot read properties",
    "Cannot find module",
    "Environment configuration invalid",
    "browser has been closed",
    "Target page",
    "Context has been closed",
    "Execution context was destroyed",
    "Element not editable",
    "Element detached",
    "Element is not attached to the DOM",
    "Navigation failed",
    "Node is either not visible or not an HTMLElement",
    "net::ERR",
)

NETWORK_PATTERNS = ("net::", "ERR_", "ECONNRESET", "ECONNREFUSED")

ELEMENT_PATTERNS = ("element", "selector", "not visible", "not enabled")

FATAL_PLAYWRIGHT_PATTERNS = (
    "Target page",
    "browser has been closed",
    "Context has been closed",
    "Navigation failed",
    "Invalid selector",
)


class FrameworkError(Exception):
    """Base class for errors raised by the UI framework itself."""
    pass


def error_message(error: Any) -> str:
    """Best-effort message for any error-like value."""
    if error is None:
        return ""
    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message
    text = str(error)
    if not text and isinstance(error, BaseException):
        return type(error).__name__
    return text


def is_fatal(error: Any) -> bool:
    """
    Return True when retrying cannot change the outcome.

    Playwright timeouts are never fatal, even if their call log mentions
    a pattern below.
    """
    if isinstance(error, PlaywrightTimeoutError):
        return False
    if isinstance(error, FATAL_EXCEPTION_TYPES):
        return True
    message = error_message(error)
    return any(pattern in message for pattern in FATAL_PATTERNS)


def is_network_error(error: Any) -> bool:
    """Return True if the error comes from the network stack."""
    if isinstance(error, (ConnectionResetError, ConnectionRefusedError)):
        return True
    message = error_message(error)
    return any(pattern in message for pattern in NETWORK_PATTERNS)


def is_timeout_error(error: Any) -> bool:
    """Return True for timeouts (typed or by message)."""
    if isinstance(error, (PlaywrightTimeoutError, TimeoutError)):
        return True
    return "timeout" in error_message(error).lower()


def is_element_error(error: Any) -> bool:
    """Return True for element-level errors (not visible, not enabled, bad selector)."""
    message = error_message(error)
    return any(pattern in message for pattern in ELEMENT_PATTERNS)


def is_fatal_playwright_error(error: Any) -> bool:
    """Return True for catastrophic browser errors: closed browser/context/page."""
    message = error_message(error)
    return any(pattern in message for pattern in FATAL_PLAYWRIGHT_PATTERNS)


class ErrorHandler:
    """
    Contextual logging around failing operations.

    Never swallows: every path re-raises the original error so the test fails.

    Usage:
        await ErrorHandler.handle(lambda: page.click("#login"), context="LoginPage.submit")

        try:
            await hotel_page.select_rooms_and_guests()
        except Exception as err:
            await ErrorHandler.handle_failure(
                err, context="HotelSearchPage.select_rooms_and_guests",
                page=page, screenshot_name="rooms_failed",
            )
    """

    @staticmethod
    async def handle(
        operation: Callable[[], Awaitable[T]],
        context: str = "",
    ) -> T:
        """Await the operation, logging with context if it raises."""
        try:
            return await operation()
        except Exception as error:
            ErrorHandler.log_error(error, context)
            raise

    @staticmethod
    async def handle_failure(
        error: BaseException,
        context: str = "",
        page: Optional[Page] = None,
        screenshot_name: Optional[str] = None,
    ) -> None:
        """
        Log an already-caught error, capture a screenshot, then re-raise it.

        Args:
            error: The caught exception
            context: Where the failure happened (e.g. "HotelSearchPage.search")
            page: Page to screenshot
            screenshot_name: File name (without extension) for the screenshot
        """
        ErrorHandler.log_error(error, context)

        if page is not None and screenshot_name:
            await ErrorHandler.capture_screenshot(page, screenshot_name)

        raise error

    @staticmethod
    async def capture_screenshot(page: Page, name: str) -> Optional[Path]:
        """Save a full-page screenshot and attach it to Allure; never raises."""
        # config_loader imports this module
        from .config_loader import get_config

        try:
            target_dir = Path(get_config().get("artifacts.error_screenshots", str(ERROR_SCREENSHOT_DIR)))
            target_dir.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            filepath = target_dir / f"{name}_{timestamp}.png"
            await page.screenshot(path=str(filepath), full_page=True)
            allure.attach.file(
                str(filepath),
                name=name,
                attachment_type=allure.attachment_type.PNG,
            )
            logger.error(f"📸 Screenshot captured: {filepath}")
            return filepath
        except Exception as ss_error:
            logger.error(f"Failed to capture screenshot: {ss_error}")
            return None

    @staticmethod
    def log_error(error: BaseException, context: str = "") -> None:
        message = error_message(error)
        if context:
            logger.opt(exception=error).error(f"Error in {context}: {message}")
        else:
            logger.opt(exception=error).error(f"Error: {message}")


__all__ = [
    "ErrorHandler",
    "FrameworkError",
    "error_message",
    "is_element_error",
    "is_fatal",
    "is_fatal_playwright_error",
    "is_network_error",
    "is_timeout_error",
]
