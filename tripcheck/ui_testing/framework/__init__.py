"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based UI automation framework with retry-aware interactions.

Components:
    - retry_utils: retry engine with exponential/linear backoff and jitter
    - error_handler: error classification and failure capture
    - wait_utils: labelled waits with elapsed-time tracking
    - element_actions: retried interactions with a bounding-box click fallback
    - runtime_store: per-test named values
    - page_base: base page object
    - browser_manager: browser lifecycle management

Author: Automation Team
License: MIT
================================================================================
"""

from .browser_manager import BrowserManager
from .config_loader import ConfigLoader, ConfigurationError, get_config
from .element_actions import ElementActionError, ElementActions
from .error_handler import (
    ErrorHandler,
    FrameworkError,
    is_element_error,
    is_fatal,
    is_network_error,
    is_timeout_error,
)
from .page_base import BasePage
from .retry_utils import RetryOptions, compute_delay, retry, with_retry
from .runtime_store import RuntimeStore
from .target import Target
from .wait_utils import (
    WaitTimeoutError,
    wait_for_disappear,
    wait_for_enabled,
    wait_for_load_state,
    wait_for_text,
    wait_for_text_to_disappear,
    wait_for_url_contains,
    wait_for_visible,
)

__all__ = [
    "BasePage",
    "BrowserManager",
    "ConfigLoader",
    "ConfigurationError",
    "ElementActionError",
    "ElementActions",
    "ErrorHandler",
    "FrameworkError",
    "RetryOptions",
    "RuntimeStore",
    "Target",
    "WaitTimeoutError",
    "compute_delay",
    "get_config",
    "is_element_error",
    "is_fatal",
    "is_network_error",
    "is_timeout_error",
    "retry",
    "wait_for_disappear",
    "wait_for_enabled",
    "wait_for_load_state",
    "wait_for_text",
    "wait_for_text_to_disappear",
    "wait_for_url_contains",
    "wait_for_visible",
    "with_retry",
]
