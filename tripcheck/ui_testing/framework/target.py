"""
Labelled element handles.

Every locator a page object declares carries a human-readable label, used by
waits, actions and logs instead of guessing a name from the selector.
"""

from __future__ import annotations

from dataclasses import dataclass

from playwright.async_api import Locator, Page


@dataclass(frozen=True)
class Target:
    """A Playwright Locator paired with its display label."""

    locator: Locator
    label: str

    def __post_init__(self) -> None:
        if not self.label or not self.label.strip():
            raise ValueError("Target label must be a non-empty string")

    @property
    def page(self) -> Page:
        return self.locator.page

    def nth(self, index: int) -> "Target":
        """Target for the index-th match, labelled `<label>[index]`."""
        return Target(self.locator.nth(index), f"{self.label}[{index}]")

    @property
    def first(self) -> "Target":
        return Target(self.locator.first, self.label)

    def __str__(self) -> str:
        return self.label


def resolve_locator(page: Page, selector: str) -> Locator:
    """Build a locator; `//...` and `xpath=...` selectors are treated as XPath."""
    if selector.startswith("xpath="):
        return page.locator(selector)
    if selector.startswith("//") or selector.startswith("(//"):
        return page.locator(f"xpath={selector}")
    return page.locator(selector)


__all__ = [
    "Target",
    "resolve_locator",
]
