"""
In-memory stand-ins for Playwright Page / Locator used by the unit tests.

Only the async methods the framework calls are implemented. Each call is
recorded in `calls`; queue exceptions per method in `failures` to make the
next call(s) raise.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional


class FakeMouse:
    def __init__(self) -> None:
        self.clicks: List[tuple] = []

    async def click(self, x: float, y: float, **kwargs: Any) -> None:
        self.clicks.append((x, y))


class FakeLocator:
    def __init__(
        self,
        page: Optional["FakePage"] = None,
        selector: str = "",
        texts: Optional[List[Optional[str]]] = None,
        value: str = "",
        attributes: Optional[Dict[str, str]] = None,
        box: Optional[Dict[str, float]] = None,
        enabled: Any = True,
        items: int = 1,
    ) -> None:
        self.page = page if page is not None else FakePage()
        self.selector = selector
        self.texts = list(texts) if texts is not None else [""]
        self.value = value
        self.attributes = attributes or {}
        self.box = box
        self.enabled = enabled
        self.items = items
        # simulated time spent in wait_for before it resolves
        self.wait_for_ms = 0
        self.failures: Dict[str, List[BaseException]] = {}
        self.calls: List[tuple] = []

    def fail(self, method: str, *errors: BaseException) -> "FakeLocator":
        self.failures.setdefault(method, []).extend(errors)
        return self

    def names(self) -> List[str]:
        return [name for name, _ in self.calls]

    def _record(self, name: str, **kwargs: Any) -> None:
        self.calls.append((name, kwargs))
        queued = self.failures.get(name)
        if queued:
            raise queued.pop(0)

    async def wait_for(self, state: str = "visible", timeout: Optional[float] = None) -> None:
        self._record("wait_for", state=state, timeout=timeout)
        if self.wait_for_ms:
            await asyncio.sleep(self.wait_for_ms / 1000)

    async def scroll_into_view_if_needed(self, timeout: Optional[float] = None) -> None:
        self._record("scroll_into_view_if_needed", timeout=timeout)

    async def click(self, **kwargs: Any) -> None:
        self._record("click", **kwargs)

    async def dblclick(self, **kwargs: Any) -> None:
        self._record("dblclick", **kwargs)

    async def fill(self, value: str, **kwargs: Any) -> None:
        self._record("fill", value=value, **kwargs)
        self.value = value

    async def press_sequentially(self, text: str, **kwargs: Any) -> None:
        self._record("press_sequentially", text=text, **kwargs)
        self.value += text

    async def clear(self, **kwargs: Any) -> None:
        self._record("clear", **kwargs)
        self.value = ""

    async def press(self, key: str, **kwargs: Any) -> None:
        self._record("press", key=key, **kwargs)

    async def select_option(self, value: Any, **kwargs: Any) -> List[str]:
        self._record("select_option", value=value, **kwargs)
        return list(value) if isinstance(value, list) else [value]

    async def check(self, **kwargs: Any) -> None:
        self._record("check", **kwargs)

    async def uncheck(self, **kwargs: Any) -> None:
        self._record("uncheck", **kwargs)

    async def hover(self, **kwargs: Any) -> None:
        self._record("hover", **kwargs)

    async def focus(self, **kwargs: Any) -> None:
        self._record("focus", **kwargs)

    async def bounding_box(self) -> Optional[Dict[str, float]]:
        self._record("bounding_box")
        return self.box

    async def text_content(self, timeout: Optional[float] = None) -> Optional[str]:
        self._record("text_content", timeout=timeout)
        if len(self.texts) > 1:
            return self.texts.pop(0)
        return self.texts[0]

    async def input_value(self, timeout: Optional[float] = None) -> str:
        self._record("input_value", timeout=timeout)
        return self.value

    async def get_attribute(self, name: str, timeout: Optional[float] = None) -> Optional[str]:
        self._record("get_attribute", attribute=name, timeout=timeout)
        return self.attributes.get(name)

    async def count(self) -> int:
        self._record("count")
        return self.items

    async def is_visible(self) -> bool:
        self._record("is_visible")
        return True

    async def is_enabled(self) -> bool:
        self._record("is_enabled")
        if isinstance(self.enabled, list):
            return self.enabled.pop(0) if len(self.enabled) > 1 else self.enabled[0]
        return self.enabled

    async def is_checked(self) -> bool:
        self._record("is_checked")
        return False

    def nth(self, index: int) -> "FakeLocator":
        return self

    @property
    def first(self) -> "FakeLocator":
        return self


class FakePage:
    def __init__(self, url: str = "about:blank") -> None:
        self.url = url
        self.mouse = FakeMouse()
        self.locators: Dict[str, FakeLocator] = {}
        self.gotos: List[tuple] = []
        self.failures: Dict[str, List[BaseException]] = {}

    def locator(self, selector: str) -> FakeLocator:
        if selector not in self.locators:
            self.locators[selector] = FakeLocator(page=self, selector=selector)
        return self.locators[selector]

    async def goto(self, url: str, **kwargs: Any) -> None:
        self.gotos.append((url, kwargs))
        self.url = url

    async def wait_for_load_state(self, state: str = "load", timeout: Optional[float] = None) -> None:
        queued = self.failures.get("wait_for_load_state")
        if queued:
            raise queued.pop(0)

    async def screenshot(self, path: str, **kwargs: Any) -> bytes:
        with open(path, "wb") as fh:
            fh.write(b"png")
        return b"png"

    async def title(self) -> str:
        return "Fake Page"
