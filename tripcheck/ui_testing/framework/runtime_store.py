"""
================================================================================
Runtime Store
================================================================================

Named-value scratch space for passing values captured from the UI to later
steps and assertions (e.g. a selected date, a room/guest summary).

Each test gets its own store through the `runtime_store` fixture, and page
objects receive it through their constructor, so parallel tests in one
process never share keys. There is no locking: the last write wins.

Usage:
    store = RuntimeStore("hotel_booking")
    store.set("CleanCheckIn", "21/10/2026")
    assert store.get("CleanCheckIn") == "21/10/2026"

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterator, List

from loguru import logger


class RuntimeStore:
    """Key/value bag scoped to one test (or one flow)."""

    def __init__(self, name: str = "runtime") -> None:
        self.name = name
        self._values: Dict[str, Any] = {}

    def set(self, key: str, value: Any) -> None:
        """Store a value, overwriting any previous one."""
        self._values[key] = value
        logger.debug(f"[{self.name}] STORED → {key}: {value!r}")

    def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value, or `default` when the key is absent."""
        return self._values.get(key, default)

    def has(self, key: str) -> bool:
        return key in self._values

    def remove(self, key: str) -> None:
        """Delete a single entry; unknown keys are ignored."""
        self._values.pop(key, None)

    def clear(self) -> None:
        self._values.clear()

    def keys(self) -> List[str]:
        return list(self._values)

    def dump(self) -> str:
        """Log every entry and return the same pretty-printed JSON."""
        rendered = json.dumps(self._values, indent=2, default=str, ensure_ascii=False)
        logger.info(f"===== RUNTIME VARIABLES ({self.name}) =====\n{rendered}")
        return rendered

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __repr__(self) -> str:
        return f"RuntimeStore(name={self.name!r}, keys={self.keys()!r})"


__all__ = [
    "RuntimeStore",
]
