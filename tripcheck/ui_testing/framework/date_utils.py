"""Date and number helpers used by the booking page objects."""

from __future__ import annotations

import random
import re
from datetime import date, datetime, timedelta
from typing import Optional

from loguru import logger


def _apply_format(value: date, fmt: str) -> str:
    return (
        fmt.replace("dd", f"{value.day:02d}")
        .replace("mm", f"{value.month:02d}")
        .replace("yyyy", f"{value.year:04d}")
    )


def format_today(fmt: str, today: Optional[date] = None) -> str:
    """Format today's date with the tokens `dd`, `mm` and `yyyy`."""
    return _apply_format(today or date.today(), fmt)


def format_date_after_days(days: int, fmt: str, today: Optional[date] = None) -> str:
    """Format the date `days` from today, e.g. format_date_after_days(5, "dd")."""
    return _apply_format((today or date.today()) + timedelta(days=days), fmt)


def clean_and_convert_to_ddmmyyyy(raw: str) -> str:
    """
    Normalise a date scraped from the page to dd/mm/yyyy.

    Handles squashed values such as "27Nov'2025 Thu" or "27 Nov\\n2025".

    Raises:
        ValueError: No "<day> <month> <year>" sequence found
    """
    clean = re.sub(r"\s+", " ", raw).strip()
    clean = clean.replace("'", "")
    clean = re.sub(r"(\d{1,2})([A-Za-z]+)", r"\1 \2", clean, count=1)
    clean = re.sub(r"([A-Za-z]+)(\d{4})", r"\1 \2", clean, count=1)

    match = re.search(r"\b(\d{1,2}) ([A-Za-z]+) (\d{4})\b", clean)
    if not match:
        raise ValueError(f"Could not extract valid date from: {clean}")

    day, month, year = match.groups()
    try:
        parsed = datetime.strptime(f"{day} {month[:3].title()} {year}", "%d %b %Y")
    except ValueError as e:
        raise ValueError(f"Invalid cleaned date: {match.group(0)}") from e
    return parsed.strftime("%d/%m/%Y")


def random_in_range(minimum: int, maximum: int) -> int:
    """Random integer in [minimum, maximum]."""
    result = random.randint(minimum, maximum)
    logger.debug(f"Between {minimum} and {maximum} → {result}")
    return result


__all__ = [
    "clean_and_convert_to_ddmmyyyy",
    "format_date_after_days",
    "format_today",
    "random_in_range",
]
