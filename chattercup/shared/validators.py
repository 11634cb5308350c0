"""Shared validation utilities"""

from datetime import date, datetime, time
from typing import Iterable, Optional
from urllib.parse import urlparse


def validate_http_url(value: Optional[str]) -> bool:
    """Return True if value is an absolute http(s) URL with a host."""
    if not value:
        return False
    try:
        parsed = urlparse(value.strip())
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def normalize_tags(values: Optional[Iterable[str]]) -> list[str]:
    """
    Trim entries, drop blanks and remove duplicates while keeping first-seen order.

    Mirrors the tag inputs of the listing and profile forms, which ignore
    empty input and refuse to add a tag twice.
    """
    if not values:
        return []

    seen = set()
    result = []
    for value in values:
        if value is None:
            continue
        tag = str(value).strip()
        if tag and tag not in seen:
            seen.add(tag)
            result.append(tag)
    return result


def parse_iso_date(value: str) -> date:
    """
    Parse a YYYY-MM-DD date.

    Raises:
        ValueError: If the value is not a valid ISO date
    """
    return datetime.strptime(value.strip(), "%Y-%m-%d").date()


def parse_slot_time(value: str) -> time:
    """
    Parse an H:MM or HH:MM wall-clock time.

    Raises:
        ValueError: If the value is not a valid time
    """
    return datetime.strptime(value.strip(), "%H:%M").time()


def format_price(price_cents: Optional[int]) -> str:
    """Format a price stored in cents for display, e.g. 1250 -> "$12.50"."""
    cents = price_cents or 0
    return f"${cents / 100:.2f}"
