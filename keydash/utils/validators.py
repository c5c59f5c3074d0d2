"""Validation helpers for keydash."""
from __future__ import annotations

import re
from typing import Any, Tuple

MAX_NAME_LENGTH = 100
# Largest value a signed 64-bit INTEGER column holds.
MAX_USAGE_LIMIT = 2**63 - 1
SORT_ORDERS = ('asc', 'desc')


def validate_key_name(name: Any) -> Tuple[bool, str]:
    """Validate an API key name as it will be stored, after sanitizing."""
    if not isinstance(name, str):
        return False, "Please enter a key name"
    cleaned = sanitize_string(name, max_length=len(name))
    if not cleaned:
        return False, "Please enter a key name"
    if len(cleaned) > MAX_NAME_LENGTH:
        return False, f"Key name must be at most {MAX_NAME_LENGTH} characters"
    return True, ""


def parse_max_usage(value: Any) -> Tuple[int | None, str]:
    """Parse a usage limit; it must be an integer between 1 and MAX_USAGE_LIMIT."""
    if isinstance(value, bool):
        return None, "Please enter a valid max usage limit"
    try:
        max_usage = int(str(value).strip())
    except (TypeError, ValueError):
        return None, "Please enter a valid max usage limit"
    if max_usage <= 0 or max_usage > MAX_USAGE_LIMIT:
        return None, "Please enter a valid max usage limit"
    return max_usage, ""


def normalize_sort_order(value: Any) -> str:
    """Return 'desc' only when explicitly asked for, 'asc' otherwise."""
    return 'desc' if value == 'desc' else 'asc'


def toggle_sort_order(value: Any) -> str:
    return 'desc' if normalize_sort_order(value) == 'asc' else 'asc'


def sanitize_string(value: str, max_length: int = 255) -> str:
    """Sanitize string input."""
    if not value:
        return ""
    value = re.sub(r'[\x00-\x1f\x7f-\x9f]', '', str(value))
    return value[:max_length].strip()
