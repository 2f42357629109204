"""CSV column normalization — handles BOM, trailing spaces, encoding quirks."""

from __future__ import annotations

import re

TRUE_WORDS = {"1", "true", "yes", "y", "on", "active", "enabled"}
FALSE_WORDS = {"0", "false", "no", "n", "off", "inactive", "disabled"}


def normalize_column_name(name: str) -> str:
    """Normalize a CSV column name.

    - Removes BOM characters (\\ufeff)
    - Strips leading/trailing whitespace
    - Replaces runs of spaces / non-breaking spaces / dashes with one underscore
    - Lowercases
    - Strips anything that is not alphanumeric or underscore
    """
    name = name.replace("\ufeff", "")
    name = name.strip()
    name = re.sub(r"[\s\u00a0\-]+", "_", name)
    name = name.lower()
    name = re.sub(r"[^\w]", "", name, flags=re.UNICODE)
    return name


def clean_string(value: str | None) -> str | None:
    """Strip whitespace and return None for empty strings."""
    if value is None:
        return None
    value = value.strip()
    return value if value else None


def parse_list(raw: str | None) -> list[str]:
    """Parse 'France; Italy | New Zealand' into ['France', 'Italy', 'New Zealand'].

    Splits on comma, semicolon or pipe only, so multi-word destinations survive.
    Order is kept and duplicates dropped.
    """
    if not raw:
        return []
    items: list[str] = []
    for part in re.split(r"[,;|]+", raw):
        item = " ".join(part.split())
        if item and item not in items:
            items.append(item)
    return items


def parse_bool(raw: str | None, default: bool) -> bool:
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in TRUE_WORDS:
        return True
    if value in FALSE_WORDS:
        return False
    return default
