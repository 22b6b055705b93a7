"""Utility functions for HotelDesk application"""

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Mapping

logger = logging.getLogger(__name__)


def canonicalify(p: Path | str) -> Path:
    return Path(p).expanduser().resolve()


def ensure_path(p: Path | str) -> Path:
    path = canonicalify(p)
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_nested_value(obj: Mapping[str, Any] | None, path: str) -> Any:
    """Resolve a dotted path inside nested mappings.

    Examples:
        >>> get_nested_value({"guest": {"name": "Ana"}}, "guest.name")
        'Ana'
        >>> get_nested_value({"guest": None}, "guest.name") is None
        True
    """
    current: Any = obj
    for part in path.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(part)
    return current


def stringify(value: Any) -> str | None:
    """Text form of a cell value used for searching and filtering.

    Returns None for missing values so callers can skip them.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def parse_date(value: Any) -> date | None:
    """Best-effort conversion of a date, datetime or ISO string to a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            try:
                return date.fromisoformat(text[:10])
            except ValueError:
                return None
    return None


def today() -> date:
    return date.today()
