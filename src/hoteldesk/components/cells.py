from __future__ import annotations

from dataclasses import dataclass
from numbers import Number
from typing import Any, Optional

from ..config import DisplayConfig
from ..consts import BADGE_FALLBACK_DEFAULT, BADGE_FALLBACK_VARIANTS
from ..enums import BadgeVariant, ColumnKind
from ..utils import parse_date
from .descriptors import ColumnDescriptor


@dataclass(frozen=True)
class Cell:
    text: str
    variant: Optional[BadgeVariant] = None


def badge_variant(value: Any, column: ColumnDescriptor) -> BadgeVariant:
    literal = "" if value is None else str(value)
    if literal in column.badge_variants:
        return column.badge_variants[literal]
    return BADGE_FALLBACK_VARIANTS.get(literal, BADGE_FALLBACK_DEFAULT)


def format_number(value: Any, display: DisplayConfig) -> str:
    if isinstance(value, bool) or not isinstance(value, Number):
        return "" if value is None else str(value)

    grouped = f"{value:,}"
    # swap through a placeholder so "," and "." can trade places
    return (
        grouped.replace(",", "\0")
        .replace(".", display.decimal_separator)
        .replace("\0", display.thousands_separator)
    )


def format_date(value: Any, display: DisplayConfig) -> str:
    parsed = parse_date(value)
    if parsed is None:
        return "" if value is None else str(value)
    return parsed.strftime(display.date_format)


def format_cell(value: Any, column: ColumnDescriptor, display: DisplayConfig | None = None) -> Cell | None:
    """Render one cell for display; ``actions`` columns render nothing."""
    display = display or DisplayConfig()

    match column.kind:
        case ColumnKind.ACTIONS:
            return None
        case ColumnKind.BADGE:
            text = "" if value is None else str(value)
            return Cell(text=text, variant=badge_variant(value, column))
        case ColumnKind.DATE:
            return Cell(text=format_date(value, display))
        case ColumnKind.BOOLEAN:
            return Cell(text=display.true_glyph if value else display.false_glyph)
        case ColumnKind.NUMBER:
            return Cell(text=format_number(value, display))
        case _:
            return Cell(text="" if value is None else str(value))
