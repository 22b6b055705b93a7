"""Deterministic sample rows for previewing table and list events.

Kept apart from the tabular engine: the API feeds these rows in only when a
render request carries none of its own.
"""

from datetime import date, timedelta
from typing import Any, Iterable

from .components.descriptors import ColumnDescriptor
from .enums import ColumnKind

DEMO_BADGE_LABELS = ("Actif", "En attente", "Inactif", "Terminé")
DEMO_START_DATE = date(2026, 1, 1)


def _demo_value(column: ColumnDescriptor, index: int) -> Any:
    match column.kind:
        case ColumnKind.NUMBER:
            return (index * 37) % 1000
        case ColumnKind.DATE:
            return (DEMO_START_DATE + timedelta(days=index)).isoformat()
        case ColumnKind.BADGE:
            return DEMO_BADGE_LABELS[index % len(DEMO_BADGE_LABELS)]
        case ColumnKind.BOOLEAN:
            return index % 2 == 0
        case ColumnKind.ACTIONS:
            return None
        case _:
            return f"{column.label} {index + 1}"


def generate_demo_rows(columns: Iterable[ColumnDescriptor], count: int) -> list[dict[str, Any]]:
    columns = list(columns)
    rows = []
    for index in range(max(count, 0)):
        row: dict[str, Any] = {"id": index + 1}
        for column in columns:
            if column.key == "id":
                continue
            row[column.key] = _demo_value(column, index)
        rows.append(row)
    return rows
