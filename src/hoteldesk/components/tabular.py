"""Search, filter, sort and pagination over arbitrary row dicts."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from numbers import Number
from typing import Any, Hashable, Iterable, Mapping, Optional, Sequence

from ..consts import DEFAULT_PAGE_SIZE, FILTER_ALL, PAGE_WINDOW_SIZE
from ..enums import SortDirection
from ..utils import get_nested_value, stringify
from .descriptors import ColumnDescriptor

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]
FilterValue = str | list[str] | tuple[str, ...] | None


def search_rows(rows: Iterable[Row], query: str | None) -> list[Row]:
    """Keep rows where any field value contains ``query`` (case-insensitive)."""
    needle = (query or "").strip().lower()
    if not needle:
        return list(rows)

    matched = []
    for row in rows:
        for value in row.values():
            text = stringify(value)
            if text is not None and needle in text.lower():
                matched.append(row)
                break
    return matched


def _filter_is_active(value: FilterValue) -> bool:
    if value is None or value == "" or value == FILTER_ALL:
        return False
    if isinstance(value, (list, tuple)):
        return len(value) > 0
    return True


def filter_rows(rows: Iterable[Row], filters: Mapping[str, FilterValue] | None) -> list[Row]:
    """Apply equality filters on dotted keys; a list value means "any of"."""
    result = list(rows)
    for key, value in (filters or {}).items():
        if not _filter_is_active(value):
            continue

        if isinstance(value, (list, tuple)):
            accepted = {str(v) for v in value}
            result = [row for row in result if stringify(get_nested_value(row, key)) in accepted]
        else:
            expected = str(value)
            result = [row for row in result if stringify(get_nested_value(row, key)) == expected]
    return result


def _sort_key(value: Any) -> tuple:
    if value is None:
        return (3, "")
    if isinstance(value, Number) and not isinstance(value, bool):
        if isinstance(value, float) and math.isnan(value):
            return (3, "")
        return (0, value)
    if isinstance(value, str):
        return (1, value)
    return (2, str(value))


def sort_rows(
    rows: Iterable[Row],
    key: str | None,
    direction: SortDirection | str = SortDirection.ASC,
) -> list[Row]:
    """Stable sort by one column; equal values keep their input order."""
    rows = list(rows)
    if not key:
        return rows

    descending = SortDirection(direction) is SortDirection.DESC
    # sorted() stays stable with reverse=True
    return sorted(
        rows, key=lambda row: _sort_key(get_nested_value(row, key)), reverse=descending
    )


@dataclass(frozen=True)
class Page:
    items: list[Row]
    page: int
    page_size: int
    total_items: int
    total_pages: int

    @property
    def start(self) -> int:
        """1-based index of the first item on the page (0 when empty)."""
        if not self.items:
            return 0
        return (self.page - 1) * self.page_size + 1

    @property
    def end(self) -> int:
        if not self.items:
            return 0
        return self.start + len(self.items) - 1

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    def window(self, size: int = PAGE_WINDOW_SIZE) -> list[int]:
        """Page numbers to show in a pager, centered on the current page."""
        if self.total_pages <= size:
            return list(range(1, self.total_pages + 1))
        if self.page <= size // 2 + 1:
            first = 1
        elif self.page >= self.total_pages - size // 2:
            first = self.total_pages - size + 1
        else:
            first = self.page - size // 2
        return list(range(first, first + size))


def clamp_page(page: int, total_pages: int) -> int:
    return min(max(page, 1), max(total_pages, 1))


def paginate_rows(rows: Sequence[Row], page: int, page_size: int = DEFAULT_PAGE_SIZE) -> Page:
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")

    total_items = len(rows)
    total_pages = math.ceil(total_items / page_size)
    page = clamp_page(page, total_pages)
    offset = (page - 1) * page_size
    return Page(
        items=list(rows[offset : offset + page_size]),
        page=page,
        page_size=page_size,
        total_items=total_items,
        total_pages=total_pages,
    )


@dataclass
class TableView:
    """Interactive state of one table or list surface.

    Rows are injected; the view never fetches or generates them. Searching or
    changing filters returns to the first page. Sorting always starts from
    the filtered input order, so toggling a column twice restores the
    original order of equal rows.
    """

    rows: list[Row]
    columns: list[ColumnDescriptor] = field(default_factory=list)
    page_size: int = DEFAULT_PAGE_SIZE
    row_key: str = "id"
    query: str = ""
    filters: dict[str, FilterValue] = field(default_factory=dict)
    sort_key: Optional[str] = None
    sort_direction: SortDirection = SortDirection.ASC
    page: int = 1
    selected: set[Hashable] = field(default_factory=set)

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError(f"page_size must be positive, got {self.page_size}")

    @property
    def visible_rows(self) -> list[Row]:
        rows = filter_rows(search_rows(self.rows, self.query), self.filters)
        return sort_rows(rows, self.sort_key, self.sort_direction)

    def current_page(self) -> Page:
        result = paginate_rows(self.visible_rows, self.page, self.page_size)
        self.page = result.page
        return result

    def search(self, query: str | None) -> Page:
        self.query = query or ""
        self.page = 1
        return self.current_page()

    def set_filter(self, key: str, value: FilterValue) -> Page:
        self.filters = {**self.filters, key: value}
        self.page = 1
        return self.current_page()

    def clear_filters(self) -> Page:
        self.query = ""
        self.filters = {}
        self.page = 1
        return self.current_page()

    def sort(self, column_key: str) -> Page:
        if self.sort_key == column_key:
            self.sort_direction = self.sort_direction.toggled()
        else:
            self.sort_key = column_key
            self.sort_direction = SortDirection.ASC
        return self.current_page()

    def paginate(self, page: int, page_size: int | None = None) -> Page:
        if page_size is not None:
            if page_size < 1:
                raise ValueError(f"page_size must be positive, got {page_size}")
            self.page_size = page_size
        self.page = page
        return self.current_page()

    # ---- selection ----

    def _page_ids(self) -> list[Hashable]:
        return [row.get(self.row_key) for row in self.current_page().items]

    def toggle_row(self, row_id: Hashable, selected: bool | None = None) -> None:
        if selected is None:
            selected = row_id not in self.selected
        if selected:
            self.selected = self.selected | {row_id}
        else:
            self.selected = self.selected - {row_id}

    def select_all(self, checked: bool) -> None:
        """Select exactly the rows on the current page, or clear the selection."""
        self.selected = set(self._page_ids()) if checked else set()

    def clear_selection(self) -> None:
        self.selected = set()

    @property
    def all_selected(self) -> bool:
        ids = self._page_ids()
        return bool(ids) and all(row_id in self.selected for row_id in ids)
