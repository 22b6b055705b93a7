from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import BaseModel

from ...enums import ColumnKind, ComponentType, SortDirection
from ..cells import format_cell
from ..tabular import Page, TableView
from .base import RenderContext, RenderedComponent, Renderer

logger = logging.getLogger(__name__)


class CellPayload(BaseModel):
    text: str
    variant: Optional[str] = None


class RowPayload(BaseModel):
    id: Any = None
    cells: dict[str, CellPayload]
    selected: bool = False


class PageInfo(BaseModel):
    page: int
    page_size: int
    total_items: int
    total_pages: int
    start: int
    end: int
    has_previous: bool
    has_next: bool
    window: list[int]

    @classmethod
    def from_page(cls, page: Page) -> "PageInfo":
        return cls(
            page=page.page,
            page_size=page.page_size,
            total_items=page.total_items,
            total_pages=page.total_pages,
            start=page.start,
            end=page.end,
            has_previous=page.has_previous,
            has_next=page.has_next,
            window=page.window(),
        )


class TableViewPayload(RenderedComponent):
    columns: list[dict[str, Any]]
    rows: list[RowPayload]
    page: PageInfo
    query: str = ""
    sort_key: Optional[str] = None
    sort_direction: str = "asc"
    selectable: bool = False
    selected: list[Any] = []
    all_selected: bool = False
    show_actions_column: bool = False
    actions: dict[str, bool]


class TableRenderer(Renderer):
    component_type = ComponentType.TABLE
    selectable = True

    def build_view(self, context: RenderContext) -> TableView:
        config = self.get_config(context)
        view = TableView(
            rows=list(context.rows),
            columns=config.columns,
            page_size=config.page_size,
            query=context.query,
            filters=dict(context.filters),
            sort_key=context.sort_key,
            sort_direction=SortDirection(context.sort_direction),
            page=context.page,
        )
        if self.selectable:
            for row_id in context.selected:
                view.toggle_row(row_id, True)
        return view

    def render(self, context: RenderContext) -> TableViewPayload:
        config = self.get_config(context)
        view = self.build_view(context)
        page = view.current_page()
        columns = [c for c in config.columns if c.kind is not ColumnKind.ACTIONS]

        rows = []
        for item in page.items:
            cells = {}
            for column in columns:
                cell = format_cell(item.get(column.key), column, context.display)
                cells[column.key] = CellPayload(
                    text=cell.text,
                    variant=cell.variant.value if cell.variant else None,
                )
            row_id = item.get(view.row_key)
            rows.append(
                RowPayload(
                    id=row_id,
                    cells=cells,
                    selected=self.selectable and row_id in view.selected,
                )
            )

        return TableViewPayload(
            kind=self.component_type.value,
            title=self.get_title(config, context),
            description=config.description,
            columns=[c.model_dump(mode="json", by_alias=True, exclude_none=True) for c in columns],
            rows=rows,
            page=PageInfo.from_page(page),
            query=view.query,
            sort_key=view.sort_key,
            sort_direction=view.sort_direction.value,
            selectable=self.selectable,
            selected=sorted(view.selected, key=str) if self.selectable else [],
            all_selected=self.selectable and view.all_selected,
            show_actions_column=config.actions.has_row_actions,
            actions=config.actions.model_dump(),
        )


class ListRenderer(TableRenderer):
    component_type = ComponentType.LIST
    selectable = False
