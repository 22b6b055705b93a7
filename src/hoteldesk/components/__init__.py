from __future__ import annotations

from .defaults import get_default_config, merge_config
from .descriptors import (
    ColumnDescriptor,
    ComponentActions,
    ComponentConfig,
    FieldDescriptor,
    FieldOption,
)
from .events import EventRecord
from .factory import create_default_registry, render_event
from .registry import ComponentRegistry, Resolution
from .schema import FormSchema, build_defaults, build_schema
from .tabular import Page, TableView, filter_rows, paginate_rows, search_rows, sort_rows

__all__ = [
    "ColumnDescriptor",
    "ComponentActions",
    "ComponentConfig",
    "ComponentRegistry",
    "EventRecord",
    "FieldDescriptor",
    "FieldOption",
    "FormSchema",
    "Page",
    "Resolution",
    "TableView",
    "build_defaults",
    "build_schema",
    "create_default_registry",
    "filter_rows",
    "get_default_config",
    "merge_config",
    "paginate_rows",
    "render_event",
    "search_rows",
    "sort_rows",
]
