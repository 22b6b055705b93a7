"""Settings-editor support: schema of the editing UI and immutable edit helpers.

Every helper returns a new ``ComponentConfig``; the config passed in is left
untouched until the caller explicitly persists the result.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel

from ..consts import DEFAULT_PAGE_SIZE
from ..enums import BadgeVariant, ColumnKind, ComponentType, FieldKind
from .descriptors import ColumnDescriptor, ComponentConfig, FieldDescriptor


class FieldSchema(BaseModel):
    type: str
    path: str
    label: str
    help_text: Optional[str] = None
    required: bool = False
    default: Any = None
    options: list[str] = []
    validation: dict[str, Any] = {}
    item_fields: Optional[list[FieldSchema]] = None


class SectionSchema(BaseModel):
    id: str
    title: str
    description: str = ""
    fields: list[FieldSchema]


class EditorSchema(BaseModel):
    component_type: str
    sections: list[SectionSchema]


FIELD_KIND_CATALOG: dict[FieldKind, tuple[str, str]] = {
    FieldKind.TEXT: ("Texte", "Champ texte simple"),
    FieldKind.NUMBER: ("Nombre", "Valeur numérique"),
    FieldKind.EMAIL: ("Email", "Adresse email"),
    FieldKind.DATE: ("Date", "Sélecteur de date"),
    FieldKind.SELECT: ("Liste déroulante", "Choix parmi options"),
    FieldKind.TEXTAREA: ("Zone de texte", "Texte multiligne"),
    FieldKind.SWITCH: ("Interrupteur", "Oui/Non"),
    FieldKind.CHECKBOX: ("Case à cocher", "Cocher/Décocher"),
}

NEW_COLUMN_LABEL = "Nouvelle colonne"
NEW_FIELD_LABEL = "Nouveau champ"


def _general_section(component_type: ComponentType) -> SectionSchema:
    fields = [
        FieldSchema(type="text", path="title", label="Title"),
        FieldSchema(type="textarea", path="description", label="Description"),
    ]
    if component_type in (ComponentType.TABLE, ComponentType.LIST):
        fields.append(
            FieldSchema(
                type="number",
                path="pageSize",
                label="Page Size",
                default=DEFAULT_PAGE_SIZE,
                validation={"min": 1},
                help_text="Rows shown per page.",
            )
        )
    return SectionSchema(id="general", title="General", fields=fields)


def _actions_section() -> SectionSchema:
    return SectionSchema(
        id="actions",
        title="Actions",
        description="Which action buttons are shown",
        fields=[
            FieldSchema(type="boolean", path=f"actions.{name}", label=name.capitalize(), default=True)
            for name in ("create", "edit", "delete", "view", "export")
        ],
    )


def _fields_section() -> SectionSchema:
    return SectionSchema(
        id="fields",
        title="Fields",
        description="Form inputs, in display order",
        fields=[
            FieldSchema(
                type="list",
                path="fields",
                label="Fields",
                item_fields=[
                    FieldSchema(type="text", path="key", label="Key", required=True),
                    FieldSchema(type="text", path="label", label="Label", required=True),
                    FieldSchema(
                        type="select",
                        path="type",
                        label="Type",
                        default=FieldKind.TEXT.value,
                        options=[k.value for k in FieldKind],
                    ),
                    FieldSchema(type="text", path="placeholder", label="Placeholder"),
                    FieldSchema(type="boolean", path="required", label="Required", default=False),
                    FieldSchema(type="number", path="min", label="Min"),
                    FieldSchema(type="number", path="max", label="Max"),
                    FieldSchema(type="number", path="minLength", label="Min Length", validation={"min": 0}),
                    FieldSchema(type="number", path="maxLength", label="Max Length", validation={"min": 0}),
                    FieldSchema(type="text", path="pattern", label="Pattern"),
                    FieldSchema(type="list", path="options", label="Options", help_text="Select fields only."),
                ],
            )
        ],
    )


def _columns_section() -> SectionSchema:
    return SectionSchema(
        id="columns",
        title="Columns",
        description="Table columns, in display order",
        fields=[
            FieldSchema(
                type="list",
                path="columns",
                label="Columns",
                item_fields=[
                    FieldSchema(type="text", path="key", label="Key", required=True),
                    FieldSchema(type="text", path="label", label="Label", required=True),
                    FieldSchema(
                        type="select",
                        path="type",
                        label="Type",
                        default=ColumnKind.TEXT.value,
                        options=[k.value for k in ColumnKind],
                    ),
                    FieldSchema(type="boolean", path="sortable", label="Sortable", default=False),
                    FieldSchema(type="boolean", path="filterable", label="Filterable", default=False),
                    FieldSchema(type="text", path="width", label="Width"),
                    FieldSchema(
                        type="mapping",
                        path="badgeVariants",
                        label="Badge Variants",
                        options=[v.value for v in BadgeVariant],
                        help_text="Badge columns only.",
                    ),
                ],
            )
        ],
    )


def build_editor_schema(component_type: ComponentType) -> EditorSchema:
    sections = [_general_section(component_type)]
    match component_type:
        case ComponentType.FORM | ComponentType.SETTINGS:
            sections += [_fields_section(), _actions_section()]
        case ComponentType.TABLE | ComponentType.LIST:
            sections += [_columns_section(), _actions_section()]
        case _:
            pass
    return EditorSchema(component_type=component_type.value, sections=sections)


def field_kind_catalog() -> list[dict[str, str]]:
    return [
        {"value": kind.value, "label": label, "description": description}
        for kind, (label, description) in FIELD_KIND_CATALOG.items()
    ]


# ---- edit helpers ----


def _unique_key(prefix: str, existing: set[str]) -> str:
    n = len(existing) + 1
    while f"{prefix}_{n}" in existing:
        n += 1
    return f"{prefix}_{n}"


def _move(items: list, from_index: int, to_index: int) -> list:
    items = list(items)
    items.insert(to_index, items.pop(from_index))
    return items


def add_field(config: ComponentConfig, kind: FieldKind | str = FieldKind.TEXT) -> ComponentConfig:
    kind = FieldKind(kind)
    label = FIELD_KIND_CATALOG.get(kind, (NEW_FIELD_LABEL, ""))[0]
    key = _unique_key("field", {f.key for f in config.fields})
    new_field = FieldDescriptor(key=key, label=label, kind=kind, required=False)
    return config.model_copy(update={"fields": [*config.fields, new_field]})


def update_field(config: ComponentConfig, index: int, **updates: Any) -> ComponentConfig:
    fields = list(config.fields)
    merged = {**fields[index].model_dump(), **updates}
    fields[index] = FieldDescriptor.model_validate(merged)
    return config.model_copy(update={"fields": fields})


def remove_field(config: ComponentConfig, index: int) -> ComponentConfig:
    fields = list(config.fields)
    del fields[index]
    return config.model_copy(update={"fields": fields})


def move_field(config: ComponentConfig, active_key: str, over_key: str) -> ComponentConfig:
    """Move the field ``active_key`` to the position of ``over_key``."""
    keys = [f.key for f in config.fields]
    if active_key == over_key or active_key not in keys or over_key not in keys:
        return config.model_copy()
    fields = _move(config.fields, keys.index(active_key), keys.index(over_key))
    return config.model_copy(update={"fields": fields})


def add_column(config: ComponentConfig) -> ComponentConfig:
    key = _unique_key("col", {c.key for c in config.columns})
    new_column = ColumnDescriptor(
        key=key, label=NEW_COLUMN_LABEL, kind=ColumnKind.TEXT, sortable=True, filterable=False
    )
    return config.model_copy(update={"columns": [*config.columns, new_column]})


def update_column(config: ComponentConfig, index: int, **updates: Any) -> ComponentConfig:
    columns = list(config.columns)
    merged = {**columns[index].model_dump(), **updates}
    columns[index] = ColumnDescriptor.model_validate(merged)
    return config.model_copy(update={"columns": columns})


def remove_column(config: ComponentConfig, index: int) -> ComponentConfig:
    columns = list(config.columns)
    del columns[index]
    return config.model_copy(update={"columns": columns})


def move_column(config: ComponentConfig, active_key: str, over_key: str) -> ComponentConfig:
    keys = [c.key for c in config.columns]
    if active_key == over_key or active_key not in keys or over_key not in keys:
        return config.model_copy()
    columns = _move(config.columns, keys.index(active_key), keys.index(over_key))
    return config.model_copy(update={"columns": columns})
