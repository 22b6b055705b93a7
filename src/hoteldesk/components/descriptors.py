"""Declarative descriptors for configurable components.

Stored configs are JSON blobs written by the settings editor, so every model
reads camelCase keys (``pageSize``, ``minLength``) and ``type`` for the kind,
while Python callers may populate by attribute name. Unknown keys are ignored
so that blobs written under an older shape keep loading.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ..consts import DEFAULT_PAGE_SIZE
from ..enums import BadgeVariant, ColumnKind, FieldKind

logger = logging.getLogger(__name__)


class Descriptor(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


def _degrade_kind(value: Any, kinds: type[FieldKind] | type[ColumnKind], fallback):
    if isinstance(value, kinds):
        return value
    if isinstance(value, str):
        try:
            return kinds(value.strip().lower())
        except ValueError:
            pass
    logger.warning(f"Unknown {kinds.__name__} {value!r}, rendering as {fallback.value}")
    return fallback


class FieldOption(Descriptor):
    value: str
    label: str = ""

    @field_validator("value", mode="before")
    @classmethod
    def coerce_value(cls, v):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @model_validator(mode="after")
    def default_label(self) -> "FieldOption":
        if not self.label:
            self.label = self.value
        return self


class FieldDescriptor(Descriptor):
    key: str = Field(min_length=1)
    label: str = ""
    kind: FieldKind = Field(default=FieldKind.TEXT, alias="type")
    placeholder: Optional[str] = None
    required: bool = False
    options: list[FieldOption] = Field(default_factory=list)
    min: Optional[int | float] = None
    max: Optional[int | float] = None
    min_length: Optional[int] = Field(default=None, ge=0)
    max_length: Optional[int] = Field(default=None, ge=0)
    pattern: Optional[str] = None

    @field_validator("kind", mode="before")
    @classmethod
    def degrade_unknown_kind(cls, v):
        return _degrade_kind(v, FieldKind, FieldKind.TEXT)

    @model_validator(mode="after")
    def default_label(self) -> "FieldDescriptor":
        if not self.label:
            self.label = self.key
        return self


class ColumnDescriptor(Descriptor):
    key: str = Field(min_length=1)
    label: str = ""
    kind: ColumnKind = Field(default=ColumnKind.TEXT, alias="type")
    sortable: bool = False
    filterable: bool = False
    width: Optional[str] = None
    badge_variants: dict[str, BadgeVariant] = Field(default_factory=dict)

    @field_validator("kind", mode="before")
    @classmethod
    def degrade_unknown_kind(cls, v):
        return _degrade_kind(v, ColumnKind, ColumnKind.TEXT)

    @field_validator("badge_variants", mode="before")
    @classmethod
    def drop_unknown_variants(cls, v):
        if not isinstance(v, dict):
            return v

        allowed = {variant.value for variant in BadgeVariant}
        kept = {}
        for literal, variant in v.items():
            if isinstance(variant, BadgeVariant) or variant in allowed:
                kept[literal] = variant
            else:
                logger.warning(f"Ignoring badge variant {variant!r} for value {literal!r}")
        return kept

    @model_validator(mode="after")
    def default_label(self) -> "ColumnDescriptor":
        if not self.label:
            self.label = self.key
        return self


class ComponentActions(Descriptor):
    create: bool = True
    edit: bool = True
    delete: bool = True
    view: bool = True
    export: bool = True

    @property
    def has_row_actions(self) -> bool:
        return self.view or self.edit or self.delete


class ComponentConfig(Descriptor):
    fields: list[FieldDescriptor] = Field(default_factory=list)
    columns: list[ColumnDescriptor] = Field(default_factory=list)
    title: Optional[str] = None
    description: Optional[str] = None
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, gt=0)
    actions: ComponentActions = Field(default_factory=ComponentActions)
    data_source: Optional[dict[str, Any]] = None

    def to_json(self) -> dict[str, Any]:
        """Return the camelCase JSON form used for storage and responses."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
