from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, field_validator

from ..enums import ComponentType


class EventRecord(BaseModel):
    """The stored event as the engine sees it.

    ``config`` is the opaque blob written by the settings editor; it is merged
    with defaults at render time and never modified here.
    """

    id: Optional[int] = None
    code: str = ""
    label: str = ""
    active: bool = True
    component_type: Optional[str] = None
    config: Any = None
    sous_module_id: Optional[int] = None

    @field_validator("component_type", mode="before")
    @classmethod
    def normalize_component_type(cls, v):
        if isinstance(v, ComponentType):
            return v.value
        if isinstance(v, str):
            return v.strip() or None
        return v

    @property
    def parsed_type(self) -> Optional[ComponentType]:
        return ComponentType.parse(self.component_type)
