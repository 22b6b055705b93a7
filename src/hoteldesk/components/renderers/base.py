from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Hashable, Optional

from pydantic import BaseModel

from ...config import DisplayConfig
from ...enums import ComponentType, SortDirection
from ..defaults import merge_config
from ..descriptors import ComponentConfig
from ..events import EventRecord

logger = logging.getLogger(__name__)


@dataclass
class RenderContext:
    event: EventRecord
    sous_module_code: str = ""
    sous_module_label: str = ""
    rows: list[dict[str, Any]] = field(default_factory=list)
    query: str = ""
    filters: dict[str, Any] = field(default_factory=dict)
    sort_key: Optional[str] = None
    sort_direction: SortDirection = SortDirection.ASC
    page: int = 1
    selected: list[Hashable] = field(default_factory=list)
    display: DisplayConfig = field(default_factory=DisplayConfig)


class RenderedComponent(BaseModel):
    kind: str
    title: str
    description: Optional[str] = None


class Renderer(ABC):
    component_type: ComponentType

    def get_config(self, context: RenderContext) -> ComponentConfig:
        return merge_config(self.component_type, context.event.config)

    def get_title(self, config: ComponentConfig, context: RenderContext) -> str:
        return config.title or context.event.label or context.sous_module_label

    @abstractmethod
    def render(self, context: RenderContext) -> RenderedComponent: ...
