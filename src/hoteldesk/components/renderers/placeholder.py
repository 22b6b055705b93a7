from __future__ import annotations

from typing import Optional

from ..registry import Resolution
from .base import RenderContext, RenderedComponent


class UnconfiguredComponent(RenderedComponent):
    """Shown in place of an event whose renderer could not be resolved."""

    component_type: Optional[str] = None
    sous_module_code: str = ""
    attempted_codes: list[str] = []

    @classmethod
    def from_resolution(
        cls, resolution: Resolution, context: RenderContext
    ) -> "UnconfiguredComponent":
        component_type = context.event.component_type
        target = component_type or context.sous_module_code or "?"
        return cls(
            kind="unconfigured",
            title=context.event.label or context.sous_module_label,
            description=f"Unconfigured component: {target}",
            component_type=component_type,
            sous_module_code=context.sous_module_code,
            attempted_codes=list(resolution.attempted_codes),
        )
