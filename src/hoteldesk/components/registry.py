"""Lookup of renderers by component code."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from ..consts import COMPONENT_CODE_PREFIX
from ..enums import ComponentType

if TYPE_CHECKING:
    from .renderers.base import Renderer

logger = logging.getLogger(__name__)


def normalize_code(code: str) -> str:
    return code.strip().upper()


@dataclass(frozen=True)
class Resolution:
    renderer: Optional["Renderer"]
    code: Optional[str]
    component_type: Optional[ComponentType]
    attempted_codes: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_configured(self) -> bool:
        return self.renderer is not None


class ComponentRegistry:
    """Maps case-insensitive codes to renderers.

    Built once at application start and passed to whatever renders events.
    Registering a code again replaces the previous renderer.
    """

    def __init__(self, code_prefix: str = COMPONENT_CODE_PREFIX) -> None:
        self._code_prefix = normalize_code(code_prefix)
        self._renderers: dict[str, "Renderer"] = {}

    @property
    def code_prefix(self) -> str:
        return self._code_prefix

    def register(self, code: str, renderer: "Renderer") -> None:
        key = normalize_code(code)
        if not key:
            raise ValueError("Component code cannot be empty")
        if key in self._renderers:
            logger.debug(f"Replacing renderer registered under {key}")
        self._renderers[key] = renderer

    def resolve(self, code: str | None) -> Optional["Renderer"]:
        if not code:
            return None
        return self._renderers.get(normalize_code(code))

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and normalize_code(code) in self._renderers

    def __len__(self) -> int:
        return len(self._renderers)

    def codes(self) -> list[str]:
        return sorted(self._renderers)

    def type_code(self, component_type: ComponentType) -> str:
        return f"{self._code_prefix}{component_type.value.upper()}"

    def resolve_event(
        self,
        component_type: ComponentType | str | None,
        sous_module_code: str | None = None,
    ) -> Resolution:
        """Find the renderer for an event.

        Tries the type-derived code first, then the owning sous-module's
        code. A miss returns an unresolved ``Resolution`` listing what was
        tried; it is never an error.
        """
        ctype = ComponentType.parse(component_type)
        candidates = []
        if ctype is not None:
            candidates.append(self.type_code(ctype))
        if sous_module_code and sous_module_code.strip():
            candidates.append(normalize_code(sous_module_code))

        for code in candidates:
            renderer = self._renderers.get(code)
            if renderer is not None:
                return Resolution(renderer, code, ctype, tuple(candidates))

        logger.info(
            f"No renderer for component type {component_type!r} "
            f"(tried {', '.join(candidates) or 'nothing'})"
        )
        return Resolution(None, None, ctype, tuple(candidates))
