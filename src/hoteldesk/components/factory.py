from __future__ import annotations

import logging

from ..consts import COMPONENT_CODE_PREFIX
from ..enums import ComponentType
from .registry import ComponentRegistry
from .renderers import (
    DashboardRenderer,
    FormRenderer,
    ListRenderer,
    RenderContext,
    RenderedComponent,
    Renderer,
    SettingsRenderer,
    TableRenderer,
    UnconfiguredComponent,
)

logger = logging.getLogger(__name__)

# Sous-module codes that map straight to a surface
SOUS_MODULE_ALIASES: dict[ComponentType, tuple[str, ...]] = {
    ComponentType.LIST: (
        "LIST",
        "LISTE",
        "RESERVATION_LIST",
        "GUEST_LIST",
        "ROOM_LIST",
        "INVENTORY",
        "STOCK",
    ),
    ComponentType.FORM: ("FORM", "FORMULAIRE", "CREATE", "NEW", "ADD", "AJOUTER"),
    ComponentType.DASHBOARD: (
        "DASHBOARD",
        "TABLEAU",
        "OVERVIEW",
        "STATS",
        "ANALYTICS",
        "RAPPORTS",
    ),
    ComponentType.SETTINGS: ("SETTINGS", "CONFIG", "CONFIGURATION", "PARAMETRES", "OPTIONS"),
    ComponentType.TABLE: (),
}


def create_renderer(component_type: ComponentType) -> Renderer:
    match component_type:
        case ComponentType.FORM:
            return FormRenderer()
        case ComponentType.TABLE:
            return TableRenderer()
        case ComponentType.LIST:
            return ListRenderer()
        case ComponentType.DASHBOARD:
            return DashboardRenderer()
        case ComponentType.SETTINGS:
            return SettingsRenderer()
        case _:
            raise ValueError(f"Unknown component type: {component_type}")


def create_default_registry(code_prefix: str = COMPONENT_CODE_PREFIX) -> ComponentRegistry:
    registry = ComponentRegistry(code_prefix)
    for component_type in ComponentType:
        renderer = create_renderer(component_type)
        registry.register(registry.type_code(component_type), renderer)
        for code in SOUS_MODULE_ALIASES[component_type]:
            registry.register(code, renderer)

    logger.debug(f"Component registry initialized with {len(registry)} codes")
    return registry


def render_event(registry: ComponentRegistry, context: RenderContext) -> RenderedComponent:
    """Resolve and render an event, degrading to a placeholder on a miss."""
    resolution = registry.resolve_event(context.event.component_type, context.sous_module_code)
    if not resolution.is_configured:
        return UnconfiguredComponent.from_resolution(resolution, context)
    return resolution.renderer.render(context)
