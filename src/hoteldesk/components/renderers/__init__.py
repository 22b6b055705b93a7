from __future__ import annotations

from .base import RenderContext, RenderedComponent, Renderer
from .forms import DashboardRenderer, FormRenderer, FormView, SettingsRenderer
from .placeholder import UnconfiguredComponent
from .tables import ListRenderer, TableRenderer, TableViewPayload

__all__ = [
    "DashboardRenderer",
    "FormRenderer",
    "FormView",
    "ListRenderer",
    "RenderContext",
    "RenderedComponent",
    "Renderer",
    "SettingsRenderer",
    "TableRenderer",
    "TableViewPayload",
    "UnconfiguredComponent",
]
