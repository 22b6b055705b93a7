from __future__ import annotations

import logging
from typing import Any, Mapping

from ...enums import ComponentType
from ..schema import build_defaults, build_schema
from .base import RenderContext, RenderedComponent, Renderer

logger = logging.getLogger(__name__)


class FormView(RenderedComponent):
    fields: list[dict[str, Any]]
    defaults: dict[str, Any]
    actions: dict[str, bool]


class FormRenderer(Renderer):
    component_type = ComponentType.FORM

    def render(self, context: RenderContext) -> FormView:
        config = self.get_config(context)
        return FormView(
            kind=self.component_type.value,
            title=self.get_title(config, context),
            description=config.description,
            fields=[
                f.model_dump(mode="json", by_alias=True, exclude_none=True)
                for f in config.fields
            ],
            defaults=build_defaults(config.fields),
            actions=config.actions.model_dump(),
        )

    def submit(self, context: RenderContext, data: Mapping[str, Any] | None) -> dict[str, Any]:
        """Validate a submission against the event's fields.

        Raises FormValidationError when any field is invalid.
        """
        config = self.get_config(context)
        cleaned = build_schema(config.fields).validate(data)
        logger.info(f"Form submission accepted for event {context.event.id}")
        return cleaned


class SettingsRenderer(FormRenderer):
    component_type = ComponentType.SETTINGS


class DashboardRenderer(Renderer):
    component_type = ComponentType.DASHBOARD

    def render(self, context: RenderContext) -> RenderedComponent:
        config = self.get_config(context)
        return RenderedComponent(
            kind=self.component_type.value,
            title=self.get_title(config, context),
            description=config.description,
        )
