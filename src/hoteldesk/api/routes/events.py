import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request
from pydantic import BaseModel

from ...components.defaults import merge_config
from ...components.events import EventRecord
from ...components.factory import render_event
from ...components.registry import ComponentRegistry
from ...components.renderers import FormRenderer, RenderContext, TableRenderer
from ...demo import generate_demo_rows
from ...enums import SortDirection
from ...store import ModuleStore
from . import get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events", tags=["events"])


class RenderRequest(BaseModel):
    rows: list[dict[str, Any]] | None = None
    query: str = ""
    filters: dict[str, Any] = {}
    sort_key: str | None = None
    sort_direction: SortDirection = SortDirection.ASC
    page: int = 1
    selected: list[int | str] = []


class SubmitResponse(BaseModel):
    success: bool = True
    data: dict[str, Any]


def _build_context(request: Request, store: ModuleStore, event_id: int, **state) -> RenderContext:
    record = store.get_event(event_id)
    parent = store.get_event_parent(event_id)
    return RenderContext(
        event=record,
        sous_module_code=parent.code,
        sous_module_label=parent.label,
        display=request.app.state.config.display,
        **state,
    )


def _demo_rows(registry: ComponentRegistry, context: RenderContext, count: int) -> list[dict[str, Any]]:
    resolution = registry.resolve_event(context.event.component_type, context.sous_module_code)
    if not isinstance(resolution.renderer, TableRenderer):
        return []
    columns = resolution.renderer.get_config(context).columns
    return generate_demo_rows(columns, count)


@router.get("/{event_id}", response_model=EventRecord)
def get_event(event_id: int, store: ModuleStore = Depends(get_store)):
    return store.get_event(event_id)


@router.get("/{event_id}/config")
def get_merged_config(event_id: int, request: Request, store: ModuleStore = Depends(get_store)):
    context = _build_context(request, store, event_id)
    resolution = request.app.state.registry.resolve_event(
        context.event.component_type, context.sous_module_code
    )
    if resolution.is_configured:
        return resolution.renderer.get_config(context).to_json()
    return merge_config(context.event.parsed_type, context.event.config).to_json()


@router.put("/{event_id}/config", response_model=EventRecord)
def save_config(
    event_id: int,
    config: dict[str, Any] = Body(...),
    store: ModuleStore = Depends(get_store),
):
    return store.save_event_config(event_id, config)


@router.post("/{event_id}/render")
def render(
    event_id: int,
    request: Request,
    payload: RenderRequest | None = None,
    store: ModuleStore = Depends(get_store),
):
    payload = payload or RenderRequest()
    registry = request.app.state.registry
    context = _build_context(
        request,
        store,
        event_id,
        rows=payload.rows or [],
        query=payload.query,
        filters=payload.filters,
        sort_key=payload.sort_key,
        sort_direction=payload.sort_direction,
        page=payload.page,
        selected=payload.selected,
    )
    if payload.rows is None:
        context.rows = _demo_rows(registry, context, request.app.state.config.engine.demo_rows)

    rendered = render_event(registry, context)
    return rendered.model_dump(mode="json")


@router.post("/{event_id}/submit", response_model=SubmitResponse)
def submit(
    event_id: int,
    request: Request,
    data: dict[str, Any] = Body(...),
    store: ModuleStore = Depends(get_store),
):
    context = _build_context(request, store, event_id)
    resolution = request.app.state.registry.resolve_event(
        context.event.component_type, context.sous_module_code
    )
    if not isinstance(resolution.renderer, FormRenderer):
        raise HTTPException(status_code=400, detail="Event does not accept form submissions")

    return SubmitResponse(data=resolution.renderer.submit(context, data))
