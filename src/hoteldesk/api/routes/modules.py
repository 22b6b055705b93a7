from datetime import date
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ...components.events import EventRecord
from ...store import ModuleStore, module_to_dict, sous_module_to_dict
from . import get_store

router = APIRouter(tags=["modules"])


class ModuleCreateRequest(BaseModel):
    code: str = Field(min_length=1)
    label: str = Field(min_length=1)
    start_date: date | None = None
    end_date: date | None = None


class ModuleUpdateRequest(BaseModel):
    code: str | None = Field(default=None, min_length=1)
    label: str | None = Field(default=None, min_length=1)
    start_date: date | None = None
    end_date: date | None = None


class ModuleResponse(BaseModel):
    id: int
    code: str
    label: str
    start_date: date | None = None
    end_date: date | None = None


class SousModuleResponse(ModuleResponse):
    module_id: int


class EventCreateRequest(BaseModel):
    code: str = Field(min_length=1)
    label: str = Field(min_length=1)
    component_type: str = "form"
    active: bool = True
    config: dict[str, Any] | None = None


class EventUpdateRequest(BaseModel):
    code: str | None = Field(default=None, min_length=1)
    label: str | None = Field(default=None, min_length=1)
    component_type: str | None = None
    active: bool | None = None


class SousModuleNode(SousModuleResponse):
    events: list[EventRecord] = []


class ModuleNode(ModuleResponse):
    sous_modules: list[SousModuleNode] = []


class HierarchyResponse(BaseModel):
    modules: list[ModuleNode]


def _changes(payload: BaseModel) -> dict[str, Any]:
    data = payload.model_dump(exclude_unset=True)
    # explicit nulls only clear the optional dates
    return {k: v for k, v in data.items() if v is not None or k.endswith("_date")}


@router.get("/modules", response_model=HierarchyResponse)
def get_hierarchy(store: ModuleStore = Depends(get_store)):
    return HierarchyResponse(modules=store.hierarchy())


@router.post("/modules", response_model=ModuleResponse, status_code=201)
def create_module(payload: ModuleCreateRequest, store: ModuleStore = Depends(get_store)):
    module = store.create_module(**payload.model_dump())
    return module_to_dict(module)


@router.put("/modules/{module_id}", response_model=ModuleResponse)
def update_module(
    module_id: int, payload: ModuleUpdateRequest, store: ModuleStore = Depends(get_store)
):
    module = store.update_module(module_id, **_changes(payload))
    return module_to_dict(module)


@router.delete("/modules/{module_id}", status_code=204)
def delete_module(module_id: int, store: ModuleStore = Depends(get_store)):
    store.delete_module(module_id)


@router.post("/modules/{module_id}/sous-modules", response_model=SousModuleResponse, status_code=201)
def create_sous_module(
    module_id: int, payload: ModuleCreateRequest, store: ModuleStore = Depends(get_store)
):
    sous_module = store.create_sous_module(module_id, **payload.model_dump())
    return sous_module_to_dict(sous_module)


@router.put("/sous-modules/{sous_module_id}", response_model=SousModuleResponse)
def update_sous_module(
    sous_module_id: int, payload: ModuleUpdateRequest, store: ModuleStore = Depends(get_store)
):
    sous_module = store.update_sous_module(sous_module_id, **_changes(payload))
    return sous_module_to_dict(sous_module)


@router.delete("/sous-modules/{sous_module_id}", status_code=204)
def delete_sous_module(sous_module_id: int, store: ModuleStore = Depends(get_store)):
    store.delete_sous_module(sous_module_id)


@router.post("/sous-modules/{sous_module_id}/events", response_model=EventRecord, status_code=201)
def create_event(
    sous_module_id: int, payload: EventCreateRequest, store: ModuleStore = Depends(get_store)
):
    return store.create_event(sous_module_id, **payload.model_dump())


@router.put("/events/{event_id}", response_model=EventRecord)
def update_event(event_id: int, payload: EventUpdateRequest, store: ModuleStore = Depends(get_store)):
    return store.update_event(event_id, **_changes(payload))


@router.delete("/events/{event_id}", status_code=204)
def delete_event(event_id: int, store: ModuleStore = Depends(get_store)):
    store.delete_event(event_id)
