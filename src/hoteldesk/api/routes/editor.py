from fastapi import APIRouter, HTTPException

from ...components.editor import EditorSchema, build_editor_schema, field_kind_catalog
from ...enums import ComponentType

router = APIRouter(prefix="/editor", tags=["editor"])


@router.get("/field-kinds")
def get_field_kinds():
    return {"success": True, "kinds": field_kind_catalog()}


@router.get("/{component_type}", response_model=EditorSchema)
def get_editor_schema(component_type: str):
    ctype = ComponentType.parse(component_type)
    if ctype is None:
        raise HTTPException(status_code=404, detail=f"Unknown component type: {component_type}")
    return build_editor_schema(ctype)
