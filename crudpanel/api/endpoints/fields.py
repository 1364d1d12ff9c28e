"""Field definitions admin API.

Every mutation goes through CrudField, so the HTTP surface has exactly the
builder's create-on-demand and save-after-each-call semantics.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field

from crudpanel.core.fields import CrudField, CrudPanel, bind_panel

router = APIRouter(prefix="/crud/{operation}/fields", tags=["fields"])


class PutFieldRequest(BaseModel):
    attributes: Dict[str, Any] = Field(default_factory=dict)


class SetAttributeRequest(BaseModel):
    value: Any = None


def get_panel(operation: str, request: Request) -> CrudPanel:
    panels: Dict[str, CrudPanel] = request.app.state.panels
    panel = panels.get(operation)
    if panel is None:
        raise HTTPException(status_code=404, detail="operation_not_found")
    return panel


@router.get("")
def list_fields(panel: CrudPanel = Depends(get_panel)) -> Dict[str, Any]:
    return {"operation": panel.operation, "fields": panel.fields()}


@router.get("/{name}")
def get_field(name: str, panel: CrudPanel = Depends(get_panel)) -> Dict[str, Any]:
    field = panel.first_field_where("name", name)
    if field is None:
        raise HTTPException(status_code=404, detail="field_not_found")
    return {"operation": panel.operation, "field": field}


@router.put("/{name}")
def put_field(name: str, req: PutFieldRequest, panel: CrudPanel = Depends(get_panel)) -> Dict[str, Any]:
    with bind_panel(panel):
        builder = CrudField.name(name)
    for attribute, value in req.attributes.items():
        if attribute == "name":
            continue
        builder.set(attribute, value)
    return {"operation": panel.operation, "field": builder.attributes}


@router.patch("/{name}/attributes/{attribute}")
def set_attribute(
    name: str,
    attribute: str,
    req: SetAttributeRequest,
    panel: CrudPanel = Depends(get_panel),
) -> Dict[str, Any]:
    builder = panel.field(name).set(attribute, req.value)
    return {"operation": panel.operation, "field": builder.attributes}


@router.delete("/{name}/attributes/{attribute}")
def forget_attribute(name: str, attribute: str, panel: CrudPanel = Depends(get_panel)) -> Dict[str, Any]:
    if name not in panel:
        raise HTTPException(status_code=404, detail="field_not_found")
    builder = panel.field(name).forget(attribute)
    return {"operation": panel.operation, "field": builder.attributes}


@router.delete("/{name}")
def remove_field(name: str, panel: CrudPanel = Depends(get_panel)) -> Dict[str, Any]:
    if name not in panel:
        raise HTTPException(status_code=404, detail="field_not_found")
    panel.field(name).remove()
    return {"ok": True, "removed": name, "operation": panel.operation}
