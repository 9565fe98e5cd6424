"""FastAPI routes for the product description workflow."""

from typing import Optional, Union

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from controllers.product_controller import (
    copy_description,
    generate_description,
    get_workflow,
    list_categories,
    start_workflow,
    update_draft,
)
from models.product_record import ProductDraft

router = APIRouter(prefix="/products", tags=["products"])


class DraftPayload(BaseModel):
    name: str = ""
    category: str = ""
    materials: str = ""
    price: Optional[Union[str, int, float]] = None


class FieldPayload(BaseModel):
    field: str
    value: str = ""


class CopyPayload(BaseModel):
    text: Optional[str] = None


@router.get("/categories")
async def categories_route():
    return list_categories()


@router.post("/workflows")
async def start_workflow_route(request: Request):
    try:
        return await start_workflow(request)
    except HTTPException:
        raise
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc))


@router.get("/workflows/{workflow_id}")
async def get_workflow_route(request: Request, workflow_id: str):
    try:
        return await get_workflow(request, workflow_id)
    except HTTPException:
        raise
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc))


@router.patch("/workflows/{workflow_id}/draft")
async def update_draft_route(request: Request, workflow_id: str, payload: FieldPayload):
    try:
        return await update_draft(request, workflow_id, payload.field, payload.value)
    except HTTPException:
        raise
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc))


@router.post("/workflows/{workflow_id}/generate")
async def generate_route(request: Request, workflow_id: str, payload: DraftPayload):
    """Generate a marketing description from the submitted form values."""
    draft = ProductDraft(
        name=payload.name,
        category=payload.category,
        materials=payload.materials,
        price="" if payload.price is None else str(payload.price),
    )
    try:
        return await generate_description(request, workflow_id, draft)
    except HTTPException:
        raise
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc))


@router.post("/workflows/{workflow_id}/copy")
async def copy_route(request: Request, workflow_id: str, payload: Optional[CopyPayload] = None):
    try:
        return await copy_description(request, workflow_id, payload.text if payload else None)
    except HTTPException:
        raise
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc))
