from fastapi import Request, HTTPException
from typing import Dict, Any, Optional

from models.product_record import CATEGORIES, ProductDraft
from services.description_workflow import DescriptionWorkflow
from services.session_store import SessionStore


def _get_workflow(request: Request, workflow_id: str) -> DescriptionWorkflow:
    store: SessionStore = request.app.state.session_store
    try:
        return store.get_workflow(workflow_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc.args[0])) from exc


def list_categories() -> Dict[str, Any]:
    return {"categories": list(CATEGORIES)}


async def start_workflow(request: Request) -> Dict[str, Any]:
    """Create a description workflow with an empty draft."""
    store: SessionStore = request.app.state.session_store
    return store.create_workflow().snapshot()


async def get_workflow(request: Request, workflow_id: str) -> Dict[str, Any]:
    return _get_workflow(request, workflow_id).snapshot()


async def update_draft(request: Request, workflow_id: str, field: str, value: str) -> Dict[str, Any]:
    """Change one form field and return the workflow state.

    Raises:
        HTTPException(400) for an unknown field name.
    """
    workflow = _get_workflow(request, workflow_id)
    try:
        workflow.update_field(field, value)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return workflow.snapshot()


async def generate_description(request: Request, workflow_id: str, draft: ProductDraft) -> Dict[str, Any]:
    """Generate and store a description for the submitted draft.

    Validation and generation problems are reported in the returned `error`
    field rather than as HTTP errors, so the form can show them inline.

    Args:
        request: FastAPI Request (used to reach the session store).
        workflow_id: Workflow returned by `start_workflow`.
        draft: Form values as typed.

    Returns:
        The workflow snapshot plus `generated`, True when new text was produced.
    """
    workflow = _get_workflow(request, workflow_id)
    generated = await workflow.generate(draft)
    return {"generated": generated, **workflow.snapshot()}


async def copy_description(request: Request, workflow_id: str, text: Optional[str] = None) -> Dict[str, Any]:
    """Copy text (default: the generated description) to the workflow clipboard."""
    workflow = _get_workflow(request, workflow_id)
    copied = await workflow.copy(text)
    return {"copied": copied, "clipboard": getattr(workflow.clipboard, "contents", None)}
