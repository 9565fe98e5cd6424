"""FastAPI routes for customer-support conversations."""

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from controllers.chat_controller import get_conversation, send_message, start_conversation

router = APIRouter(prefix="/chat/sessions", tags=["chat"])


class MessagePayload(BaseModel):
	text: str = ""


@router.post("")
async def start_conversation_route(request: Request):
	try:
		return await start_conversation(request)
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))


@router.get("/{session_id}")
async def get_conversation_route(request: Request, session_id: str):
	try:
		return await get_conversation(request, session_id)
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))


@router.post("/{session_id}/turns")
async def post_turn_route(request: Request, session_id: str, payload: MessagePayload):
	"""Submit a customer message and return the updated transcript."""
	try:
		return await send_message(request, session_id, payload.text)
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))
