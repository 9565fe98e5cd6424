"""Controller functions for customer-support conversations."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import HTTPException, Request

from services.conversation_session import ConversationSession
from services.session_store import SessionStore


def _get_session(request: Request, session_id: str) -> ConversationSession:
	store: SessionStore = request.app.state.session_store
	try:
		return store.get_conversation(session_id)
	except KeyError as exc:
		raise HTTPException(status_code=404, detail=str(exc.args[0])) from exc


async def start_conversation(request: Request) -> Dict[str, Any]:
	"""Create a new conversation and return its greeting transcript."""
	store: SessionStore = request.app.state.session_store
	return store.create_conversation().snapshot()


async def get_conversation(request: Request, session_id: str) -> Dict[str, Any]:
	"""Return the current transcript for a conversation."""
	return _get_session(request, session_id).snapshot()


async def send_message(request: Request, session_id: str, text: str) -> Dict[str, Any]:
	"""Submit a customer message and wait for the assistant's reply.

	Returns the transcript plus `accepted`, which is False when the message was
	blank or the session was still answering a previous message.
	"""
	session = _get_session(request, session_id)
	accepted = await session.submit_turn(text)
	return {"accepted": accepted, **session.snapshot()}
