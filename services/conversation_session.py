"""Turn-by-turn customer-support conversation backed by the generation client.

One session owns one transcript. A submitted message is answered by exactly
one generation call; while that call is in flight the session is busy and
further submissions are ignored. Turns are written to the message store in
background tasks so a slow or failing store never holds up the reply.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Set
from uuid import uuid4

from models.chat_turn import Turn, TurnOrigin
from models.session_models import ConversationState
from services.openai.generation_client import GenerationClient, GenerationResult
from services.persistence_client import PersistenceClient
from services.prompts import FALLBACK_REPLY, GREETING, TURN_NOT_SAVED_WARNING, support_prompt

LOGGER = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ConversationSession:
    """Manage one linear support exchange."""

    def __init__(
        self,
        generation_client: GenerationClient,
        persistence_client: PersistenceClient,
        clock: Optional[Clock] = None,
        session_id: Optional[str] = None,
    ) -> None:
        self.generation_client = generation_client
        self.persistence_client = persistence_client
        self.clock = clock or utc_now
        self.state = ConversationState(session_id=session_id or uuid4().hex)
        self._pending: Set[asyncio.Task] = set()
        # The greeting is shown but never stored.
        self._append(GREETING, TurnOrigin.ASSISTANT)

    @property
    def busy(self) -> bool:
        return self.state.busy

    async def submit_turn(self, text: str) -> bool:
        """Send a customer message and append the assistant's reply.

        Args:
            text: Raw customer input. Surrounding whitespace is stripped.

        Returns:
            True if the message was accepted, False if it was empty or the
            session was already waiting on a reply. A rejected call leaves the
            session untouched.
        """
        message = (text or "").strip()
        if not message or self.state.busy:
            return False

        user_turn = self._append(message, TurnOrigin.USER)
        self.state.busy = True
        try:
            self._persist_in_background(user_turn)
            result = await self._generate(support_prompt(message))
            if result.ok:
                reply = self._append(result.text, TurnOrigin.ASSISTANT)
                self._persist_in_background(reply)
            else:
                LOGGER.warning("Session %s: generation failed (%s)", self.state.session_id, result.error)
                self._append(FALLBACK_REPLY, TurnOrigin.ASSISTANT)
        finally:
            self.state.busy = False
        return True

    async def drain(self) -> None:
        """Wait for every outstanding turn write to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def snapshot(self) -> dict:
        return self.state.snapshot()

    async def _generate(self, prompt: str) -> GenerationResult:
        try:
            return await self.generation_client.invoke(prompt, allow_internet_context=False)
        except Exception as exc:
            LOGGER.exception("Session %s: generation client raised", self.state.session_id)
            return GenerationResult.failure(f"{type(exc).__name__}: {exc}")

    def _append(self, text: str, origin: TurnOrigin) -> Turn:
        turn = Turn(
            id=self.state.next_turn_id(),
            text=text,
            origin=origin,
            created_at=self.clock(),
        )
        self.state.turns.append(turn)
        return turn

    def _persist_in_background(self, turn: Turn) -> None:
        task = asyncio.create_task(
            self.persistence_client.create_turn(turn.text, turn.origin, turn.created_at)
        )
        self._pending.add(task)
        task.add_done_callback(self._on_persisted)

    def _on_persisted(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            LOGGER.error(
                "Session %s: failed to store chat message: %s",
                self.state.session_id,
                exc,
                exc_info=exc,
            )
            self.state.add_warning(TURN_NOT_SAVED_WARNING)
