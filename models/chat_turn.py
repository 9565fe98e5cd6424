from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class TurnOrigin(str, Enum):
    """Who produced a conversation turn."""

    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Turn:
    """One message in a conversation transcript.

    Attributes:
        id: Session-local identifier, assigned in order of creation.
        text: Message text (already trimmed for user turns).
        origin: `TurnOrigin.USER` or `TurnOrigin.ASSISTANT`.
        created_at: Timezone-aware creation time from the session clock.
    """

    id: int
    text: str
    origin: TurnOrigin
    created_at: datetime

    @property
    def is_ai(self) -> bool:
        return self.origin is TurnOrigin.ASSISTANT

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "message": self.text,
            "is_ai": self.is_ai,
            "timestamp": self.created_at.isoformat(),
        }


@dataclass
class TurnRecord:
    """In-memory representation of a row in the CHAT_MESSAGE table.

    Attributes:
        id: Primary key (None for new records).
        message: Message text.
        is_ai: True when the turn was produced by the assistant.
        timestamp: ISO-8601 creation time of the turn.
    """

    id: Optional[int]
    message: str
    is_ai: bool
    timestamp: str
