"""Per-instance state for the conversation and description workflows."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from models.chat_turn import Turn, TurnOrigin
from models.product_record import ProductDraft

MAX_WARNINGS = 20


def _keep_recent(warnings: List[str], message: str) -> None:
	warnings.append(message)
	del warnings[:-MAX_WARNINGS]


@dataclass
class ConversationState:
	"""In-memory transcript and busy flag for one support conversation."""

	session_id: str
	turns: List[Turn] = field(default_factory=list)
	busy: bool = False
	warnings: List[str] = field(default_factory=list)

	def add_warning(self, message: str) -> None:
		_keep_recent(self.warnings, message)

	def next_turn_id(self) -> int:
		return self.turns[-1].id + 1 if self.turns else 1

	def count(self, origin: TurnOrigin) -> int:
		return sum(1 for turn in self.turns if turn.origin is origin)

	def snapshot(self) -> Dict[str, Any]:
		return {
			"session_id": self.session_id,
			"busy": self.busy,
			"messages": [turn.to_dict() for turn in self.turns],
			"warnings": list(self.warnings),
		}


@dataclass
class DescriptionState:
	"""Form draft plus the latest generation outcome for one workflow."""

	workflow_id: str
	draft: ProductDraft = field(default_factory=ProductDraft)
	generated_text: str = ""
	error: str = ""
	busy: bool = False
	last_record_id: Optional[int] = None
	warnings: List[str] = field(default_factory=list)

	def add_warning(self, message: str) -> None:
		_keep_recent(self.warnings, message)

	def snapshot(self) -> Dict[str, Any]:
		return {
			"workflow_id": self.workflow_id,
			"draft": self.draft.to_dict(),
			"generated_description": self.generated_text,
			"error": self.error,
			"busy": self.busy,
			"record_id": self.last_record_id,
			"warnings": list(self.warnings),
		}
