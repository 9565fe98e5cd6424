"""Simple in-memory registry of conversation sessions and description workflows."""

from __future__ import annotations

import asyncio
from typing import Dict

from services.conversation_session import Clock, ConversationSession
from services.description_workflow import DescriptionWorkflow
from services.openai.generation_client import GenerationClient
from services.persistence_client import PersistenceClient


class SessionStore:
	"""Create and look up workflow instances that share one set of clients."""

	def __init__(
		self,
		generation_client: GenerationClient,
		persistence_client: PersistenceClient,
		clock: Clock | None = None,
	) -> None:
		self.generation_client = generation_client
		self.persistence_client = persistence_client
		self.clock = clock
		self._conversations: Dict[str, ConversationSession] = {}
		self._workflows: Dict[str, DescriptionWorkflow] = {}

	def create_conversation(self) -> ConversationSession:
		"""Start a new conversation seeded with the greeting."""
		session = ConversationSession(self.generation_client, self.persistence_client, clock=self.clock)
		self._conversations[session.state.session_id] = session
		return session

	def get_conversation(self, session_id: str) -> ConversationSession:
		"""Return a conversation or raise KeyError if missing."""
		session = self._conversations.get(session_id)
		if session is None:
			raise KeyError(f"Session {session_id} not found")
		return session

	def create_workflow(self) -> DescriptionWorkflow:
		"""Start a new description workflow with an empty draft."""
		workflow = DescriptionWorkflow(self.generation_client, self.persistence_client)
		self._workflows[workflow.state.workflow_id] = workflow
		return workflow

	def get_workflow(self, workflow_id: str) -> DescriptionWorkflow:
		"""Return a workflow or raise KeyError if missing."""
		workflow = self._workflows.get(workflow_id)
		if workflow is None:
			raise KeyError(f"Workflow {workflow_id} not found")
		return workflow

	async def drain(self) -> None:
		"""Wait for pending background writes in every conversation."""
		await asyncio.gather(*(session.drain() for session in self._conversations.values()))
