"""Generate, store and copy marketing descriptions for artisan products."""

from __future__ import annotations

import dataclasses
import logging
from typing import Optional
from uuid import uuid4

from models.product_record import CATEGORIES, ProductDraft
from models.session_models import DescriptionState
from services.clipboard import BufferedClipboard, Clipboard
from services.openai.generation_client import GenerationClient, GenerationResult
from services.persistence_client import PersistenceClient
from services.prompts import (
    GENERATION_ERROR,
    MISSING_FIELDS_ERROR,
    NEGATIVE_PRICE_ERROR,
    PRODUCT_NOT_SAVED_WARNING,
    UNKNOWN_CATEGORY_ERROR,
    description_prompt,
)

LOGGER = logging.getLogger(__name__)

DRAFT_FIELDS = ("name", "category", "materials", "price")


def validate_draft(draft: ProductDraft) -> Optional[str]:
    """Return a user-facing validation message, or None when the draft is usable."""
    if not draft.name.strip() or not draft.category.strip():
        return MISSING_FIELDS_ERROR
    if draft.category.strip() not in CATEGORIES:
        return UNKNOWN_CATEGORY_ERROR
    price = draft.parsed_price()
    if price is not None and price < 0:
        return NEGATIVE_PRICE_ERROR
    return None


class DescriptionWorkflow:
    """Turn a product draft into one stored marketing description per call."""

    def __init__(
        self,
        generation_client: GenerationClient,
        persistence_client: PersistenceClient,
        clipboard: Optional[Clipboard] = None,
        workflow_id: Optional[str] = None,
    ) -> None:
        self.generation_client = generation_client
        self.persistence_client = persistence_client
        self.clipboard = clipboard or BufferedClipboard()
        self.state = DescriptionState(workflow_id=workflow_id or uuid4().hex)

    def update_field(self, field: str, value: str) -> None:
        """Change one draft field; editing the form clears the current error."""
        if field not in DRAFT_FIELDS:
            raise ValueError(f"Unknown draft field {field!r}.")
        setattr(self.state.draft, field, value or "")
        self.state.error = ""

    async def generate(self, draft: Optional[ProductDraft] = None) -> bool:
        """Generate a description for `draft` (or the current draft) and store it.

        Validation failures and generation failures are reported through
        `state.error`; the previously generated text is kept in both cases.

        Returns:
            True when new text was generated.
        """
        if self.state.busy:
            return False
        # The form stays editable while generating; work on a copy.
        draft = dataclasses.replace(draft if draft is not None else self.state.draft)

        problem = validate_draft(draft)
        if problem:
            self.state.error = problem
            return False

        self.state.draft = dataclasses.replace(draft)
        self.state.error = ""
        self.state.busy = True
        try:
            result = await self._generate(description_prompt(draft))
            if not result.ok:
                LOGGER.warning("Workflow %s: generation failed (%s)", self.state.workflow_id, result.error)
                self.state.error = GENERATION_ERROR
                return False

            self.state.generated_text = result.text
            try:
                record = await self.persistence_client.create_product(draft, result.text)
            except Exception:
                LOGGER.exception("Workflow %s: failed to store generated description", self.state.workflow_id)
                self.state.add_warning(PRODUCT_NOT_SAVED_WARNING)
            else:
                self.state.last_record_id = record.id
            return True
        finally:
            self.state.busy = False

    async def copy(self, text: Optional[str] = None) -> bool:
        """Write `text` (default: the generated description) to the clipboard.

        Failures are logged only.
        """
        payload = self.state.generated_text if text is None else text
        try:
            async with self.clipboard.session() as writer:
                writer.write(payload)
        except Exception as exc:
            LOGGER.error("Workflow %s: failed to copy: %s", self.state.workflow_id, exc)
            return False
        return True

    def snapshot(self) -> dict:
        return self.state.snapshot()

    async def _generate(self, prompt: str) -> GenerationResult:
        try:
            return await self.generation_client.invoke(prompt, allow_internet_context=False)
        except Exception as exc:
            LOGGER.exception("Workflow %s: generation client raised", self.state.workflow_id)
            return GenerationResult.failure(f"{type(exc).__name__}: {exc}")
