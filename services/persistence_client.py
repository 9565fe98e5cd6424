"""Create-only persistence for conversation turns and generated products."""

from __future__ import annotations

import logging
from datetime import datetime

from dal.chat_message_dal import ChatMessageDAL
from dal.product_dal import ProductDAL
from models.chat_turn import TurnOrigin, TurnRecord
from models.product_record import ProductDraft, ProductRecord
from utils.database_init import AsyncDatabaseInitializer

LOGGER = logging.getLogger(__name__)


class PersistenceClient:
    """Append records to the message and product stores.

    Errors from the database propagate; callers decide whether a failed write
    is worth more than a log line.
    """

    def __init__(self, db_initializer: AsyncDatabaseInitializer) -> None:
        self.messages = ChatMessageDAL(db_initializer)
        self.products = ProductDAL(db_initializer)

    async def create_turn(self, text: str, origin: TurnOrigin, created_at: datetime) -> TurnRecord:
        """Store one conversation turn and return it with its durable id."""
        record = TurnRecord(
            id=None,
            message=text,
            is_ai=origin is TurnOrigin.ASSISTANT,
            timestamp=created_at.isoformat(),
        )
        record.id = await self.messages.create_message(record)
        LOGGER.debug("Stored %s turn as CHAT_MESSAGE %s", origin.value, record.id)
        return record

    async def create_product(self, draft: ProductDraft, generated_text: str) -> ProductRecord:
        """Store a generated description together with the draft it was built from.

        Args:
            draft: Validated product draft. The price text is parsed here; an
                empty or unparseable price is stored as NULL.
            generated_text: Non-empty model output.

        Returns:
            The stored ProductRecord including its id and creation time.
        """
        record = ProductRecord(
            id=None,
            name=draft.name.strip(),
            category=draft.category.strip(),
            materials=draft.materials.strip(),
            price=draft.parsed_price(),
            generated_description=generated_text,
        )
        record.id = await self.products.create_product(record)
        LOGGER.info("Stored generated description as PRODUCT %s (%s)", record.id, record.name)
        return record
