import asyncio
import itertools
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import List, Optional

import pytest

ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

from models.chat_turn import TurnOrigin, TurnRecord  # noqa: E402
from models.product_record import ProductDraft, ProductRecord  # noqa: E402
from services.openai.generation_client import GenerationResult  # noqa: E402


class FakeGenerationClient:
    """Stands in for GenerationClient; records prompts and replays canned replies."""

    def __init__(self, replies: Optional[List[str]] = None, fail: bool = False) -> None:
        self.replies = list(replies or [])
        self.fail = fail
        self.raises: Optional[Exception] = None
        self.gate: Optional[asyncio.Event] = None
        self.calls = []

    async def invoke(self, prompt: str, allow_internet_context: bool = False) -> GenerationResult:
        self.calls.append({"prompt": prompt, "allow_internet_context": allow_internet_context})
        if self.gate is not None:
            await self.gate.wait()
        if self.raises is not None:
            raise self.raises
        if self.fail:
            return GenerationResult.failure("APIConnectionError: connection reset")
        text = self.replies.pop(0) if self.replies else "Happy to help with that!"
        return GenerationResult.success(text)


class FakePersistenceClient:
    """In-memory PersistenceClient that can be told to fail."""

    def __init__(self) -> None:
        self.turns: List[TurnRecord] = []
        self.products: List[ProductRecord] = []
        self.fail_turns = False
        self.fail_products = False

    async def create_turn(self, text, origin, created_at) -> TurnRecord:
        if self.fail_turns:
            raise RuntimeError("message store unavailable")
        record = TurnRecord(
            id=len(self.turns) + 1,
            message=text,
            is_ai=origin is TurnOrigin.ASSISTANT,
            timestamp=created_at.isoformat(),
        )
        self.turns.append(record)
        return record

    async def create_product(self, draft: ProductDraft, generated_text: str) -> ProductRecord:
        if self.fail_products:
            raise RuntimeError("product store unavailable")
        record = ProductRecord(
            id=len(self.products) + 1,
            name=draft.name,
            category=draft.category,
            materials=draft.materials,
            price=draft.parsed_price(),
            generated_description=generated_text,
        )
        self.products.append(record)
        return record


@pytest.fixture
def generation():
    return FakeGenerationClient()


@pytest.fixture
def persistence():
    return FakePersistenceClient()


@pytest.fixture
def clock():
    """Deterministic clock advancing one second per reading."""
    start = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    ticks = itertools.count()
    return lambda: start + timedelta(seconds=next(ticks))
