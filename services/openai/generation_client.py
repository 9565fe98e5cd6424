"""Single-shot text generation on top of the OpenAI Responses API.

Every call is one request: no retries and no streaming. Failures of any kind
(network, provider, timeout, empty output) come back as a failed
`GenerationResult` instead of an exception so callers can branch on them
explicitly.
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass, field
from typing import Dict, Optional

from openai import AsyncOpenAI

from services.openai.response_parser import extract_text, extract_usage

LOGGER = logging.getLogger(__name__)
DEFAULT_MODEL = "gpt-5"
WEB_SEARCH_TOOL = {"type": "web_search_preview"}


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of one generation call: either text or a failure reason."""

    ok: bool
    text: str = ""
    error: Optional[str] = None
    usage: Dict[str, Optional[int]] = field(default_factory=dict)
    latency: float = 0.0

    @classmethod
    def success(cls, text: str, *, usage: Optional[Dict[str, Optional[int]]] = None, latency: float = 0.0) -> "GenerationResult":
        return cls(ok=True, text=text, usage=usage or {}, latency=latency)

    @classmethod
    def failure(cls, reason: str, *, latency: float = 0.0) -> "GenerationResult":
        return cls(ok=False, error=reason, latency=latency)


class GenerationClient:
    """Send one prompt to the model and return its text."""

    def __init__(self, client: AsyncOpenAI, model: Optional[str] = None) -> None:
        if client is None:
            raise ValueError("OpenAI AsyncOpenAI client is required.")
        self.client = client
        self.model = model or os.getenv("OPENAI_MODEL") or DEFAULT_MODEL

    async def invoke(self, prompt: str, allow_internet_context: bool = False) -> GenerationResult:
        """Generate text for `prompt`.

        Args:
            prompt: Fully rendered prompt text.
            allow_internet_context: Attach the web search tool so the model may
                ground its answer in live web content.

        Returns:
            A successful `GenerationResult` with non-empty text, or a failed one.

        Raises:
            ValueError: If `prompt` is empty.
        """
        if not prompt or not prompt.strip():
            raise ValueError("prompt must be a non-empty string.")

        request = {
            "model": self.model,
            "input": [
                {
                    "type": "message",
                    "role": "user",
                    "content": [{"type": "input_text", "text": prompt}],
                }
            ],
        }
        if allow_internet_context:
            request["tools"] = [WEB_SEARCH_TOOL]

        start = time.time()
        try:
            response = await self.client.responses.create(**request)
        except Exception as exc:
            latency = time.time() - start
            LOGGER.error("OpenAI Responses API error after %.3fs: %s", latency, exc)
            return GenerationResult.failure(f"{type(exc).__name__}: {exc}", latency=latency)

        latency = time.time() - start
        text = extract_text(response).strip()
        if not text:
            LOGGER.error("OpenAI response contained no output text.")
            return GenerationResult.failure("Empty response from generation service.", latency=latency)

        usage = extract_usage(response)
        LOGGER.info(
            "Generation latency: %.3fs (input_tokens=%s, output_tokens=%s)",
            latency,
            usage.get("input_tokens"),
            usage.get("output_tokens"),
        )
        return GenerationResult.success(text, usage=usage, latency=latency)
