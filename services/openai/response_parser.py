"""Helpers to pull text and usage out of Responses API results."""

from typing import Any, Dict, Optional


def extract_text(response: Any) -> str:
    """Return the first output_text entry, falling back to `output_text`."""
    for item in getattr(response, "output", None) or []:
        if getattr(item, "type", None) != "message":
            continue
        for content in getattr(item, "content", None) or []:
            content_type = content.get("type") if isinstance(content, dict) else getattr(content, "type", None)
            if content_type != "output_text":
                continue
            text = content.get("text") if isinstance(content, dict) else getattr(content, "text", None)
            if text:
                return text
    return getattr(response, "output_text", "") or ""


def extract_usage(response: Any) -> Dict[str, Optional[int]]:
    """Return token usage information from the response, if present."""
    usage = getattr(response, "usage", None)
    return {
        "input_tokens": getattr(usage, "input_tokens", None) if usage else None,
        "output_tokens": getattr(usage, "output_tokens", None) if usage else None,
    }
