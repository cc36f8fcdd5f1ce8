"""Locate the generated text inside an SDK response.

The text sits in a different place depending on which OpenAI API produced
the response, so the strategies below are tried in order and the first
non-empty hit wins. Responses may be SDK objects or plain dicts.
"""
from __future__ import annotations

import json
from typing import Any, Callable


def _field(obj: Any, name: str) -> Any:
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def _first(items: Any) -> Any:
    if isinstance(items, (list, tuple)) and items:
        return items[0]
    return None


def _from_output_text(response: Any) -> str | None:
    text = _field(response, "output_text")
    return text if isinstance(text, str) else None


def _from_output_items(response: Any) -> str | None:
    output = _field(response, "output")
    if not isinstance(output, (list, tuple)):
        return None
    parts: list[str] = []
    for item in output:
        content = _field(item, "content")
        if not isinstance(content, (list, tuple)):
            continue
        for part in content:
            text = _field(part, "text")
            if isinstance(text, str) and text:
                parts.append(text)
    return "".join(parts) or None


def _from_chat_content(response: Any) -> str | None:
    message = _field(_first(_field(response, "choices")), "message")
    content = _field(message, "content")
    if isinstance(content, str):
        return content
    # Some gateways return content as a list of typed parts.
    if isinstance(content, (list, tuple)):
        texts = [_field(part, "text") for part in content]
        return "".join(t for t in texts if isinstance(t, str)) or None
    return None


def _from_chat_parsed(response: Any) -> str | None:
    message = _field(_first(_field(response, "choices")), "message")
    parsed = _field(message, "parsed")
    if parsed is None:
        return None
    if hasattr(parsed, "model_dump"):
        parsed = parsed.model_dump()
    try:
        return json.dumps(parsed, ensure_ascii=False)
    except (TypeError, ValueError):
        return None


EXTRACTION_STRATEGIES: tuple[Callable[[Any], str | None], ...] = (
    _from_output_text,
    _from_output_items,
    _from_chat_content,
    _from_chat_parsed,
)


def extract_output_text(response: Any) -> str:
    for strategy in EXTRACTION_STRATEGIES:
        text = strategy(response)
        if text and text.strip():
            return text
    return ""
