"""Turn raw model text into the canonical analysis record.

Fields are defaulted one by one instead of rejecting the whole record, so
output that drifts from the requested schema still yields a complete
``AnalysisResult``. Only text that cannot be read as a JSON object at all
raises ``UnparsableOutput``.
"""
from __future__ import annotations

import json
import logging
import math
import re
from typing import Any

from app.ai.types import RawModelOutput
from app.core.errors import UnparsableOutput
from app.schemas.job_ad import (
    LIST_FIELDS,
    SCORE_FIELDS,
    TEXT_FIELDS,
    AnalysisResult,
    AnalysisScore,
)

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^```(?:json|JSON)?\s*(.*?)\s*```$", re.DOTALL)
_DECODER = json.JSONDecoder()

UNPARSABLE_MESSAGE = "The AI response could not be read as JSON."


def _loads_object(candidate: str) -> dict[str, Any] | None:
    try:
        parsed = json.loads(candidate)
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


def _first_embedded_object(text: str) -> dict[str, Any] | None:
    idx = text.find("{")
    while idx != -1:
        try:
            parsed, _ = _DECODER.raw_decode(text, idx)
        except ValueError:
            parsed = None
        if isinstance(parsed, dict):
            return parsed
        idx = text.find("{", idx + 1)
    return None


def parse_object(text: str) -> dict[str, Any]:
    stripped = (text or "").strip()
    parsed = _loads_object(stripped) if stripped else None
    if parsed is None:
        fenced = _FENCE_RE.match(stripped)
        if fenced:
            parsed = _loads_object(fenced.group(1))
    if parsed is None:
        parsed = _first_embedded_object(stripped)
    if parsed is None:
        raise UnparsableOutput(UNPARSABLE_MESSAGE, raw_text=text or "")
    return parsed


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _as_string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def _as_score_value(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        as_float = float(value)
    except OverflowError:
        return None
    if not math.isfinite(as_float):
        return None
    return value


def _as_score(value: Any) -> AnalysisScore | None:
    if not isinstance(value, dict):
        return None
    return AnalysisScore(**{name: _as_score_value(value.get(name)) for name in SCORE_FIELDS})


def resolve(output: RawModelOutput, *, log_max_chars: int = 800) -> AnalysisResult:
    try:
        data = parse_object(output.text)
    except UnparsableOutput as exc:
        logger.error(
            "job_ad_output_unparsable chars=%s raw=%r",
            len(exc.raw_text),
            exc.raw_text[:log_max_chars],
        )
        raise

    missing = [
        name
        for name in (*TEXT_FIELDS, *LIST_FIELDS, "score")
        if name not in data
    ]
    if missing:
        logger.info("job_ad_output_defaulted fields=%s", ",".join(missing))

    return AnalysisResult(
        summary=_as_text(data.get("summary")),
        strengths=_as_string_list(data.get("strengths")),
        issues=_as_string_list(data.get("issues")),
        suggestions=_as_string_list(data.get("suggestions")),
        improvedAd=_as_text(data.get("improvedAd")),
        score=_as_score(data.get("score")),
    )
