from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

ANALYSIS_SCHEMA_NAME = "job_ad_analysis"

SCORE_FIELDS: tuple[str, ...] = (
    "overall",
    "clarity",
    "attractiveness",
    "structure",
    "social_media_effectiveness",
)
TEXT_FIELDS: tuple[str, ...] = ("summary", "improvedAd")
LIST_FIELDS: tuple[str, ...] = ("strengths", "issues", "suggestions")

_NULLABLE_NUMBER: dict[str, Any] = {"type": ["number", "null"], "minimum": 0, "maximum": 100}
_STRING_LIST: dict[str, Any] = {"type": "array", "items": {"type": "string"}}

# Strict structured-output schema: every property required, no extras.
ANALYSIS_RESULT_JSON_SCHEMA: dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "required": ["summary", "strengths", "issues", "suggestions", "improvedAd", "score"],
    "properties": {
        "summary": {"type": "string"},
        "strengths": _STRING_LIST,
        "issues": _STRING_LIST,
        "suggestions": _STRING_LIST,
        "improvedAd": {"type": "string"},
        "score": {
            "anyOf": [
                {
                    "type": "object",
                    "additionalProperties": False,
                    "required": list(SCORE_FIELDS),
                    "properties": {name: _NULLABLE_NUMBER for name in SCORE_FIELDS},
                },
                {"type": "null"},
            ]
        },
    },
}


class AnalysisScore(BaseModel):
    overall: float | None = None
    clarity: float | None = None
    attractiveness: float | None = None
    structure: float | None = None
    social_media_effectiveness: float | None = None


class AnalysisResult(BaseModel):
    summary: str = ""
    strengths: list[str] = Field(default_factory=list)
    issues: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    improvedAd: str = ""
    score: AnalysisScore | None = None


# Fields stay untyped; type and emptiness checks belong to the input normalizer.
class AnalyzeTextRequest(BaseModel):
    jobText: Any = None


class AnalyzeUrlRequest(BaseModel):
    url: Any = None


class TokenRequest(BaseModel):
    username: str = ""
    password: str = ""


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_at: datetime


class ErrorResponse(BaseModel):
    error: str
