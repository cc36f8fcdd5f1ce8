from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ValidationError

from app.core.errors import InvalidInput
from app.core.rate_limit import enforce_rate_limit
from app.core.security import Identity, require_identity
from app.schemas.job_ad import AnalysisResult, AnalyzeTextRequest, AnalyzeUrlRequest, ErrorResponse
from app.services.job_ad_service import JobAdAnalyzer

router = APIRouter()

_ERRORS = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_analyzer(request: Request) -> JobAdAnalyzer:
    return request.app.state.analyzer


async def _read_payload(request: Request, model: type[BaseModel]) -> Any:
    # The body is read only after the bearer token has been verified.
    raw = await request.body()
    if not raw:
        return model()
    try:
        return model.model_validate(json.loads(raw))
    except (ValueError, ValidationError) as exc:
        raise InvalidInput("Request body must be a JSON object.") from exc


@router.post("/analyze-job-ad", response_model=AnalysisResult, responses=_ERRORS)
async def analyze_job_ad(
    request: Request,
    identity: Identity = Depends(require_identity),
    _: None = Depends(enforce_rate_limit),
    analyzer: JobAdAnalyzer = Depends(get_analyzer),
):
    payload = await _read_payload(request, AnalyzeTextRequest)
    return await analyzer.analyze_text(payload.jobText)


@router.post("/analyze-job-ad-url", response_model=AnalysisResult, responses=_ERRORS)
async def analyze_job_ad_url(
    request: Request,
    identity: Identity = Depends(require_identity),
    _: None = Depends(enforce_rate_limit),
    analyzer: JobAdAnalyzer = Depends(get_analyzer),
):
    payload = await _read_payload(request, AnalyzeUrlRequest)
    return await analyzer.analyze_url(payload.url)
