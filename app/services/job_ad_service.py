from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from app.ai.factory import get_ai_client
from app.ai.types import AIClient, SchemaLevel
from app.core.config import Settings
from app.schemas.job_ad import AnalysisResult
from app.services.job_ad_input import AnalysisRequest, from_text, from_url
from app.services.job_ad_prompt import build_prompt
from app.services.job_ad_resolver import resolve

logger = logging.getLogger(__name__)


class JobAdAnalyzer:
    """Runs one analysis request end to end.

    Holds only read-only collaborators, so a single instance serves
    concurrent requests.
    """

    def __init__(
        self,
        settings: Settings,
        ai_client: AIClient | None = None,
        *,
        schema_level: SchemaLevel | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._settings = settings
        self._ai_client = ai_client
        self._schema_level = schema_level or SchemaLevel(settings.ai_schema_level)
        self._transport = transport

    @property
    def schema_level(self) -> SchemaLevel:
        return self._schema_level

    def _client(self) -> AIClient:
        if self._ai_client is None:
            self._ai_client = get_ai_client(self._settings)
        return self._ai_client

    async def analyze_text(self, raw: Any) -> AnalysisResult:
        return await self.run(from_text(raw))

    async def analyze_url(self, url: Any) -> AnalysisResult:
        request = await from_url(
            url,
            max_chars=self._settings.fetch_max_chars,
            timeout_s=self._settings.fetch_timeout_s,
            user_agent=self._settings.fetch_user_agent,
            transport=self._transport,
        )
        return await self.run(request)

    async def run(self, request: AnalysisRequest) -> AnalysisResult:
        started = time.perf_counter()
        envelope = build_prompt(request)
        output = await self._client().complete(envelope.to_messages(), schema_level=self._schema_level)
        result = resolve(output, log_max_chars=self._settings.log_text_max_chars)
        logger.info(
            "job_ad_analyzed source=%s chars=%s schema_level=%s scored=%s latency_ms=%s",
            request.source_kind.value,
            len(request.content),
            self._schema_level.value,
            result.score is not None,
            int((time.perf_counter() - started) * 1000),
        )
        return result

    async def aclose(self) -> None:
        if self._ai_client is not None:
            await self._ai_client.aclose()
