from __future__ import annotations

import logging
import time
from typing import Any, Optional, Sequence

from openai import AsyncOpenAI, OpenAIError

from app.ai.extract import extract_output_text
from app.ai.types import ChatMessage, RawModelOutput, SchemaLevel
from app.core.errors import RemoteCapabilityError
from app.schemas.job_ad import ANALYSIS_RESULT_JSON_SCHEMA, ANALYSIS_SCHEMA_NAME

logger = logging.getLogger(__name__)


class OpenAIProvider:
    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: float = 60.0,
        temperature: float = 0.2,
        api_variant: str = "chat",
        client: Any = None,
    ):
        self._model = model
        self._temperature = temperature
        self._api_variant = api_variant
        if client is not None:
            self._client = client
            return

        key = (api_key or "").strip()
        if not key:
            raise RemoteCapabilityError("OPENAI_API_KEY is missing")

        # A single attempt per request; failures are surfaced, not retried.
        self._client = AsyncOpenAI(
            api_key=key,
            base_url=base_url or None,
            timeout=timeout_s,
            max_retries=0,
        )

    @property
    def model(self) -> str:
        return self._model

    async def complete(
        self, messages: Sequence[ChatMessage], *, schema_level: SchemaLevel
    ) -> RawModelOutput:
        started = time.perf_counter()
        try:
            if self._api_variant == "responses":
                response = await self._create_response(messages, schema_level)
            else:
                response = await self._create_chat_completion(messages, schema_level)
        except OpenAIError as exc:
            logger.warning(
                "openai_call_failed model=%s variant=%s schema_level=%s: %s",
                self._model,
                self._api_variant,
                schema_level.value,
                exc,
            )
            raise RemoteCapabilityError("The AI service could not complete the analysis.") from exc

        text = extract_output_text(response)
        logger.info(
            "openai_call_ok model=%s variant=%s schema_level=%s latency_ms=%s chars=%s",
            self._model,
            self._api_variant,
            schema_level.value,
            int((time.perf_counter() - started) * 1000),
            len(text),
        )
        return RawModelOutput(text=text)

    async def _create_chat_completion(
        self, messages: Sequence[ChatMessage], schema_level: SchemaLevel
    ) -> Any:
        payload = [{"role": m.role, "content": m.content} for m in messages]
        if schema_level is SchemaLevel.CONSTRAINED:
            response_format: dict[str, Any] = {
                "type": "json_schema",
                "json_schema": {
                    "name": ANALYSIS_SCHEMA_NAME,
                    "strict": True,
                    "schema": ANALYSIS_RESULT_JSON_SCHEMA,
                },
            }
        else:
            response_format = {"type": "json_object"}

        return await self._client.chat.completions.create(
            model=self._model,
            messages=payload,
            temperature=self._temperature,
            response_format=response_format,
        )

    async def _create_response(
        self, messages: Sequence[ChatMessage], schema_level: SchemaLevel
    ) -> Any:
        instructions = "\n\n".join(m.content for m in messages if m.role == "system")
        turns = [{"role": m.role, "content": m.content} for m in messages if m.role != "system"]
        if schema_level is SchemaLevel.CONSTRAINED:
            text_format: dict[str, Any] = {
                "type": "json_schema",
                "name": ANALYSIS_SCHEMA_NAME,
                "strict": True,
                "schema": ANALYSIS_RESULT_JSON_SCHEMA,
            }
        else:
            text_format = {"type": "json_object"}

        return await self._client.responses.create(
            model=self._model,
            instructions=instructions or None,
            input=turns,
            temperature=self._temperature,
            text={"format": text_format},
        )

    async def aclose(self) -> None:
        close = getattr(self._client, "close", None)
        if close is not None:
            await close()
