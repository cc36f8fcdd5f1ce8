from __future__ import annotations

import codecs
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx

from app.core.errors import FetchFailed, InvalidInput, ReadFailed

logger = logging.getLogger(__name__)

DEFAULT_MAX_CHARS = 50_000
DIRECT_TEXT_LABEL = "Direkt eingefügter Text der Stellenanzeige"

_URL_RE = re.compile(r"^https?://", re.IGNORECASE)
_DIRECT_TEXT_HINT = "Please paste the job ad text directly instead."


class SourceKind(str, Enum):
    DIRECT_TEXT = "direct_text"
    FETCHED_URL = "fetched_url"


@dataclass(frozen=True)
class AnalysisRequest:
    content: str
    source_label: str
    source_kind: SourceKind


def url_source_label(url: str) -> str:
    return f"Webseite: {url}"


def from_text(raw: Any) -> AnalysisRequest:
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidInput("jobText is missing or invalid.")
    return AnalysisRequest(
        content=raw.strip(),
        source_label=DIRECT_TEXT_LABEL,
        source_kind=SourceKind.DIRECT_TEXT,
    )


def validate_url(url: Any) -> str:
    if not isinstance(url, str) or not url.strip():
        raise InvalidInput("url is missing or invalid.")
    candidate = url.strip()
    if not _URL_RE.match(candidate):
        raise InvalidInput("Please provide a full URL starting with http:// or https://.")
    return candidate


async def _read_capped_text(response: httpx.Response, max_chars: int) -> tuple[str, bool]:
    """Decode the body strictly, reading no further than ``max_chars`` characters.

    Returns the text and whether it was cut at the limit.
    """
    decoder = codecs.getincrementaldecoder(response.encoding or "utf-8")(errors="strict")
    parts: list[str] = []
    collected = 0
    async for chunk in response.aiter_bytes():
        text = decoder.decode(chunk)
        parts.append(text)
        collected += len(text)
        if collected >= max_chars:
            body = "".join(parts)
            return body[:max_chars], len(body) > max_chars
    parts.append(decoder.decode(b"", final=True))
    return "".join(parts), False


async def from_url(
    url: Any,
    *,
    max_chars: int = DEFAULT_MAX_CHARS,
    timeout_s: float = 15.0,
    user_agent: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AnalysisRequest:
    target = validate_url(url)
    headers = {
        "Accept": "text/html,application/xhtml+xml,text/plain;q=0.9,*/*;q=0.8",
        "Accept-Language": "de-DE,de;q=0.9,en;q=0.8",
    }
    if user_agent:
        headers["User-Agent"] = user_agent

    async with httpx.AsyncClient(
        timeout=timeout_s,
        follow_redirects=True,
        headers=headers,
        transport=transport,
    ) as client:
        try:
            async with client.stream("GET", target) as response:
                if not response.is_success:
                    logger.warning("job_ad_fetch_status url=%s status=%s", target, response.status_code)
                    raise FetchFailed(
                        f"The page could not be loaded (HTTP {response.status_code}). {_DIRECT_TEXT_HINT}",
                        upstream_status=response.status_code,
                    )
                try:
                    body, truncated = await _read_capped_text(response, max_chars)
                except (httpx.HTTPError, UnicodeDecodeError, LookupError) as exc:
                    logger.warning("job_ad_read_failed url=%s: %s", target, exc)
                    raise ReadFailed(f"The page content could not be read. {_DIRECT_TEXT_HINT}") from exc
        except httpx.HTTPError as exc:
            logger.warning("job_ad_fetch_failed url=%s: %s", target, exc)
            raise FetchFailed(f"The page could not be loaded. {_DIRECT_TEXT_HINT}") from exc

    if not body.strip():
        raise ReadFailed(f"The page did not contain any readable text. {_DIRECT_TEXT_HINT}")

    if truncated:
        logger.info("job_ad_fetch_truncated url=%s max_chars=%s", target, max_chars)

    return AnalysisRequest(
        content=body,
        source_label=url_source_label(target),
        source_kind=SourceKind.FETCHED_URL,
    )
