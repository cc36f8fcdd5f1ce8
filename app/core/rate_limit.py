from __future__ import annotations

from fastapi import Request
from limits import parse
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import Settings
from app.core.errors import RateLimited


def build_limiter(settings: Settings) -> Limiter:
    return Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def enforce_rate_limit(request: Request) -> None:
    limiter: Limiter = request.app.state.limiter
    if not limiter.enabled:
        return
    item = parse(request.app.state.settings.rate_limit)
    if not limiter.limiter.hit(item, get_remote_address(request), request.url.path):
        raise RateLimited("Too many requests. Please wait and try again.")
