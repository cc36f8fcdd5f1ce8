from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import Settings
from app.core.errors import IssuerNotConfigured, Unauthenticated

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Identity:
    subject: str
    expires_at: datetime


@dataclass(frozen=True)
class IssuedToken:
    token: str
    expires_at: datetime


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _same(a: str, b: str) -> bool:
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


class TokenAuthority:
    def __init__(self, settings: Settings):
        self._username = settings.auth_username
        self._password = settings.auth_password
        self._secret = settings.jwt_secret
        self._algorithm = settings.jwt_algorithm
        self._ttl = timedelta(minutes=settings.token_ttl_minutes)

    @property
    def configured(self) -> bool:
        return bool(self._username and self._password and self._secret)

    def issue(self, username: str, password: str) -> IssuedToken:
        if not self.configured:
            logger.error("token_issuer_not_configured")
            raise IssuerNotConfigured("Token issuance is not configured on the server.")
        if not (_same(username or "", self._username) and _same(password or "", self._password)):
            logger.info("token_issue_rejected username=%r", username)
            raise Unauthenticated("Invalid username or password.")

        issued_at = _utc_now()
        expires_at = issued_at + self._ttl
        token = jwt.encode(
            {"sub": username, "iat": issued_at, "exp": expires_at},
            self._secret,
            algorithm=self._algorithm,
        )
        return IssuedToken(token=token, expires_at=expires_at)

    def verify(self, token: str | None) -> Identity:
        if not token:
            raise Unauthenticated("Missing bearer token.")
        if not self._secret:
            logger.error("token_verify_without_secret")
            raise Unauthenticated("Invalid or expired token.")
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise Unauthenticated("Token has expired.") from exc
        except jwt.InvalidTokenError as exc:
            logger.info("token_verify_failed: %s", exc)
            raise Unauthenticated("Invalid or expired token.") from exc

        subject = claims.get("sub")
        if not isinstance(subject, str) or not subject:
            raise Unauthenticated("Invalid or expired token.")
        return Identity(
            subject=subject,
            expires_at=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
        )


def get_token_authority(request: Request) -> TokenAuthority:
    return request.app.state.token_authority


def require_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    authority: TokenAuthority = Depends(get_token_authority),
) -> Identity:
    token = credentials.credentials if credentials else None
    return authority.verify(token)
