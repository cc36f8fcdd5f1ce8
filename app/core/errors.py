from __future__ import annotations

from fastapi import status


class JobAdError(RuntimeError):
    """Base error for the analysis pipeline.

    ``str(exc)`` is the caller-facing message; anything diagnostic stays on
    the instance and is only logged.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "internal_error"

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


class InvalidInput(JobAdError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_input"


class Unauthenticated(JobAdError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthenticated"


class IssuerNotConfigured(JobAdError):
    code = "issuer_not_configured"


class FetchFailed(JobAdError):
    code = "fetch_failed"

    def __init__(self, message: str, *, upstream_status: int | None = None):
        super().__init__(message)
        self.upstream_status = upstream_status


class ReadFailed(JobAdError):
    code = "read_failed"


class UnparsableOutput(JobAdError):
    code = "unparsable_output"

    def __init__(self, message: str, *, raw_text: str = ""):
        super().__init__(message)
        self.raw_text = raw_text


class RemoteCapabilityError(JobAdError):
    code = "remote_capability_error"


class RateLimited(JobAdError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    code = "rate_limited"
