from fastapi import APIRouter, Depends

from app.core.security import TokenAuthority, get_token_authority
from app.schemas.job_ad import ErrorResponse, TokenRequest, TokenResponse

router = APIRouter()


@router.post(
    "/auth/token",
    response_model=TokenResponse,
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def issue_token(
    payload: TokenRequest,
    authority: TokenAuthority = Depends(get_token_authority),
):
    issued = authority.issue(payload.username, payload.password)
    return TokenResponse(token=issued.token, expires_at=issued.expires_at)
