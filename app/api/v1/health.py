from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()

LIVENESS_TEXT = "Job ad analyzer is running."


@router.get(
    "/health",
    summary="Health Check",
    description="Static liveness probe.",
    response_class=PlainTextResponse,
)
async def health_check():
    return LIVENESS_TEXT
