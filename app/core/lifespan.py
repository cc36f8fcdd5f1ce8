from contextlib import asynccontextmanager
import logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    settings = app.state.settings
    logger.info(
        "job_ad_analyzer_started port=%s provider=%s model=%s schema_level=%s variant=%s auth_configured=%s",
        settings.port,
        settings.ai_provider,
        settings.ai_model,
        settings.ai_schema_level,
        settings.openai_api_variant,
        app.state.token_authority.configured,
    )
    yield
    try:
        await app.state.analyzer.aclose()
    except Exception as exc:  # pragma: no cover - shutdown must finish
        logger.warning("ai_client_close_failed: %s", exc)
    logger.info("job_ad_analyzer_stopped")
