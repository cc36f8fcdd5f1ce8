import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.middleware import SlowAPIMiddleware
import sentry_sdk

from app.api.v1.auth import router as auth_router
from app.api.v1.health import router as health_router
from app.api.v1.job_ads import router as job_ads_router
from app.core.config import Settings, settings as default_settings
from app.core.cors import cors_allow_credentials, cors_allow_origin_regex, cors_allowed_origins
from app.core.error_handlers import register_error_handlers
from app.core.lifespan import lifespan
from app.core.rate_limit import build_limiter
from app.core.security import TokenAuthority
from app.services.job_ad_service import JobAdAnalyzer

logging.basicConfig(level=default_settings.log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")
if default_settings.sentry_dsn:
    sentry_sdk.init(dsn=default_settings.sentry_dsn)


def create_app(
    settings: Settings | None = None,
    *,
    analyzer: JobAdAnalyzer | None = None,
    token_authority: TokenAuthority | None = None,
) -> FastAPI:
    settings = settings or default_settings
    app = FastAPI(title="Job Ad Analyzer API", version="0.1.0", lifespan=lifespan)

    app.state.settings = settings
    app.state.analyzer = analyzer or JobAdAnalyzer(settings)
    app.state.token_authority = token_authority or TokenAuthority(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_allowed_origins(settings),
        allow_origin_regex=cors_allow_origin_regex(settings),
        allow_credentials=cors_allow_credentials(settings),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.limiter = build_limiter(settings)
    app.add_middleware(SlowAPIMiddleware)
    register_error_handlers(app)

    app.include_router(health_router, prefix="/api", tags=["Health"])
    app.include_router(auth_router, prefix="/api", tags=["Auth"])
    app.include_router(job_ads_router, prefix="/api", tags=["Job Ads"])
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=default_settings.port)
