from app.ai.config import load_ai_config
from app.ai.types import AIClient
from app.core.config import Settings

from app.ai.providers.openai_provider import OpenAIProvider


def get_ai_client(settings: Settings) -> AIClient:
    cfg = load_ai_config(settings)

    if cfg.provider == "openai":
        return OpenAIProvider(
            model=cfg.model,
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
            timeout_s=settings.openai_timeout_s,
            temperature=settings.ai_temperature,
            api_variant=cfg.api_variant,
        )

    raise ValueError(f"Unsupported AI_PROVIDER='{cfg.provider}'")
