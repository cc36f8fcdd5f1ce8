from dataclasses import dataclass

from app.ai.types import SchemaLevel
from app.core.config import Settings


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    schema_level: SchemaLevel
    api_variant: str


def load_ai_config(settings: Settings) -> AIConfig:
    return AIConfig(
        provider=settings.ai_provider,
        model=settings.ai_model,
        schema_level=SchemaLevel(settings.ai_schema_level),
        api_variant=settings.openai_api_variant,
    )
