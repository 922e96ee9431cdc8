from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from mindpath.config import (
    get_openai_api_key,
    get_openai_max_retries,
    get_openai_model,
    get_openai_proxy_url,
    get_openai_timeout_seconds,
)


class Settings(BaseModel):
    OPENAI_API_KEY: str
    OPENAI_PROXY_URL: str | None
    OPENAI_MODEL: str
    OPENAI_TIMEOUT_SECONDS: float
    OPENAI_MAX_RETRIES: int

    model_config = ConfigDict(frozen=True)


def load_settings() -> Settings:
    return Settings(
        OPENAI_API_KEY=get_openai_api_key(),
        OPENAI_PROXY_URL=get_openai_proxy_url(),
        OPENAI_MODEL=get_openai_model(),
        OPENAI_TIMEOUT_SECONDS=get_openai_timeout_seconds(),
        OPENAI_MAX_RETRIES=get_openai_max_retries(),
    )


settings = load_settings()
