from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

_ROOT_DIR = Path(__file__).resolve().parents[2]
_ENV_PATH = _ROOT_DIR / ".env"
load_dotenv(_ENV_PATH)

_DEFAULT_CORS_ORIGINS = (
    "http://localhost:8080,"
    "http://localhost:3000,"
    "http://127.0.0.1:8080,"
    "http://127.0.0.1:3000"
)


def _get_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def get_database_url() -> str:
    return os.getenv("DATABASE_URL", f"sqlite:///{_ROOT_DIR / 'mindpath.db'}")


def get_celery_broker_url() -> str:
    return os.getenv("CELERY_BROKER_URL", "redis://localhost:6379/0")


def get_celery_result_backend() -> str:
    return os.getenv("CELERY_RESULT_BACKEND", "redis://localhost:6379/1")


def get_celery_task_always_eager() -> bool:
    return _get_bool("CELERY_TASK_ALWAYS_EAGER")


def get_openai_api_key() -> str:
    return os.getenv("OPENAI_API_KEY", "")


def get_openai_proxy_url() -> str | None:
    return os.getenv("OPENAI_PROXY_URL") or None


def get_openai_model() -> str:
    return os.getenv("OPENAI_MODEL", "gpt-4o-mini")


def get_openai_timeout_seconds() -> float:
    return float(os.getenv("OPENAI_TIMEOUT_SECONDS", "60"))


def get_openai_max_retries() -> int:
    return int(os.getenv("OPENAI_MAX_RETRIES", "0"))


def get_auth0_domain() -> str:
    return os.getenv("AUTH0_DOMAIN", "")


def get_auth0_audience() -> str:
    return os.getenv("AUTH0_AUDIENCE", "")


def get_cors_origins() -> list[str]:
    raw = os.getenv("CORS_ORIGINS", _DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def get_auto_analysis_threshold() -> int:
    return int(os.getenv("AUTO_ANALYSIS_THRESHOLD", "10"))


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()
