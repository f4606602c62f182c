from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv


def _load_env() -> None:
    # Centralized dotenv loading; safe if .env missing
    load_dotenv()


@dataclass(frozen=True)
class Settings:
    # Text-understanding service (OpenAI-compatible endpoint)
    openai_api_key: str | None
    openai_base_url: str | None
    openai_model: str
    request_timeout_seconds: int

    # Storage
    db_path: str

    # Runtime
    run_env: str
    log_level: str

    # Logging/tracing
    llm_trace: bool = False
    llm_log_path: str = "logs/llm_calls.jsonl"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    _load_env()
    return Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY"),
        openai_base_url=os.getenv("OPENAI_BASE_URL") or None,
        # MODEL_NAME accepted as an alias for older .env files
        openai_model=os.getenv("OPENAI_MODEL") or os.getenv("MODEL_NAME") or "gpt-4o-mini",
        request_timeout_seconds=int(os.getenv("REQUEST_TIMEOUT", "60")),
        db_path=os.getenv("DB_PATH", "friends.db"),
        run_env=os.getenv("RUN_ENV", "local"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        llm_trace=os.getenv("LLM_TRACE", "false").lower() in ("1", "true", "yes", "on"),
        llm_log_path=os.getenv("LLM_LOG_PATH", "logs/llm_calls.jsonl"),
    )
