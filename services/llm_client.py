from __future__ import annotations

import json
import logging
import re
import time
from typing import Any, Dict, List, Optional

from openai import OpenAI, OpenAIError

from config.llm_routes import ROUTES
from config.settings import Settings, get_settings
from services.errors import ExtractionFailure
from utils.llm_logger import log_call, sha256_text


logger = logging.getLogger(__name__)

_FENCED_JSON = re.compile(r"```(?:json)?\s*\n([\s\S]*?)\n```")


def _decode_json(text: Optional[str]) -> Any:
    """Decode a JSON reply; tolerates a markdown code fence around it."""
    if not text:
        raise ValueError("empty reply")
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        m = _FENCED_JSON.search(text)
        if not m:
            raise
        return json.loads(m.group(1))


class LLMClient:
    """Thin wrapper over the OpenAI SDK: per-use-case routing plus call tracing."""

    provider = "openai"

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()
        if not self.settings.openai_api_key:
            raise RuntimeError("OPENAI_API_KEY is required for friend extraction")

    def _client(self) -> OpenAI:
        return OpenAI(
            api_key=self.settings.openai_api_key,
            base_url=self.settings.openai_base_url,
            timeout=self.settings.request_timeout_seconds,
        )

    def generate_structured(
        self,
        *,
        use_case: str,
        prompt: str,
        schema: Dict[str, Any],
        schema_name: str,
        prompt_name: Optional[str] = None,
    ) -> Any:
        route = ROUTES.get(use_case, {})
        provider = route.get("provider", self.provider)
        if provider != self.provider:
            raise NotImplementedError(f"Provider not implemented: {provider}")
        model = route.get("model") or self.settings.openai_model
        operation = route.get("operation", use_case)

        messages: List[Dict[str, str]] = []
        if route.get("system_prompt"):
            messages.append({"role": "system", "content": route["system_prompt"]})
        messages.append({"role": "user", "content": prompt})

        kwargs: Dict[str, Any] = {
            "model": model,
            "messages": messages,
            "response_format": {
                "type": "json_schema",
                "json_schema": {"name": schema_name, "schema": schema},
            },
        }
        # Only pass temperature when the route sets one (some models reject it)
        if route.get("temperature") is not None:
            kwargs["temperature"] = route["temperature"]

        def _trace(status: str, duration_ms: int, error: Optional[str] = None, usage: Optional[Dict[str, Any]] = None) -> None:
            log_call(
                caller=f"llm_client.generate_structured:{use_case}",
                provider=provider,
                model=model,
                operation=operation,
                prompt_name=prompt_name,
                prompt_hash=sha256_text(prompt),
                duration_ms=duration_ms,
                status=status,
                error=error,
                usage=usage,
            )

        t0 = time.monotonic()
        try:
            resp = self._client().chat.completions.create(**kwargs)
        except OpenAIError as e:
            dt_ms = int((time.monotonic() - t0) * 1000)
            _trace("error", dt_ms, error=str(e))
            logger.error(
                "LLM call failed",
                extra={"step": "extract", "status": "error", "duration_ms": dt_ms, "error": type(e).__name__},
            )
            raise ExtractionFailure(f"{provider} call failed: {e}", cause=e) from e
        dt_ms = int((time.monotonic() - t0) * 1000)

        usage = getattr(resp, "usage", None)
        usage_obj = None
        if usage is not None:
            usage_obj = {
                "prompt_tokens": getattr(usage, "prompt_tokens", None),
                "completion_tokens": getattr(usage, "completion_tokens", None),
                "total_tokens": getattr(usage, "total_tokens", None),
            }

        message = resp.choices[0].message if resp.choices else None
        if message is None or getattr(message, "refusal", None):
            reason = getattr(message, "refusal", None) or "no choices in reply"
            _trace("error", dt_ms, error=reason, usage=usage_obj)
            raise ExtractionFailure(f"{provider} returned no content: {reason}")

        try:
            data = _decode_json(message.content)
        except ValueError as e:
            # json.JSONDecodeError is a ValueError subclass
            _trace("error", dt_ms, error=f"malformed JSON: {e}", usage=usage_obj)
            raise ExtractionFailure(f"{provider} returned malformed JSON", cause=e) from e

        _trace("ok", dt_ms, usage=usage_obj)
        logger.debug("LLM call ok", extra={"step": "extract", "status": "ok", "duration_ms": dt_ms})
        return data
