from __future__ import annotations

import os


# Per-use-case LLM routing. Keys are use_case identifiers consumed by
# services/llm_client.py; model can be overridden per route via env.
ROUTES: dict[str, dict] = {
    # Friend extraction from free text (structured JSON output)
    "friend_extraction": {
        "provider": os.getenv("LLM_EXTRACTION_PROVIDER", "openai"),
        "model": os.getenv("OPENAI_MODEL_EXTRACTION"),  # falls back to global OPENAI_MODEL
        "temperature": 0,
        # Logical operation name for logging (not a vendor API name)
        "operation": "friend_extraction",
        "system_prompt": "You extract structured contact records from text and reply with JSON only.",
    },
}
