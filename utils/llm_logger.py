from __future__ import annotations

import hashlib
import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from config.settings import get_settings


logger = logging.getLogger(__name__)


def sha256_text(text: Optional[str]) -> Optional[str]:
    if not text:
        return None
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def log_call(
    *,
    caller: str,
    provider: str,
    model: Optional[str],
    operation: str,
    prompt_name: Optional[str] = None,
    prompt_hash: Optional[str] = None,
    duration_ms: Optional[int] = None,
    status: str = "ok",
    error: Optional[str] = None,
    usage: Optional[Dict[str, Any]] = None,
    extras: Optional[Dict[str, Any]] = None,
) -> None:
    """Append one JSON line per LLM call to the trace file when LLM_TRACE is on.

    Trace write failures are logged and never interrupt the caller.
    """
    # Re-read env each call; tests toggle LLM_TRACE between calls
    get_settings.cache_clear()
    settings = get_settings()
    if not settings.llm_trace:
        return

    entry: Dict[str, Any] = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "caller": caller,
        "provider": provider,
        "model": model,
        "operation": operation,
        "prompt_name": prompt_name,
        "prompt_hash": prompt_hash,
        "duration_ms": duration_ms,
        "status": status,
        "error": error,
        "usage": usage or {},
    }
    run_id = os.getenv("RUN_ID")
    if run_id:
        entry["run_id"] = run_id
    if extras:
        entry["extras"] = extras

    log_path = Path(settings.llm_log_path)
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        with log_path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(entry, ensure_ascii=False) + "\n")
    except OSError as e:
        logger.warning("LLM trace write failed: %s", e, extra={"step": "trace", "status": "error"})


def usage_for_run(run_id: str) -> Dict[str, Dict[str, int]]:
    """Sum calls and total tokens per provider for one RUN_ID from the trace file."""
    totals: Dict[str, Dict[str, int]] = {}
    log_path = Path(get_settings().llm_log_path)
    if not log_path.exists():
        return totals
    with log_path.open("r", encoding="utf-8") as f:
        for line in f:
            try:
                entry = json.loads(line)
            except json.JSONDecodeError:
                continue
            if not isinstance(entry, dict) or entry.get("run_id") != run_id:
                continue
            bucket = totals.setdefault(entry.get("provider") or "unknown", {"calls": 0, "tokens": 0})
            bucket["calls"] += 1
            bucket["tokens"] += int((entry.get("usage") or {}).get("total_tokens") or 0)
    return totals
