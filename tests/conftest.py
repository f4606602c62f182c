from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest


def pytest_configure():
    # Ensure project root is on sys.path for absolute imports like 'services.extractor'
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))
    # Set test environment knobs
    os.environ.setdefault("RUN_ENV", "test")


@pytest.fixture(autouse=True)
def _fresh_settings():
    # Settings are lru_cached; tests change env between cases
    from config.settings import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class FakeLLM:
    """Stands in for the text-understanding service; records every call."""

    def __init__(self, payload: Any = None, error: Optional[BaseException] = None) -> None:
        self.payload = payload if payload is not None else []
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def generate_structured(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def fake_llm():
    return FakeLLM


@pytest.fixture
def db_path(tmp_path):
    from db import schema
    from db.connection import get_connection

    path = tmp_path / "friends.db"
    conn = get_connection(str(path))
    try:
        schema.bootstrap(conn)
    finally:
        conn.close()
    return str(path)
