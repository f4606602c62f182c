from __future__ import annotations

from typing import Any, Dict, Optional, Protocol


class StructuredLLMPort(Protocol):
    def generate_structured(
        self,
        *,
        use_case: str,
        prompt: str,
        schema: Dict[str, Any],
        schema_name: str,
        prompt_name: Optional[str] = None,
    ) -> Any:
        """Return the decoded JSON reply constrained by `schema`, or raise."""
        ...
