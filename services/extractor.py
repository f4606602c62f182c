from __future__ import annotations

import logging
from typing import List

from models.friend_batch import friends_json_schema, validate_sequence
from models.friend_record import FriendRecord
from ports.llm import StructuredLLMPort
from services.errors import ExtractionFailure, SmartImportError
from services.prompt_builder import PROMPT_NAME, build_prompt


logger = logging.getLogger(__name__)

USE_CASE = "friend_extraction"


class FriendExtractor:
    """Turns free text into validated friend records with one LLM call.

    No retries here; callers decide whether to re-run the whole import.
    """

    def __init__(self, llm: StructuredLLMPort) -> None:
        self.llm = llm

    def extract(self, text: str) -> List[FriendRecord]:
        if not text or not text.strip():
            logger.info("Empty input, nothing to extract", extra={"step": "extract", "status": "skipped", "count": 0})
            return []

        prompt = build_prompt(text)
        try:
            payload = self.llm.generate_structured(
                use_case=USE_CASE,
                prompt=prompt,
                schema=friends_json_schema(),
                schema_name="friends_batch",
                prompt_name=PROMPT_NAME,
            )
        except SmartImportError:
            raise
        except Exception as e:
            raise ExtractionFailure(f"text-understanding service failed: {e}", cause=e) from e

        records = validate_sequence(payload)
        logger.info(
            "Extracted %d friend records", len(records),
            extra={"step": "extract", "status": "ok", "count": len(records)},
        )
        return records
