"""Error types raised by the smart-import pipeline, tagged with the stage that failed."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class PipelineStage(str, Enum):
    """Pipeline stage identifiers for error reporting."""
    EXTRACT = "extract"
    VALIDATE = "validate"
    NORMALIZE = "normalize"
    PERSIST = "persist"


class SmartImportError(Exception):
    """Pipeline error with stage context."""

    stage: PipelineStage = PipelineStage.EXTRACT

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.message = message
        self.cause = cause
        super().__init__(f"[{self.stage.value}] {message}")


class ExtractionFailure(SmartImportError):
    """The text-understanding service call did not complete (transport, auth, quota, malformed reply)."""

    stage = PipelineStage.EXTRACT


class SchemaViolation(SmartImportError):
    """The service answered, but the payload does not match the friend record schema."""

    stage = PipelineStage.VALIDATE

    def __init__(self, message: str, payload: Any = None, errors: Optional[list] = None, cause: Optional[BaseException] = None):
        self.payload = payload
        self.errors = errors or []
        super().__init__(message, cause=cause)


class IncompleteRecord(SmartImportError):
    """A required field is missing or blank at the last gate before storage."""

    stage = PipelineStage.NORMALIZE

    def __init__(self, field: str, index: int):
        self.field = field
        self.index = index
        super().__init__(f"record #{index} has no value for required field '{field}'")


class PersistenceFailure(SmartImportError):
    """The batch insert failed; nothing from the batch was stored."""

    stage = PipelineStage.PERSIST
