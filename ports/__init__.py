from .llm import StructuredLLMPort

__all__ = [
    "StructuredLLMPort",
]
