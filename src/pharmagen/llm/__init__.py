"""LLM narrative generation."""

from pharmagen.llm.service import NarrativeService

__all__ = ["NarrativeService"]
