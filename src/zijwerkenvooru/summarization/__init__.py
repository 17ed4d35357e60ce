"""Summary generation for question topics and proposition titles."""
from __future__ import annotations

from .gemini import GeminiSummarizer, SummaryKind
from .pending import SummaryInput, Summarizer, generate_missing_summaries, summary_inputs

__all__ = [
    "GeminiSummarizer",
    "SummaryInput",
    "SummaryKind",
    "Summarizer",
    "generate_missing_summaries",
    "summary_inputs",
]
