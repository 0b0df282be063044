"""Agents package - LLM-backed helpers using Claude and Gemini."""

from newsdesk.agents.summarizer_agent import (
    ClaudeSummaryClient,
    GeminiSummaryClient,
    SummaryClient,
    Summarizer,
    fallback_summary,
    get_summary_client,
    truncate_summary,
)

__all__ = [
    "Summarizer",
    "SummaryClient",
    "ClaudeSummaryClient",
    "GeminiSummaryClient",
    "get_summary_client",
    "fallback_summary",
    "truncate_summary",
]
