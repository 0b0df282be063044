"""Summarizer Agent - short article summaries from Claude or Gemini.

Summarization never fails the pipeline: short bodies are kept as they are and
any backend problem falls back to the (truncated) title.
"""

import asyncio
import logging
from typing import Protocol

import anthropic
from google import genai
from google.genai import types
from tenacity import retry, stop_after_attempt, wait_exponential

from newsdesk.config import Settings
from newsdesk.exceptions import SummarizationError

logger = logging.getLogger(__name__)

SUMMARY_INSTRUCTION = (
    "Create a concise 1-2 sentence summary of this news article. "
    "Maximum 150 characters. Focus on the key facts and main point."
)
MAX_SUMMARY_LENGTH = 150
MIN_CONTENT_LENGTH = 100
ELLIPSIS = "..."


def truncate_summary(text: str, limit: int = MAX_SUMMARY_LENGTH) -> str:
    """Cut ``text`` to ``limit`` characters, marking the cut with an ellipsis."""
    if len(text) <= limit:
        return text
    return text[: limit - len(ELLIPSIS)] + ELLIPSIS


def fallback_summary(title: str) -> str:
    return truncate_summary(title)


class SummaryClient(Protocol):
    """Chat-style completion backend used by the Summarizer."""

    async def complete(self, instruction: str, text: str) -> str: ...


class ClaudeSummaryClient:
    """Summaries via the Anthropic Messages API."""

    def __init__(self, api_key: str, model: str, max_tokens: int = 120):
        self.client = anthropic.AsyncAnthropic(api_key=api_key)
        self.model = model
        self.max_tokens = max_tokens

    @retry(
        stop=stop_after_attempt(2),
        wait=wait_exponential(multiplier=1, min=1, max=4),
        reraise=True,
    )
    async def complete(self, instruction: str, text: str) -> str:
        response = await self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            system=instruction,
            messages=[{"role": "user", "content": text}],
        )
        parts = [block.text for block in response.content if block.type == "text"]
        if not parts:
            raise SummarizationError("Claude returned no text content")
        return "".join(parts)


class GeminiSummaryClient:
    """Summaries via Google's Gemini models."""

    def __init__(self, api_key: str, model: str, max_tokens: int = 120):
        self.client = genai.Client(api_key=api_key)
        self.model = model
        self.max_tokens = max_tokens

    @retry(
        stop=stop_after_attempt(2),
        wait=wait_exponential(multiplier=1, min=1, max=4),
        reraise=True,
    )
    async def complete(self, instruction: str, text: str) -> str:
        response = await self.client.aio.models.generate_content(
            model=self.model,
            contents=text,
            config=types.GenerateContentConfig(
                system_instruction=instruction,
                temperature=0.3,
                max_output_tokens=self.max_tokens,
            ),
        )
        if not response.text:
            raise SummarizationError("Gemini returned an empty completion")
        return response.text


class Summarizer:
    """Produces the stored ``summary`` of an article."""

    def __init__(self, client: SummaryClient | None, timeout: float = 15.0):
        self.client = client
        self.timeout = timeout

    async def summarize(self, title: str, content: str | None) -> str:
        """
        Summarize an article in at most 150 characters.

        Content under 100 characters is returned unchanged (the title when
        there is no content). Without a backend, or when the backend fails,
        times out or returns nothing, the title is used instead.
        """
        content = content or ""
        if len(content) < MIN_CONTENT_LENGTH:
            return content or title

        if self.client is None:
            return fallback_summary(title)

        try:
            completion = await asyncio.wait_for(
                self.client.complete(SUMMARY_INSTRUCTION, f"{title}\n\n{content}"),
                timeout=self.timeout,
            )
        except Exception as e:  # noqa: BLE001 - any backend failure degrades to the title
            logger.warning("Summarization failed for '%s': %r", title[:80], e)
            return fallback_summary(title)

        completion = " ".join(completion.split())
        if not completion:
            return fallback_summary(title)
        return truncate_summary(completion)


def get_summary_client(settings: Settings) -> SummaryClient | None:
    """Get the summary backend for the configured LLM provider, if it has a key."""
    if settings.llm_provider == "gemini":
        if settings.gemini_api_key:
            return GeminiSummaryClient(settings.gemini_api_key, settings.gemini_model)
        return None

    # Default to Claude
    if settings.anthropic_api_key:
        return ClaudeSummaryClient(settings.anthropic_api_key, settings.anthropic_model)
    return None
