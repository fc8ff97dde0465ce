"""
Notes Functions Backend - OpenAI Summarizer Implementation
============================================================

What:  Concrete summarizer calling the OpenAI Chat Completions API.
How:   One HTTPS JSON POST per note through httpx, bearer-authenticated with
       the configured API key. The answer's first choice is the summary.
Who:   Used by NoteService when the live path is selected.

Failure Model:
    - Non-2xx answer: status and raw body are logged, BackendUnavailableError
      carries the raw body to the 502 response.
    - Transport errors and malformed JSON propagate unchanged; NoteService
      turns them into a 500.
    - No retries and no timeouts beyond httpx defaults.
"""

import logging
import time
from typing import Any, Dict, Optional

import httpx

from notes_api.exceptions import BackendUnavailableError
from notes_api.services.base import SummarizerBackend

logger = logging.getLogger(__name__)

SUMMARY_MODEL = "gpt-4o-mini"
SUMMARY_TEMPERATURE = 0.3
SUMMARY_MAX_TOKENS = 60
SYSTEM_PROMPT = "Agent that summarizes user notes."
EMPTY_SUMMARY = "(No summary)"


def build_prompt(text: str) -> str:
    """User message asking for a one-sentence, no-new-facts summary."""
    return f'Summarize the following note in one sentence without adding new info. Note: "{text}"'


def build_payload(text: str) -> Dict[str, Any]:
    """Request body for POST /chat/completions."""
    return {
        "model": SUMMARY_MODEL,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": build_prompt(text)},
        ],
        "temperature": SUMMARY_TEMPERATURE,
        "max_tokens": SUMMARY_MAX_TOKENS,
    }


def extract_summary(data: Any) -> str:
    """
    Pull `choices[0].message.content` out of a completions response.

    Missing pieces, non-string content and blank content all collapse to
    the "(No summary)" placeholder.
    """
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return EMPTY_SUMMARY
    if not isinstance(content, str):
        return EMPTY_SUMMARY
    return content.strip() or EMPTY_SUMMARY


class OpenAISummarizer(SummarizerBackend):
    """
    Chat-completions summarizer.

    Args:
        api_key:   Bearer key sent in the Authorization header.
        base_url:  API root, e.g. https://api.openai.com/v1
        transport: Optional httpx transport (tests pass httpx.MockTransport).
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.transport = transport

    @property
    def completions_url(self) -> str:
        return f"{self.base_url}/chat/completions"

    async def summarize(self, text: str) -> str:
        start_time = time.perf_counter()

        async with httpx.AsyncClient(transport=self.transport) as client:
            response = await client.post(
                self.completions_url,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                json=build_payload(text),
            )

        duration_ms = (time.perf_counter() - start_time) * 1000

        if not response.is_success:
            error_text = response.text
            logger.error(
                "OpenAI API error: status=%d body=%s",
                response.status_code,
                error_text,
            )
            raise BackendUnavailableError(
                upstream_status=response.status_code,
                details=error_text,
            )

        summary = extract_summary(response.json())
        logger.info(
            "OpenAI summary completed in %.0fms, %d chars",
            duration_ms,
            len(summary),
        )
        return summary
