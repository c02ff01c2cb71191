"""
Completion endpoint client.

The coach treats the model as an opaque text-completion service: a list of
role-tagged turns in, free text out. GeminiCompletionClient is the production
implementation; tests substitute their own object with the same
``complete`` signature through the ``get_completion_client`` dependency.
"""

import logging
import time
from dataclasses import dataclass
from typing import List, Literal, Optional

import httpx

from core.config import settings
from core.exceptions import APIException, UnknownFailure, UpstreamUnavailable

logger = logging.getLogger(__name__)

# Check if Google GenAI is available
try:
    from google import genai
    from google.genai import types as genai_types
    GEMINI_AVAILABLE = True
except ImportError:
    GEMINI_AVAILABLE = False
    genai = None
    genai_types = None
    logger.info("Google GenAI not installed - AI Coach routes will answer 503")


# Substrings the upstream puts in its error text. Matched case-sensitively,
# the way the SDK reports status names.
API_KEY_MARKERS = ("API key", "API_KEY_INVALID")
RATE_LIMIT_MARKERS = ("RATE_LIMIT", "quota", "RESOURCE_EXHAUSTED")
SAFETY_MARKERS = ("SAFETY",)


@dataclass(frozen=True)
class ChatTurn:
    """One turn of the conversation sent to the model."""
    role: Literal["user", "model"]
    text: str


class CompletionBlocked(Exception):
    """The model returned no text because a safety filter stopped it."""


class CompletionClient:
    """Interface every completion backend implements."""

    def complete(
        self,
        turns: List[ChatTurn],
        temperature: Optional[float] = None,
        max_output_tokens: Optional[int] = None,
    ) -> str:
        raise NotImplementedError


class GeminiCompletionClient(CompletionClient):
    """Gemini via the google-genai SDK."""

    def __init__(self, api_key: str, model: Optional[str] = None, timeout_s: Optional[int] = None):
        if not GEMINI_AVAILABLE:
            raise UpstreamUnavailable.not_configured()
        self.model = model or settings.GEMINI_MODEL
        timeout_ms = (timeout_s or settings.COACH_COMPLETION_TIMEOUT_S) * 1000
        self.client = genai.Client(
            api_key=api_key,
            http_options=genai_types.HttpOptions(timeout=timeout_ms),
        )

    def complete(
        self,
        turns: List[ChatTurn],
        temperature: Optional[float] = None,
        max_output_tokens: Optional[int] = None,
    ) -> str:
        contents = [
            genai_types.Content(role=turn.role, parts=[genai_types.Part(text=turn.text)])
            for turn in turns
        ]
        config = None
        if temperature is not None or max_output_tokens is not None:
            config = genai_types.GenerateContentConfig(
                temperature=temperature,
                max_output_tokens=max_output_tokens,
            )

        start = time.monotonic()
        response = self.client.models.generate_content(
            model=self.model,
            contents=contents,
            config=config,
        )
        latency_ms = int((time.monotonic() - start) * 1000)

        text = extract_response_text(response)
        usage = getattr(response, "usage_metadata", None)
        logger.info(
            "Gemini completion finished",
            extra={
                "extra_fields": {
                    "model": self.model,
                    "turns": len(turns),
                    "latency_ms": latency_ms,
                    "input_tokens": getattr(usage, "prompt_token_count", None),
                    "output_tokens": getattr(usage, "candidates_token_count", None),
                }
            },
        )
        return text


def extract_response_text(response) -> str:
    """
    Concatenate the text parts of the first candidate.

    Raises CompletionBlocked when the prompt or the candidate was stopped by
    a safety filter and no text came back.
    """
    feedback = getattr(response, "prompt_feedback", None)
    block_reason = getattr(feedback, "block_reason", None) if feedback else None

    text = ""
    candidates = getattr(response, "candidates", None) or []
    if candidates:
        candidate = candidates[0]
        content = getattr(candidate, "content", None)
        for part in (getattr(content, "parts", None) or []):
            part_text = getattr(part, "text", None)
            if isinstance(part_text, str):
                text += part_text
        if not text and "SAFETY" in str(getattr(candidate, "finish_reason", "")):
            raise CompletionBlocked("Candidate stopped: SAFETY")

    if not text and block_reason:
        raise CompletionBlocked(f"Prompt blocked: SAFETY ({block_reason})")
    return text


def classify_completion_error(exc: Exception, fallback_detail: str = "Internal server error") -> APIException:
    """Map a failure from the completion call onto the API error taxonomy."""
    if isinstance(exc, APIException):
        return exc
    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return UpstreamUnavailable.timed_out()
    if isinstance(exc, CompletionBlocked):
        return UpstreamUnavailable.safety_blocked()

    message = str(exc)
    if any(m in message for m in API_KEY_MARKERS):
        return UpstreamUnavailable.misconfigured()
    if getattr(exc, "code", None) == 429 or any(m in message for m in RATE_LIMIT_MARKERS):
        return UpstreamUnavailable.rate_limited()
    if any(m in message for m in SAFETY_MARKERS):
        return UpstreamUnavailable.safety_blocked()
    return UnknownFailure(fallback_detail)


def get_completion_client() -> CompletionClient:
    """FastAPI dependency: the configured completion backend, or 503."""
    if not settings.GEMINI_API_KEY:
        raise UpstreamUnavailable.not_configured()
    return GeminiCompletionClient(api_key=settings.GEMINI_API_KEY)
