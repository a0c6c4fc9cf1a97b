"""
OpenAI Service - compatibility scoring via the OpenAI API.

Works against any OpenAI-compatible endpoint (OpenAI, Ollama, vLLM) through
``base_url``. Each call carries a client-side timeout; rate-limit and
connection errors get a small retry budget, timeouts are never retried.
"""
from typing import Dict, Any, List, Optional
import json
import logging
import re

import openai
from openai import OpenAI
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)
from tenacity import RetryCallState
from core.llm.interfaces import (
    ScoringProvider,
    ScoringProviderError,
    ProviderTimeoutError,
    MalformedProviderResponseError,
)
from core.llm.system_prompts import (
    COMPATIBILITY_SCORING_SYSTEM_PROMPT,
    COMPATIBILITY_USER_MESSAGE_TEMPLATE,
)
from core.llm.schema_models import COMPATIBILITY_SCHEMA

logger = logging.getLogger(__name__)

# Upper bound for any single backoff sleep; matching runs inside a user request
MAX_RETRY_WAIT_SECONDS = 10.0


# ---------------------------------------------------------------------------
# Retry helpers
# ---------------------------------------------------------------------------

def _is_retryable(exc: BaseException) -> bool:
    """Return True for transient errors that are worth retrying.

    APITimeoutError subclasses APIConnectionError but is excluded: a timed-out
    job falls back to rule-based scoring immediately.
    """
    if isinstance(exc, openai.APITimeoutError):
        return False
    return isinstance(exc, (
        openai.RateLimitError,
        openai.APIConnectionError,
        openai.InternalServerError,
    ))


def _log_retry(retry_state: RetryCallState) -> None:
    """Log a warning before each retry sleep."""
    exc = retry_state.outcome.exception()
    wait = retry_state.next_action.sleep if retry_state.next_action else 0
    if isinstance(exc, openai.RateLimitError):
        logger.warning(
            "Rate limit hit (attempt %s). Waiting %.1fs before retry. Details: %s",
            retry_state.attempt_number, wait, exc,
        )
    else:
        logger.warning(
            "Transient API error (attempt %s). Waiting %.1fs before retry. Details: %s",
            retry_state.attempt_number, wait, exc,
        )


def _parse_reset_duration(value: str) -> float:
    """Parse an OpenAI reset-timer header value like '1s', '500ms', '1m30s' into seconds."""
    total = 0.0
    for amount, unit in re.findall(r"([\d.]+)(ms|s|m|h)", value):
        a = float(amount)
        if unit == "ms":
            total += a / 1000
        elif unit == "s":
            total += a
        elif unit == "m":
            total += a * 60
        else:  # h
            total += a * 3600
    return total


def _wait_from_rate_limit_headers(exc: openai.RateLimitError) -> float:
    """Extract the longest declared wait from rate-limit response headers.

    Reads ``retry-after`` (plain seconds) and the OpenAI
    ``x-ratelimit-reset-requests`` / ``x-ratelimit-reset-tokens`` durations.

    Returns 0.0 if no usable header is present.
    """
    response = getattr(exc, "response", None)
    headers = getattr(response, "headers", None)
    if not headers:
        return 0.0

    candidates: List[float] = []

    retry_after = headers.get("retry-after", "")
    if retry_after:
        try:
            candidates.append(float(retry_after))
        except ValueError:
            pass

    for header in ("x-ratelimit-reset-requests", "x-ratelimit-reset-tokens"):
        parsed = _parse_reset_duration(headers.get(header, "") or "")
        if parsed > 0:
            candidates.append(parsed)

    return max(candidates) if candidates else 0.0


def _wait_respecting_retry_after(retry_state: RetryCallState) -> float:
    """Return how long tenacity should sleep before the next attempt.

    Honours server-declared rate-limit timers, otherwise exponential backoff.
    Both are capped at MAX_RETRY_WAIT_SECONDS.
    """
    exc = retry_state.outcome.exception()
    if isinstance(exc, openai.RateLimitError):
        wait = _wait_from_rate_limit_headers(exc)
        if wait > 0:
            return min(wait, MAX_RETRY_WAIT_SECONDS)

    exp = wait_exponential(multiplier=0.5, min=0.5, max=MAX_RETRY_WAIT_SECONDS)
    return exp(retry_state)


def _llm_retry(max_attempts: int):
    """Return a tenacity @retry decorator for LLM API calls."""
    return retry(
        retry=retry_if_exception(_is_retryable),
        wait=_wait_respecting_retry_after,
        stop=stop_after_attempt(max_attempts),
        before_sleep=_log_retry,
        reraise=True,
    )


class OpenAIService(ScoringProvider):
    """
    OpenAI compatibility-scoring service.

    Uses JSON Schema response mode so the reply is a JSON object carrying
    ``compatibility_score`` and ``rationale``.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model_config: Optional[Dict[str, Any]] = None,
        enabled: bool = True
    ):
        self.api_key = api_key
        self.enabled = enabled
        self.model_config = model_config or {}
        self.scoring_model = self.model_config.get('scoring_model', 'gpt-4o-mini')
        self.scoring_temperature = self.model_config.get('scoring_temperature', 0.0)
        self.request_timeout_seconds = float(self.model_config.get('request_timeout_seconds', 15.0))
        self.max_attempts = int(self.model_config.get('max_attempts', 2))

        self.client = None
        if self.is_available():
            client_kwargs: Dict[str, Any] = {
                'api_key': api_key,
                'timeout': self.request_timeout_seconds,
                'max_retries': 0,  # tenacity owns retries
            }
            if base_url:
                client_kwargs['base_url'] = base_url
            self.client = OpenAI(**client_kwargs)

        self._create_with_retry = _llm_retry(self.max_attempts)(self._create_completion)

    def is_available(self) -> bool:
        return self.enabled and bool(self.api_key)

    def _create_completion(self, messages: List[Dict[str, str]]) -> Any:
        name = COMPATIBILITY_SCHEMA["name"]
        return self.client.chat.completions.create(
            model=self.scoring_model,
            messages=messages,
            temperature=self.scoring_temperature,
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": name,
                    "schema": COMPATIBILITY_SCHEMA["schema"],
                    "strict": COMPATIBILITY_SCHEMA["strict"],
                },
            },
        )

    def request_compatibility(self, profile_summary: str, job_summary: str) -> Dict[str, Any]:
        """Ask the model for a compatibility score.

        Args:
            profile_summary: Serialized candidate summary
            job_summary: Serialized job summary

        Returns:
            Parsed JSON object from the model

        Raises:
            ProviderTimeoutError: The call exceeded request_timeout_seconds
            MalformedProviderResponseError: The reply was not a JSON object
            ScoringProviderError: Any other provider failure
        """
        if not self.is_available() or self.client is None:
            raise ScoringProviderError("Scoring provider is not configured")

        messages = [
            {"role": "system", "content": COMPATIBILITY_SCORING_SYSTEM_PROMPT},
            {"role": "user", "content": COMPATIBILITY_USER_MESSAGE_TEMPLATE.format(
                profile_summary=profile_summary,
                job_summary=job_summary,
            )},
        ]

        try:
            response = self._create_with_retry(messages)
        except openai.APITimeoutError as e:
            raise ProviderTimeoutError(
                f"Provider call exceeded {self.request_timeout_seconds:.1f}s"
            ) from e
        except openai.OpenAIError as e:
            raise ScoringProviderError(f"{type(e).__name__}: {e}") from e

        try:
            content = response.choices[0].message.content
            data = json.loads(content)
        except (json.JSONDecodeError, IndexError, AttributeError, TypeError) as e:
            raise MalformedProviderResponseError(f"Unreadable provider response: {e}") from e

        if not isinstance(data, dict):
            raise MalformedProviderResponseError(
                f"Expected a JSON object, got {type(data).__name__}"
            )

        logger.debug(f"Provider rationale ({self.scoring_model}): {data.get('rationale', 'n/a')}")
        return data
