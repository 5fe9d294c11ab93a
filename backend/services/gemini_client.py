"""Google Gemini judgment adapter with key rotation and error handling."""

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable

from google import genai
from google.genai import errors, types
from pydantic import ValidationError

from config import settings
from models.schemas.ai_judgment import AIJudgment, AIJudgmentOutcome
from models.schemas.candidate_profile import CandidateProfile
from models.schemas.job_requirement import JobRequirement
from models.schemas.scoring_result import ScoringResult
from services import prompt_builder
from services.credential_pool import CredentialPool
from services.errors import (
    CredentialsExhaustedError,
    ExternalServiceError,
    MalformedResponseError,
    RateLimitError,
)

logger = logging.getLogger(__name__)

_RATE_LIMIT_MARKERS = ("429", "quota", "rate limit")


def strip_code_fences(text: str) -> str:
    """Remove a surrounding markdown code fence, if present."""
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else text[3:]
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()
    return text


def parse_judgment(text: str | None) -> AIJudgment:
    """Parse a raw Gemini response body into a validated AIJudgment."""
    if not text:
        raise MalformedResponseError("Empty response from Gemini")
    try:
        data = json.loads(strip_code_fences(text))
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"Failed to parse Gemini response as JSON: {e}") from e
    if not isinstance(data, dict):
        raise MalformedResponseError("Gemini response is not a JSON object")
    try:
        return AIJudgment.model_validate(data)
    except (ValidationError, ValueError, TypeError, OverflowError) as e:
        raise MalformedResponseError(f"Gemini response failed validation: {e}") from e


def is_rate_limit(error: Exception) -> bool:
    if isinstance(error, errors.APIError) and error.code == 429:
        return True
    message = str(error).lower()
    return any(marker in message for marker in _RATE_LIMIT_MARKERS)


def build_default_pool() -> CredentialPool:
    return CredentialPool(
        settings.gemini_api_keys,
        cooldown_seconds=settings.ai_rate_limit_cooldown_seconds,
    )


class GeminiJudge:
    """Asks Gemini for a structured judgment of a candidate against a job.

    Never raises: every failure is returned as a failed AIJudgmentOutcome so
    the caller can fall back to deterministic scores.
    """

    def __init__(
        self,
        pool: CredentialPool | None = None,
        model: str | None = None,
        timeout_seconds: float | None = None,
        backoff_seconds: float | None = None,
        client_factory: Callable[[str], genai.Client] | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._pool = pool if pool is not None else build_default_pool()
        self._model = model or settings.gemini_model
        self._timeout = timeout_seconds if timeout_seconds is not None else settings.ai_timeout_seconds
        self._backoff = (
            backoff_seconds if backoff_seconds is not None else settings.ai_retry_backoff_seconds
        )
        self._client_factory = client_factory or (lambda key: genai.Client(api_key=key))
        self._sleep = sleep
        self._clients: dict[str, genai.Client] = {}

        if not self._pool.enabled:
            logger.warning("No GEMINI_API_KEY set - AI evaluation disabled")

    @property
    def enabled(self) -> bool:
        return self._pool.enabled

    def _get_client(self, key: str) -> genai.Client:
        client = self._clients.get(key)
        if client is None:
            client = self._client_factory(key)
            self._clients[key] = client
        return client

    async def _request(self, key: str, prompt: str) -> AIJudgment:
        client = self._get_client(key)
        try:
            response = await asyncio.wait_for(
                client.aio.models.generate_content(
                    model=self._model,
                    contents=prompt,
                    config=types.GenerateContentConfig(
                        temperature=0.3,
                        max_output_tokens=4096,
                        response_mime_type="application/json",
                    ),
                ),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as e:
            raise ExternalServiceError(
                f"Gemini request timed out after {self._timeout:.0f}s"
            ) from e
        except Exception as e:
            if is_rate_limit(e):
                raise RateLimitError(str(e)) from e
            raise ExternalServiceError(f"Gemini API error: {e}") from e

        return parse_judgment(response.text)

    async def judge(
        self,
        candidate: CandidateProfile,
        job: JobRequirement,
        deterministic: ScoringResult | None = None,
    ) -> AIJudgmentOutcome:
        if not self.enabled:
            return AIJudgmentOutcome.failure("Gemini client is disabled")

        prompt = prompt_builder.build_evaluation_prompt(candidate, job, deterministic)
        max_attempts = len(self._pool)
        attempts = 0
        last_error = ""

        for attempt in range(max_attempts):
            try:
                key = self._pool.acquire()
            except CredentialsExhaustedError as e:
                last_error = str(e)
                break

            attempts += 1
            try:
                judgment = await self._request(key, prompt)
            except ExternalServiceError as e:
                rate_limited = isinstance(e, RateLimitError)
                self._pool.report_failure(key, rate_limited=rate_limited)
                last_error = str(e)
                if attempt < max_attempts - 1:
                    logger.warning(
                        "%s on attempt %d, trying next key",
                        "Rate limit hit" if rate_limited else f"Gemini error ({e})",
                        attempts,
                    )
                    await self._sleep(self._backoff)
                continue

            self._pool.report_success(key)
            if attempts > 1:
                logger.info("Gemini request succeeded on attempt %d", attempts)
            return AIJudgmentOutcome.success(judgment, attempts=attempts)

        logger.error("Gemini judgment failed after %d attempt(s): %s", attempts, last_error)
        return AIJudgmentOutcome.failure(last_error, attempts=attempts)
