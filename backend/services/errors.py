"""Failures of the external AI judgment.

These never leave the blending layer: the Gemini adapter turns them into a
failed AIJudgmentOutcome and the evaluator falls back to deterministic scores.
Missing candidate data is not an error at all; it only lowers sub-scores.
"""


class ExternalServiceError(Exception):
    """The AI call timed out, errored, or returned something unusable."""


class RateLimitError(ExternalServiceError):
    """The credential hit its quota (HTTP 429 or a quota message)."""


class MalformedResponseError(ExternalServiceError):
    """The response body was not JSON or failed schema validation."""


class CredentialsExhaustedError(ExternalServiceError):
    """Every configured credential is cooling down or none are configured."""
