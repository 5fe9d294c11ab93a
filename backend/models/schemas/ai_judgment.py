"""External AI judgment: the JSON contract with Gemini and the adapter result type."""

import math

from pydantic import BaseModel, field_validator
from pydantic.alias_generators import to_camel

from models.schemas.scoring_result import ConfidenceLevel, Recommendation, clamp_score


class AIJudgment(BaseModel):
    """Validated AI response. Keys are camelCase on the wire.

    Only ``overallScore`` is mandatory; a body without it is treated the same
    as a network failure. Any value of the wrong shape fails validation with
    a ValueError so the adapter can report it as a malformed response.
    """
    overall_score: int
    ai_match_score: int | None = None
    hiring_readiness_score: int | None = None
    skill_match: int | None = None
    experience_score: int | None = None
    education_score: int | None = None
    project_alignment_score: int | None = None
    confidence_level: ConfidenceLevel | None = None
    confidence: int | None = None
    risk_factors: list[str] = []
    strengths: list[str] = []
    gaps: list[str] = []
    recommendation: Recommendation | None = None
    ai_summary: str = ""
    project_analysis: str = ""
    interview_questions: list[str] = []
    improvement_suggestions: list[str] = []

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    @field_validator(
        "overall_score", "ai_match_score", "hiring_readiness_score", "skill_match",
        "experience_score", "education_score", "project_alignment_score", "confidence",
        mode="before",
    )
    @classmethod
    def _clamp_scores(cls, value):
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            raise ValueError("score must be numeric")
        try:
            number = float(value)
        except ValueError:
            raise ValueError(f"score must be numeric, got {value!r}") from None
        if not math.isfinite(number):
            raise ValueError("score must be finite")
        return clamp_score(number)

    @field_validator("confidence_level", mode="before")
    @classmethod
    def _parse_level(cls, value):
        # Gemini answers "High" | "Medium" | "Low"
        if value is None:
            return None
        try:
            return ConfidenceLevel(str(value).strip().lower())
        except ValueError:
            return None

    @field_validator("recommendation", mode="before")
    @classmethod
    def _parse_recommendation(cls, value):
        if value is None:
            return None
        try:
            return Recommendation(str(value).strip().lower())
        except ValueError:
            return None

    @field_validator(
        "risk_factors", "strengths", "gaps", "interview_questions", "improvement_suggestions",
        mode="before",
    )
    @classmethod
    def _string_list(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        if not isinstance(value, (list, tuple)):
            raise ValueError("expected a list of strings")
        items = []
        for item in value:
            if item is None:
                continue
            if isinstance(item, dict):
                item = item.get("message") or item.get("text") or ""
            item = str(item).strip()
            if item:
                items.append(item)
        return items

    @field_validator("ai_summary", "project_analysis", mode="before")
    @classmethod
    def _none_to_blank(cls, value):
        return "" if value is None else value


class AIJudgmentOutcome(BaseModel):
    """Result type returned by the AI adapter: a judgment or an error, never both."""
    judgment: AIJudgment | None = None
    error: str = ""
    attempts: int = 0

    @property
    def ok(self) -> bool:
        return self.judgment is not None

    @classmethod
    def success(cls, judgment: AIJudgment, attempts: int = 1) -> "AIJudgmentOutcome":
        return cls(judgment=judgment, attempts=attempts)

    @classmethod
    def failure(cls, error: str, attempts: int = 0) -> "AIJudgmentOutcome":
        return cls(error=error or "unknown error", attempts=attempts)
