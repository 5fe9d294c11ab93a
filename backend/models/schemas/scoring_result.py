"""Deterministic engine output: sub-scores, risks and the overall verdict."""

import math
from enum import Enum

from pydantic import BaseModel, field_validator


class Severity(str, Enum):
    WARNING = "warning"
    CONCERN = "concern"
    BLOCKER = "blocker"


class RiskCategory(str, Enum):
    SKILLS = "skills"
    EXPERIENCE = "experience"
    ACTIVITY = "activity"
    PROFILE = "profile"


class ConfidenceLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Recommendation(str, Enum):
    SELECT = "select"
    REVIEW = "review"
    REJECT = "reject"


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive scores (12.5 -> 13, not 12)."""
    return int(math.floor(float(value) + 0.5))


def clamp_score(value: float) -> int:
    return max(0, min(100, round_half_up(value)))


class ScoringBreakdown(BaseModel):
    """One 0-100 sub-score per factor.

    Factors that carry no weight for the job category are still present,
    with value 0.
    """
    skill_match: int = 0
    code_activity: int = 0
    algorithmic: int = 0
    experience: int = 0
    education_strength: int = 0
    profile_completeness: int = 0
    project_relevance: int = 0
    readiness: int = 0

    @field_validator("*", mode="before")
    @classmethod
    def _clamp(cls, value):
        if value is None:
            return 0
        return clamp_score(value)

    def non_zero(self) -> list[int]:
        return [v for v in self.model_dump().values() if v > 0]


class RiskFactor(BaseModel):
    severity: Severity
    message: str
    category: RiskCategory


class ScoringResult(BaseModel):
    overall_score: int = 0  # 0-100
    confidence_level: ConfidenceLevel = ConfidenceLevel.LOW
    confidence_score: int = 0  # 0-100
    risk_factors: list[RiskFactor] = []
    scoring_breakdown: ScoringBreakdown = ScoringBreakdown()
    strengths: list[str] = []
    gaps: list[str] = []
    recommendation: Recommendation = Recommendation.REVIEW

    # Extra deterministic advice, surfaced as improvement suggestions
    suggestions: list[str] = []

    @field_validator("overall_score", "confidence_score", mode="before")
    @classmethod
    def _clamp(cls, value):
        return clamp_score(value)

    @property
    def blocker_count(self) -> int:
        return sum(1 for r in self.risk_factors if r.severity == Severity.BLOCKER)
