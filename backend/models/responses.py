from pydantic import BaseModel

from models.schemas.scoring_result import Recommendation, ScoringResult


class AIScoreBreakdown(BaseModel):
    """Scores reported by the AI judge, kept apart from the deterministic breakdown."""
    ai_match_score: int | None = None
    hiring_readiness_score: int | None = None
    skill_match: int | None = None
    experience_score: int | None = None
    education_score: int | None = None
    project_alignment_score: int | None = None
    recommendation: Recommendation | None = None  # the judge's own call, advisory only


class BlendedEvaluation(ScoringResult):
    """Final evaluation handed back to the persistence layer.

    Carries every ScoringResult field; when the AI judgment was used the
    overall score is the 60/40 blend and the narrative fields come from it.
    """
    summary: str = ""
    project_analysis: str = ""
    interview_questions: list[str] = []
    improvement_suggestions: list[str] = []

    # Scoring transparency fields
    deterministic_score: int = 0
    ai_score: int | None = None
    ai_scores: AIScoreBreakdown | None = None
    scoring_method: str = "deterministic"  # "deterministic" | "blended"
    degraded: bool = False  # AI was attempted and failed


class BatchEvaluationSummary(BaseModel):
    total: int = 0
    evaluated: int = 0
    failed: int = 0
    evaluations: dict[str, BlendedEvaluation] = {}
    failures: dict[str, str] = {}  # candidate id -> reason
