"""Orchestrator: deterministic scoring blended with the optional AI judgment.

Per request:
1. Resolve the readiness signal (neutral 50 when unavailable)
2. Deterministic scoring engine (always runs, always succeeds)
3. Gemini judgment (optional, enhances results)
4. Blend 60% AI + 40% deterministic, or fall back to deterministic only
"""

import logging
from typing import Protocol

from config import settings
from models.responses import AIScoreBreakdown, BatchEvaluationSummary, BlendedEvaluation
from models.schemas.ai_judgment import AIJudgment
from models.schemas.candidate_profile import CandidateProfile
from models.schemas.job_requirement import JobRequirement
from models.schemas.scoring_result import (
    ConfidenceLevel,
    RiskCategory,
    RiskFactor,
    ScoringResult,
    Severity,
    round_half_up,
)
from services import scoring_engine
from services.readiness import ReadinessProvider, resolve_readiness_score

logger = logging.getLogger(__name__)

BLEND_AI_WEIGHT = 0.6
BLEND_DETERMINISTIC_WEIGHT = 0.4
MAX_LIST_ITEMS = 5
_AI_SCORE_FIELDS = set(AIScoreBreakdown.model_fields)


class Judge(Protocol):
    @property
    def enabled(self) -> bool: ...

    async def judge(self, candidate, job, deterministic=None): ...


class ProfileRepository(Protocol):
    async def get_profile(self, candidate_id: str) -> CandidateProfile | None: ...


class EvaluationSink(Protocol):
    async def save_evaluation(self, candidate_id: str, evaluation: BlendedEvaluation) -> None: ...


def _merge_unique(*groups: list[str], limit: int = MAX_LIST_ITEMS) -> list[str]:
    """Concatenate in order, dropping case-insensitive duplicates and blanks."""
    seen: set[str] = set()
    merged: list[str] = []
    for group in groups:
        for item in group:
            key = item.strip().lower()
            if not key or key in seen:
                continue
            seen.add(key)
            merged.append(item.strip())
    return merged[:limit] if limit else merged


def fallback_interview_questions(candidate: CandidateProfile, job: JobRequirement) -> list[str]:
    questions: list[str] = []
    if job.required_skills:
        questions.append(f"Can you describe your experience with {job.required_skills[0]}?")
    if candidate.experience:
        questions.append(f"Tell us about your role at {candidate.experience[0].company}.")
    else:
        questions.append("What projects have you worked on recently?")
    questions.append(f"What interests you about {job.title} position?")
    return questions


def _fallback_summary(
    result: ScoringResult, candidate: CandidateProfile, job: JobRequirement
) -> str:
    subject = candidate.name or "This candidate"
    if result.strengths:
        base = f"{subject} {result.strengths[0].lower()}."
    else:
        base = f"{subject} has an overall readiness score of {result.overall_score}/100 for {job.title}."
    return (
        f"{base} Overall readiness score: {result.overall_score}/100 "
        f"with {result.confidence_level.value} confidence."
    )


def _fallback_project_analysis(result: ScoringResult, job: JobRequirement) -> str:
    relevance = result.scoring_breakdown.project_relevance
    if relevance > 0:
        return f"Projects align {relevance}% with the {job.title} role."
    return "No closely aligned projects were detected in the candidate profile yet."


def to_blended(
    result: ScoringResult,
    candidate: CandidateProfile,
    job: JobRequirement,
    degraded: bool = False,
) -> BlendedEvaluation:
    """Map a deterministic result into the final evaluation shape."""
    return BlendedEvaluation(
        **result.model_dump(),
        summary=_fallback_summary(result, candidate, job),
        project_analysis=_fallback_project_analysis(result, job),
        interview_questions=fallback_interview_questions(candidate, job),
        improvement_suggestions=_merge_unique(result.gaps[:3], result.suggestions, limit=0),
        deterministic_score=result.overall_score,
        scoring_method="deterministic",
        degraded=degraded,
    )


def _confidence_level_from(judgment: AIJudgment, fallback: ConfidenceLevel) -> ConfidenceLevel:
    if judgment.confidence_level is not None:
        return judgment.confidence_level
    if judgment.confidence is not None:
        if judgment.confidence >= 70:
            return ConfidenceLevel.HIGH
        if judgment.confidence >= 50:
            return ConfidenceLevel.MEDIUM
        return ConfidenceLevel.LOW
    return fallback


def _merge_risks(deterministic: list[RiskFactor], ai_risks: list[str]) -> list[RiskFactor]:
    """Deterministic risks first, then AI strings as skill concerns, de-duplicated by message."""
    seen: set[str] = set()
    merged: list[RiskFactor] = []
    candidates = list(deterministic) + [
        RiskFactor(severity=Severity.CONCERN, message=message, category=RiskCategory.SKILLS)
        for message in ai_risks
    ]
    for risk in candidates:
        key = risk.message.strip().lower()
        if key in seen:
            continue
        seen.add(key)
        merged.append(risk)
    return merged


def blend(
    result: ScoringResult,
    judgment: AIJudgment,
    candidate: CandidateProfile,
    job: JobRequirement,
) -> BlendedEvaluation:
    """Combine the deterministic result with a validated AI judgment."""
    ai_score = judgment.overall_score
    overall = round_half_up(
        BLEND_AI_WEIGHT * ai_score + BLEND_DETERMINISTIC_WEIGHT * result.overall_score
    )

    risks = _merge_risks(result.risk_factors, judgment.risk_factors)
    blockers = sum(1 for r in risks if r.severity == Severity.BLOCKER)

    fallback = to_blended(result, candidate, job)

    return BlendedEvaluation(
        overall_score=overall,
        confidence_level=_confidence_level_from(judgment, result.confidence_level),
        confidence_score=(
            judgment.confidence if judgment.confidence is not None else result.confidence_score
        ),
        risk_factors=risks[:MAX_LIST_ITEMS],
        scoring_breakdown=result.scoring_breakdown,
        strengths=_merge_unique(judgment.strengths, result.strengths),
        gaps=_merge_unique(judgment.gaps, result.gaps),
        recommendation=scoring_engine.recommend(overall, blockers),
        suggestions=result.suggestions,
        summary=judgment.ai_summary or fallback.summary,
        project_analysis=judgment.project_analysis or fallback.project_analysis,
        interview_questions=judgment.interview_questions or fallback.interview_questions,
        improvement_suggestions=(
            judgment.improvement_suggestions or fallback.improvement_suggestions
        ),
        deterministic_score=result.overall_score,
        ai_score=ai_score,
        ai_scores=AIScoreBreakdown(**judgment.model_dump(include=_AI_SCORE_FIELDS)),
        scoring_method="blended",
        degraded=False,
    )


class CandidateEvaluator:
    """Scores candidates against jobs. Never raises for a well-formed pair."""

    def __init__(
        self,
        judge: Judge | None = None,
        readiness_provider: ReadinessProvider | None = None,
        ai_enabled: bool | None = None,
    ) -> None:
        self._judge = judge
        self._readiness = readiness_provider
        self._ai_enabled = settings.ai_evaluation_enabled if ai_enabled is None else ai_enabled

    @property
    def ai_available(self) -> bool:
        return self._ai_enabled and self._judge is not None and self._judge.enabled

    async def _with_readiness(self, candidate: CandidateProfile) -> CandidateProfile:
        if self._readiness is None:
            return candidate
        score = await resolve_readiness_score(self._readiness, candidate.candidate_id)
        return candidate.model_copy(update={"readiness_score": score})

    async def evaluate(
        self,
        candidate: CandidateProfile,
        job: JobRequirement,
        use_ai: bool = True,
    ) -> BlendedEvaluation:
        candidate = await self._with_readiness(candidate)
        result = scoring_engine.score_candidate(job, candidate)

        if not (use_ai and self.ai_available):
            return to_blended(result, candidate, job)

        try:
            outcome = await self._judge.judge(candidate, job, result)
        except Exception as e:
            logger.error("AI judgment raised for %s: %s", candidate.candidate_id or candidate.name, e)
            outcome = None

        if outcome is None or not outcome.ok:
            logger.warning(
                "AI evaluation unavailable, using deterministic scoring%s",
                f" ({outcome.error})" if outcome is not None else "",
            )
            return to_blended(result, candidate, job, degraded=True)

        evaluation = blend(result, outcome.judgment, candidate, job)
        logger.info(
            "Blended score for %s: %d (AI=%d, deterministic=%d)",
            candidate.candidate_id or candidate.name or "candidate",
            evaluation.overall_score,
            evaluation.ai_score,
            evaluation.deterministic_score,
        )
        return evaluation

    async def evaluate_batch(
        self,
        job: JobRequirement,
        candidate_ids: list[str],
        profiles: ProfileRepository,
        sink: EvaluationSink | None = None,
        use_ai: bool = False,
    ) -> BatchEvaluationSummary:
        """Evaluate candidates one at a time; individual failures are counted, never raised."""
        summary = BatchEvaluationSummary(total=len(candidate_ids))

        for candidate_id in candidate_ids:
            try:
                profile = await profiles.get_profile(candidate_id)
                if profile is None:
                    raise LookupError(f"Candidate profile not found: {candidate_id}")
                if profile.candidate_id != candidate_id:
                    profile = profile.model_copy(update={"candidate_id": candidate_id})

                evaluation = await self.evaluate(profile, job, use_ai=use_ai)
                if sink is not None:
                    await sink.save_evaluation(candidate_id, evaluation)
            except Exception as e:
                logger.error("Batch evaluation failed for %s: %s", candidate_id, e)
                summary.failed += 1
                summary.failures[candidate_id] = str(e)
                continue

            summary.evaluated += 1
            summary.evaluations[candidate_id] = evaluation

        logger.info(
            "Batch evaluation for %s: %d/%d evaluated, %d failed",
            job.title,
            summary.evaluated,
            summary.total,
            summary.failed,
        )
        return summary
