"""Deterministic scoring engine.

Computes eight independent 0-100 sub-scores for a candidate against a job,
combines them with category-specific weights, and derives confidence, risk
factors, strengths, gaps and a recommendation. No network access: the same
inputs always give the same ScoringResult, which is what the blending layer
falls back to when the AI judgment is unavailable.

Missing optional data never raises. It drives the matching sub-score to 0
and usually surfaces again as a risk factor.
"""

import logging
import re
from types import MappingProxyType

from pydantic import BaseModel

from models.schemas.candidate_profile import CandidateProfile, Education, Project, WorkExperience
from models.schemas.job_requirement import ExperienceLevel, JobCategory, JobRequirement
from models.schemas.scoring_result import (
    ConfidenceLevel,
    Recommendation,
    RiskCategory,
    RiskFactor,
    ScoringBreakdown,
    ScoringResult,
    Severity,
    clamp_score,
)
from models.schemas.skill_match import SkillMatchResult
from services import skill_normalizer

logger = logging.getLogger(__name__)


class CategoryWeights(BaseModel):
    """Percentage weight per factor. Field names match ScoringBreakdown."""
    skill_match: int
    code_activity: int
    algorithmic: int
    experience: int
    project_relevance: int
    education_strength: int
    profile_completeness: int
    readiness: int

    model_config = {"frozen": True}

    @property
    def total(self) -> int:
        return sum(self.model_dump().values())


FACTORS: tuple[str, ...] = tuple(ScoringBreakdown.model_fields)

# Code activity and algorithmic signals carry no weight for non-technical roles
CATEGORY_WEIGHTS = MappingProxyType({
    JobCategory.SOFTWARE: CategoryWeights(
        skill_match=25, code_activity=15, algorithmic=10, experience=15,
        project_relevance=15, education_strength=5, profile_completeness=5, readiness=10,
    ),
    JobCategory.DATA_SCIENCE: CategoryWeights(
        skill_match=25, code_activity=10, algorithmic=15, experience=15,
        project_relevance=15, education_strength=5, profile_completeness=5, readiness=10,
    ),
    JobCategory.QA_AUTOMATION: CategoryWeights(
        skill_match=30, code_activity=10, algorithmic=10, experience=15,
        project_relevance=15, education_strength=5, profile_completeness=5, readiness=10,
    ),
    JobCategory.NON_TECHNICAL: CategoryWeights(
        skill_match=35, code_activity=0, algorithmic=0, experience=25,
        project_relevance=0, education_strength=15, profile_completeness=15, readiness=10,
    ),
    JobCategory.BUSINESS: CategoryWeights(
        skill_match=30, code_activity=0, algorithmic=0, experience=30,
        project_relevance=0, education_strength=15, profile_completeness=15, readiness=10,
    ),
})

# (min, max) years per level; senior is open-ended
EXPERIENCE_RANGES = MappingProxyType({
    ExperienceLevel.FRESHER: (0.0, 1.0),
    ExperienceLevel.JUNIOR: (1.0, 3.0),
    ExperienceLevel.MID: (3.0, 6.0),
    ExperienceLevel.SENIOR: (6.0, float("inf")),
})

_POSTGRAD_PATTERN = re.compile(r"master|m\.?sc|mca|ph\.?d|doctor", re.IGNORECASE)
_BACHELOR_PATTERN = re.compile(r"bachelor|b\.?sc|b\.?tech|\bb\.?e\b", re.IGNORECASE)

# Profile completeness checklist weights (sum to 100)
_COMPLETENESS_WEIGHTS = MappingProxyType({
    "skills": 20,
    "resume": 20,
    "experience": 15,
    "education": 15,
    "github": 10,
    "linkedin": 5,
    "portfolio": 5,
    "projects": 10,
})

MIN_RESUME_CHARS = 100

SELECT_THRESHOLD = 75
REVIEW_THRESHOLD = 50


def weights_for(category: JobCategory | str) -> CategoryWeights:
    """Weight row for a category; anything unknown uses the software row."""
    try:
        return CATEGORY_WEIGHTS[JobCategory(category)]
    except ValueError:
        return CATEGORY_WEIGHTS[JobCategory.SOFTWARE]


# ---------------------------------------------------------------------------
# Per-factor scores
# ---------------------------------------------------------------------------

def _bucket(percent: float) -> int:
    """Coarse tiers that dampen near-miss percentages."""
    if percent >= 80:
        return 100
    if percent >= 60:
        return 85
    if percent >= 40:
        return 70
    if percent >= 20:
        return 50
    return 30


def score_skill_match(
    required_skills: list[str],
    candidate_skills: list[str],
    match: SkillMatchResult | None = None,
) -> int:
    if not required_skills:
        return 100
    if not candidate_skills:
        return 0
    if match is None:
        match = skill_normalizer.match_set(required_skills, candidate_skills)
    return _bucket(match.score)


def score_code_activity(raw_score: float | None) -> int:
    if not raw_score:
        return 0
    return _bucket(raw_score)


def score_algorithmic(raw_score: float | None) -> int:
    if raw_score is None:
        return 0
    if raw_score >= 85:
        return 100
    if raw_score >= 70:
        return 85
    if raw_score >= 50:
        return 70
    if raw_score >= 30:
        return 55
    return 35


def score_experience(
    level: ExperienceLevel,
    years_of_experience: float | None,
    experience: list[WorkExperience],
) -> int:
    """Fit of the candidate's years against the level's year range.

    An explicit years value wins; otherwise each experience entry counts as
    roughly one year.
    """
    if years_of_experience is None and not experience:
        return 0

    years = years_of_experience if years_of_experience is not None else float(len(experience))
    low, high = EXPERIENCE_RANGES.get(level, EXPERIENCE_RANGES[ExperienceLevel.MID])

    if low <= years <= high:
        return 100
    if high < years <= high + 3:
        return 90  # slightly over-qualified
    if low - 1 <= years < low:
        return 75  # just under
    if years > high + 3:
        return 70
    if years < low - 1:
        return 40
    return 50


def score_education(education: list[Education], certifications: list[str]) -> int:
    if not education and not certifications:
        return 20

    score = 40
    degrees = [e.degree for e in education]
    if any(_POSTGRAD_PATTERN.search(d) for d in degrees):
        score += 30
    elif any(_BACHELOR_PATTERN.search(d) for d in degrees):
        score += 20

    score += min(max(0, len(education) - 1) * 10, 20)
    score += min(len(certifications) * 5, 20)
    return min(100, score)


def score_profile_completeness(profile: CandidateProfile) -> int:
    checks = {
        "skills": bool(profile.skills),
        "resume": bool(profile.resume_text.strip()),
        "experience": bool(profile.experience),
        "education": bool(profile.education),
        "github": bool(profile.github_username),
        "linkedin": bool(profile.linkedin_url),
        "portfolio": bool(profile.portfolio_url),
        "projects": bool(profile.projects),
    }
    return sum(_COMPLETENESS_WEIGHTS[name] for name, present in checks.items() if present)


def score_project_relevance(job_skills: list[str], projects: list[Project]) -> int:
    """Average tech-stack coverage of relevant projects, plus 5 per relevant project (max 20)."""
    relevant_scores = []
    for project in projects:
        result = skill_normalizer.match_set(job_skills, project.tech_stack)
        if result.matched:
            relevant_scores.append(result.score)

    if not relevant_scores:
        return 0

    average = sum(relevant_scores) / len(relevant_scores)
    bonus = min(len(relevant_scores) * 5, 20)
    return clamp_score(average + bonus)


# ---------------------------------------------------------------------------
# Derived outputs
# ---------------------------------------------------------------------------

def overall_score(breakdown: ScoringBreakdown, weights: CategoryWeights) -> int:
    weighted = sum(getattr(breakdown, f) * getattr(weights, f) for f in FACTORS)
    return clamp_score(weighted / 100)


def confidence_level_for(score: int) -> ConfidenceLevel:
    if score >= 70:
        return ConfidenceLevel.HIGH
    if score >= 45:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW


def compute_confidence(
    profile: CandidateProfile, breakdown: ScoringBreakdown
) -> tuple[ConfidenceLevel, int]:
    """How much the data supports the score: completeness, consistency, quality."""
    score = 0

    # Data completeness (max 40)
    if len(profile.resume_text) > MIN_RESUME_CHARS:
        score += 15
    if len(profile.skills) >= 3:
        score += 10
    if profile.experience:
        score += 10
    if profile.code_activity_score is not None:
        score += 5

    # Consistency (max 20)
    signals = breakdown.non_zero()
    if len(signals) >= 3:
        score += 20
    elif len(signals) >= 2:
        score += 10

    # Quality (max 30)
    average = sum(signals) / len(signals) if signals else 0
    if average >= 70:
        score += 30
    elif average >= 50:
        score += 20
    else:
        score += 10

    return confidence_level_for(score), score


def recommend(score: int, blocker_count: int) -> Recommendation:
    if score >= SELECT_THRESHOLD and blocker_count == 0:
        return Recommendation.SELECT
    if score >= REVIEW_THRESHOLD or blocker_count <= 1:
        return Recommendation.REVIEW
    return Recommendation.REJECT


def identify_risk_factors(
    breakdown: ScoringBreakdown,
    profile: CandidateProfile,
    job: JobRequirement,
    weights: CategoryWeights,
) -> list[RiskFactor]:
    risks: list[RiskFactor] = []

    def add(severity: Severity, message: str, category: RiskCategory) -> None:
        risks.append(RiskFactor(severity=severity, message=message, category=category))

    if breakdown.skill_match < 50:
        add(Severity.BLOCKER, "Significant skill gap - missing critical required skills",
            RiskCategory.SKILLS)
    elif breakdown.skill_match < 70:
        add(Severity.WARNING, "Moderate skill gap - some required skills missing",
            RiskCategory.SKILLS)

    if breakdown.code_activity == 0:
        add(Severity.CONCERN, "No code activity signal available - unable to assess coding activity",
            RiskCategory.ACTIVITY)
    elif breakdown.code_activity < 50:
        add(Severity.WARNING, "Limited code activity - inconsistent contribution history",
            RiskCategory.ACTIVITY)

    if weights.algorithmic > 0:
        if profile.algorithmic_score is None:
            add(Severity.CONCERN, "No coding challenge stats available to verify problem-solving depth",
                RiskCategory.ACTIVITY)
        elif breakdown.algorithmic < 50:
            add(Severity.WARNING, "Algorithmic problem-solving score below expectations for this role",
                RiskCategory.ACTIVITY)

    if breakdown.experience < 40:
        add(Severity.BLOCKER, f"Under-qualified for {job.experience_level.value} level position",
            RiskCategory.EXPERIENCE)
    elif breakdown.experience < 75:
        add(Severity.CONCERN, "Experience level slightly below job requirements",
            RiskCategory.EXPERIENCE)

    if breakdown.profile_completeness < 60:
        add(Severity.WARNING, "Incomplete profile - missing key information", RiskCategory.PROFILE)

    if weights.education_strength > 0 and breakdown.education_strength < 50:
        add(Severity.CONCERN, "Educational background details are insufficient for this role",
            RiskCategory.PROFILE)

    if len(profile.resume_text) < MIN_RESUME_CHARS:
        add(Severity.CONCERN, "Resume not parsed or minimal content", RiskCategory.PROFILE)

    if not profile.experience:
        add(Severity.WARNING, "No work experience listed", RiskCategory.EXPERIENCE)

    if not profile.projects:
        add(Severity.CONCERN, "No projects showcased - unable to assess practical experience",
            RiskCategory.PROFILE)
    elif breakdown.project_relevance < 30:
        add(Severity.WARNING, "Projects use different tech stack than job requirements",
            RiskCategory.SKILLS)

    return risks


def identify_strengths(breakdown: ScoringBreakdown, profile: CandidateProfile) -> list[str]:
    strengths: list[str] = []

    if breakdown.skill_match >= 80:
        strengths.append("Excellent skill match with job requirements")
    elif breakdown.skill_match >= 60:
        strengths.append("Strong skill alignment")

    if breakdown.project_relevance >= 70:
        strengths.append("Highly relevant project portfolio matching job requirements")
    elif breakdown.project_relevance >= 50:
        strengths.append("Projects demonstrate applicable skills")

    if len(profile.projects) >= 3:
        strengths.append(
            f"{len(profile.projects)} projects showcased demonstrating hands-on experience"
        )

    if breakdown.code_activity >= 70:
        strengths.append("Active code contributor with consistent activity")
    elif breakdown.code_activity >= 50:
        strengths.append("Moderate code activity presence")

    if breakdown.algorithmic >= 80:
        strengths.append("Excellent problem-solving track record on coding challenges")
    elif breakdown.algorithmic >= 60:
        strengths.append("Solid DSA fundamentals demonstrated via coding challenges")

    if breakdown.experience >= 90:
        strengths.append("Perfect experience match for role level")
    elif breakdown.experience >= 75:
        strengths.append("Well-suited experience level")

    if breakdown.profile_completeness >= 80:
        strengths.append("Comprehensive professional profile")

    if breakdown.education_strength >= 80:
        strengths.append("Strong formal education and credentials")
    elif breakdown.education_strength >= 60:
        strengths.append("Well-documented academic foundation")

    if profile.top_languages:
        strengths.append(f"Proficient in {', '.join(profile.top_languages[:3])}")

    if profile.education:
        strengths.append("Solid educational background")

    return strengths


def identify_gaps(match: SkillMatchResult, limit: int = 5) -> list[str]:
    return [f"{skill} experience" for skill in match.missing[:limit]]


def improvement_suggestions(
    breakdown: ScoringBreakdown, profile: CandidateProfile, weights: CategoryWeights
) -> list[str]:
    suggestions: list[str] = []
    if weights.algorithmic > 0:
        if profile.algorithmic_score is None:
            suggestions.append("Add verifiable coding challenge stats (LeetCode, HackerRank, etc.)")
        elif breakdown.algorithmic < 60:
            suggestions.append(
                "Strengthen data structures & algorithms practice to improve coding challenge scores"
            )
    if weights.education_strength > 0 and breakdown.education_strength < 60:
        suggestions.append("Document formal education and certifications in more detail")
    return suggestions


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def score_candidate(job: JobRequirement, profile: CandidateProfile) -> ScoringResult:
    """Run every factor and assemble the deterministic ScoringResult."""
    weights = weights_for(job.category)
    skill_result = skill_normalizer.match_set(job.required_skills, profile.skills)

    breakdown = ScoringBreakdown(
        skill_match=score_skill_match(job.required_skills, profile.skills, skill_result),
        code_activity=(
            score_code_activity(profile.code_activity_score) if weights.code_activity > 0 else 0
        ),
        algorithmic=(
            score_algorithmic(profile.algorithmic_score) if weights.algorithmic > 0 else 0
        ),
        experience=score_experience(
            job.experience_level, profile.years_of_experience, profile.experience
        ),
        education_strength=score_education(profile.education, profile.certifications),
        profile_completeness=score_profile_completeness(profile),
        project_relevance=(
            score_project_relevance(job.required_skills, profile.projects)
            if weights.project_relevance > 0 else 0
        ),
        readiness=profile.readiness_score,
    )

    overall = overall_score(breakdown, weights)
    level, confidence = compute_confidence(profile, breakdown)
    risks = identify_risk_factors(breakdown, profile, job, weights)
    blockers = sum(1 for r in risks if r.severity == Severity.BLOCKER)

    result = ScoringResult(
        overall_score=overall,
        confidence_level=level,
        confidence_score=confidence,
        risk_factors=risks,
        scoring_breakdown=breakdown,
        strengths=identify_strengths(breakdown, profile),
        gaps=identify_gaps(skill_result),
        recommendation=recommend(overall, blockers),
        suggestions=improvement_suggestions(breakdown, profile, weights),
    )
    logger.debug(
        "Deterministic score for %s: %d (confidence=%s, risks=%d)",
        profile.candidate_id or profile.name or "candidate",
        result.overall_score,
        result.confidence_level.value,
        len(result.risk_factors),
    )
    return result
