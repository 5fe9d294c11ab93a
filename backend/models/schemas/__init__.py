"""Pydantic contracts between the evaluation engine and its collaborators."""

from models.schemas.ai_judgment import AIJudgment, AIJudgmentOutcome
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
)
from models.schemas.skill_gap import SkillGapAnalysis, SkillGapEntry, SkillStatus
from models.schemas.skill_match import SkillMatchDetail, SkillMatchResult

__all__ = [
    "AIJudgment",
    "AIJudgmentOutcome",
    "CandidateProfile",
    "ConfidenceLevel",
    "Education",
    "ExperienceLevel",
    "JobCategory",
    "JobRequirement",
    "Project",
    "Recommendation",
    "RiskCategory",
    "RiskFactor",
    "ScoringBreakdown",
    "ScoringResult",
    "Severity",
    "SkillGapAnalysis",
    "SkillGapEntry",
    "SkillStatus",
    "SkillMatchDetail",
    "SkillMatchResult",
    "WorkExperience",
]
