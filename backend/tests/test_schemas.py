"""Tests for boundary coercion in the pydantic models."""

import pytest
from pydantic import ValidationError

from models.responses import BatchEvaluationSummary, BlendedEvaluation
from models.schemas import (
    AIJudgment,
    AIJudgmentOutcome,
    CandidateProfile,
    ConfidenceLevel,
    ExperienceLevel,
    JobCategory,
    JobRequirement,
    Recommendation,
    RiskFactor,
    ScoringBreakdown,
    ScoringResult,
)
from models.schemas.scoring_result import clamp_score, round_half_up


class TestRounding:
    def test_half_up(self):
        assert round_half_up(12.5) == 13
        assert round_half_up(12.4) == 12
        assert round_half_up(0.5) == 1

    def test_clamp(self):
        assert clamp_score(-5) == 0
        assert clamp_score(150) == 100
        assert clamp_score(99.5) == 100


class TestJobRequirement:
    def test_unknown_category_is_software(self):
        assert JobRequirement(title="x", category="astrology").category == JobCategory.SOFTWARE
        assert JobRequirement(title="x", category=None).category == JobCategory.SOFTWARE

    def test_category_is_case_insensitive(self):
        assert JobRequirement(title="x", category="Data-Science").category == JobCategory.DATA_SCIENCE

    @pytest.mark.parametrize("raw,expected", [
        ("entry", ExperienceLevel.FRESHER),
        ("lead", ExperienceLevel.SENIOR),
        ("Senior", ExperienceLevel.SENIOR),
        ("principal", ExperienceLevel.MID),
    ])
    def test_experience_level_coercion(self, raw, expected):
        assert JobRequirement(title="x", experience_level=raw).experience_level == expected

    def test_blank_skills_dropped(self):
        job = JobRequirement(title="x", required_skills=["React", " ", ""])
        assert job.required_skills == ["React"]

    def test_is_technical(self):
        assert JobRequirement(title="x", category="qa-automation").is_technical
        assert not JobRequirement(title="x", category="business").is_technical

    def test_frozen(self, software_job):
        with pytest.raises(ValidationError):
            software_job.title = "Other"


class TestCandidateProfile:
    def test_none_collections_become_empty(self):
        profile = CandidateProfile(skills=None, projects=None, education=None, resume_text=None)
        assert profile.skills == []
        assert profile.projects == []
        assert profile.education == []
        assert profile.resume_text == ""

    def test_readiness_defaults_and_clamps(self):
        assert CandidateProfile().readiness_score == 50
        assert CandidateProfile(readiness_score=None).readiness_score == 50
        assert CandidateProfile(readiness_score=140).readiness_score == 100

    def test_signal_scores_clamped(self):
        profile = CandidateProfile(code_activity_score=-5, algorithmic_score=140)
        assert profile.code_activity_score == 0
        assert profile.algorithmic_score == 100

    def test_missing_signal_scores_stay_none(self):
        profile = CandidateProfile(code_activity_score=None)
        assert profile.code_activity_score is None
        assert profile.algorithmic_score is None

    def test_project_tech_stack_none(self):
        profile = CandidateProfile(projects=[{"name": "x", "tech_stack": None}])
        assert profile.projects[0].tech_stack == []


class TestScoringModels:
    def test_breakdown_clamps(self):
        breakdown = ScoringBreakdown(skill_match=130, experience=-4, readiness=49.5)
        assert breakdown.skill_match == 100
        assert breakdown.experience == 0
        assert breakdown.readiness == 50

    def test_non_zero(self):
        assert ScoringBreakdown(skill_match=80, readiness=50).non_zero() == [80, 50]

    def test_blocker_count(self):
        result = ScoringResult(risk_factors=[
            RiskFactor(severity="blocker", message="a", category="skills"),
            RiskFactor(severity="warning", message="b", category="profile"),
        ])
        assert result.blocker_count == 1

    def test_blended_evaluation_extends_result(self):
        evaluation = BlendedEvaluation(overall_score=70)
        assert isinstance(evaluation, ScoringResult)
        assert evaluation.scoring_method == "deterministic"
        assert evaluation.ai_score is None
        assert evaluation.ai_scores is None

    def test_batch_summary_defaults(self):
        summary = BatchEvaluationSummary()
        assert summary.total == summary.evaluated == summary.failed == 0


class TestAIJudgment:
    def test_parses_camel_case(self):
        judgment = AIJudgment.model_validate({
            "overallScore": 81,
            "hiringReadinessScore": 81,
            "skillMatch": 90,
            "confidenceLevel": "High",
            "riskFactors": ["No portfolio"],
            "aiSummary": "Strong fit.",
            "interviewQuestions": ["Why React?"],
        })
        assert judgment.overall_score == 81
        assert judgment.skill_match == 90
        assert judgment.confidence_level == ConfidenceLevel.HIGH
        assert judgment.risk_factors == ["No portfolio"]
        assert judgment.ai_summary == "Strong fit."

    def test_overall_score_required(self):
        with pytest.raises(ValidationError):
            AIJudgment.model_validate({"skillMatch": 50})

    def test_scores_clamped(self):
        judgment = AIJudgment.model_validate({"overallScore": 140, "confidence": -3})
        assert judgment.overall_score == 100
        assert judgment.confidence == 0

    def test_bool_score_rejected(self):
        with pytest.raises(ValidationError):
            AIJudgment.model_validate({"overallScore": True})

    @pytest.mark.parametrize("bad", [[80], {"value": 80}, float("inf"), float("nan"), "eighty"])
    def test_unusable_score_rejected(self, bad):
        with pytest.raises(ValidationError):
            AIJudgment.model_validate({"overallScore": bad})

    def test_numeric_string_score_accepted(self):
        assert AIJudgment.model_validate({"overallScore": "72.6"}).overall_score == 73

    def test_non_list_strengths_rejected(self):
        with pytest.raises(ValidationError):
            AIJudgment.model_validate({"overallScore": 80, "strengths": 5})

    @pytest.mark.parametrize("raw,expected", [
        ("Select", Recommendation.SELECT),
        (" review ", Recommendation.REVIEW),
        ("REJECT", Recommendation.REJECT),
        ("hire", None),
        (None, None),
    ])
    def test_recommendation_parsed(self, raw, expected):
        judgment = AIJudgment.model_validate({"overallScore": 50, "recommendation": raw})
        assert judgment.recommendation == expected

    def test_unknown_confidence_level_ignored(self):
        judgment = AIJudgment.model_validate({"overallScore": 50, "confidenceLevel": "very"})
        assert judgment.confidence_level is None

    def test_list_items_normalized(self):
        judgment = AIJudgment.model_validate({
            "overallScore": 50,
            "riskFactors": [{"message": "Short tenure"}, "", None, "Gap year"],
            "strengths": "Single strength",
            "gaps": None,
        })
        assert judgment.risk_factors == ["Short tenure", "Gap year"]
        assert judgment.strengths == ["Single strength"]
        assert judgment.gaps == []


class TestAIJudgmentOutcome:
    def test_success(self):
        outcome = AIJudgmentOutcome.success(AIJudgment(overall_score=70), attempts=2)
        assert outcome.ok
        assert outcome.attempts == 2

    def test_failure(self):
        outcome = AIJudgmentOutcome.failure("timeout", attempts=1)
        assert not outcome.ok
        assert outcome.error == "timeout"
        assert AIJudgmentOutcome.failure("").error == "unknown error"
