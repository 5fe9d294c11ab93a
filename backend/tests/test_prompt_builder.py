"""Tests for the evaluation prompt."""

from services.prompt_builder import build_evaluation_prompt
from services.scoring_engine import score_candidate


class TestBuildEvaluationPrompt:
    def test_includes_job_and_candidate(self, software_job, strong_candidate):
        prompt = build_evaluation_prompt(strong_candidate, software_job)
        assert "Full Stack Developer" in prompt
        assert "Jane Smith" in prompt
        assert "React, Node.js" in prompt
        assert "Software Engineer at Shopify" in prompt

    def test_skill_coverage_from_normalizer(self, software_job, strong_candidate):
        prompt = build_evaluation_prompt(strong_candidate, software_job)
        assert "Current skill coverage: 100% (2/2 skills)" in prompt

    def test_github_relevant_for_technical_roles(self, software_job, business_job, minimal_candidate):
        technical = build_evaluation_prompt(minimal_candidate, software_job)
        business = build_evaluation_prompt(minimal_candidate, business_job)
        assert "is RELEVANT for this technical role" in technical
        assert "NOT RELEVANT for this non-technical role" in business

    def test_level_expectations(self, business_job, minimal_candidate):
        prompt = build_evaluation_prompt(minimal_candidate, business_job)
        assert "Junior role" in prompt
        assert "~2+ years" in prompt

    def test_deterministic_context_optional(self, software_job, minimal_candidate):
        without = build_evaluation_prompt(minimal_candidate, software_job)
        assert "DETERMINISTIC PRE-ANALYSIS" not in without

        result = score_candidate(software_job, minimal_candidate)
        with_context = build_evaluation_prompt(minimal_candidate, software_job, result)
        assert "DETERMINISTIC PRE-ANALYSIS" in with_context
        assert f"Rule-based overall score: {result.overall_score}/100" in with_context

    def test_json_contract(self, software_job, minimal_candidate):
        prompt = build_evaluation_prompt(minimal_candidate, software_job)
        for key in ("overallScore", "confidenceLevel", "riskFactors", "interviewQuestions"):
            assert f'"{key}"' in prompt

    def test_missing_data_placeholders(self, software_job, minimal_candidate):
        prompt = build_evaluation_prompt(minimal_candidate, software_job)
        assert "No experience listed" in prompt
        assert "No projects listed" in prompt
