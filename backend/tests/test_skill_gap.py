"""Tests for per-skill gap analysis."""

import pytest

from models.schemas.skill_gap import SkillStatus
from services.skill_gap import analyze_skill_gaps, estimate_level, is_core_skill, status_for


REQUIRED = ["React", "Python", "Figma", "Terraform"]
CANDIDATE = ["reactjs", "python scripting", "figma prototyping", "GraphQL"]


class TestLevels:
    def test_exact_core_match(self):
        assert estimate_level("React", ["reactjs"]) == 95

    def test_partial_core_match(self):
        assert estimate_level("Python", ["python scripting"]) == 75

    def test_partial_non_core_match(self):
        assert estimate_level("Figma", ["figma prototyping"]) == 65

    def test_exact_non_core_match(self):
        assert estimate_level("GraphQL", ["Apollo"]) == 85

    def test_missing(self):
        assert estimate_level("Terraform", CANDIDATE) == 0

    def test_core_check_is_substring(self):
        assert is_core_skill("Node.js")
        assert is_core_skill("React Native")
        assert not is_core_skill("Figma")

    @pytest.mark.parametrize("level,expected", [
        (95, SkillStatus.STRONG),
        (80, SkillStatus.STRONG),
        (79, SkillStatus.MODERATE),
        (50, SkillStatus.MODERATE),
        (49, SkillStatus.WEAK),
    ])
    def test_status_thresholds(self, level, expected):
        assert status_for(level) == expected


class TestAnalyzeSkillGaps:
    def test_grouping_and_order(self):
        analysis = analyze_skill_gaps(REQUIRED, CANDIDATE)

        assert [e.skill for e in analysis.strong_skills] == ["React", "GraphQL"]
        assert [e.skill for e in analysis.moderate_skills] == ["Python", "Figma"]
        assert analysis.weak_skills == []
        assert [e.skill for e in analysis.missing_skills] == ["Terraform"]
        assert analysis.missing_skills[0].gap == 100
        assert analysis.moderate_skills[0].gap == 25

    def test_overall_is_mean_of_required_levels(self):
        # (95 + 75 + 65 + 0) / 4 = 58.75
        assert analyze_skill_gaps(REQUIRED, CANDIDATE).overall_match == 59

    def test_bonus_skills_not_counted_in_overall(self):
        analysis = analyze_skill_gaps(["React"], ["React", "GraphQL", "graph ql"])

        assert analysis.overall_match == 95
        assert [e.skill for e in analysis.bonus_skills] == ["GraphQL"]
        assert analysis.bonus_skills[0].required is False

    def test_matched_candidate_skill_is_not_a_bonus(self):
        analysis = analyze_skill_gaps(["Python"], ["python scripting"])
        assert analysis.bonus_skills == []

    def test_summary_with_missing_skills(self):
        assert analyze_skill_gaps(REQUIRED, CANDIDATE).summary == (
            "Overall skill match: 59%. Significant skill gaps identified. "
            "Out of 4 required skills: 1 strong, 2 moderate, 0 weak, 1 missing. "
            "Focus on validating experience with missing skills during interview."
        )

    def test_summary_excellent(self):
        analysis = analyze_skill_gaps(["React", "Node.js"], ["React", "node"])
        assert analysis.summary == (
            "Overall skill match: 95%. Excellent alignment! "
            "Out of 2 required skills: 2 strong, 0 moderate, 0 weak, 0 missing."
        )

    def test_summary_good(self):
        analysis = analyze_skill_gaps(["Python", "Figma"], ["python scripting", "figma prototyping"])
        assert analysis.overall_match == 70
        assert "Good alignment with some gaps." in analysis.summary

    def test_no_required_skills(self):
        analysis = analyze_skill_gaps([], ["React"])
        assert analysis.overall_match == 0
        assert [e.skill for e in analysis.bonus_skills] == ["React"]

    def test_blank_skills_ignored(self):
        analysis = analyze_skill_gaps(["React", " "], ["", "react"])
        assert analysis.overall_match == 95
        assert analysis.missing_skills == []
