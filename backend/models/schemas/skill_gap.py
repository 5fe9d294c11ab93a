"""Per-skill gap report for a candidate against a job's required skills."""

from enum import Enum

from pydantic import BaseModel


class SkillStatus(str, Enum):
    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"
    MISSING = "missing"


class SkillGapEntry(BaseModel):
    skill: str
    required: bool = True  # False for bonus skills the job did not ask for
    candidate_level: int = 0  # estimated proficiency 0-100
    status: SkillStatus = SkillStatus.MISSING
    gap: int = 100  # 100 - candidate_level


class SkillGapAnalysis(BaseModel):
    overall_match: int = 0  # mean level across required skills
    strong_skills: list[SkillGapEntry] = []
    moderate_skills: list[SkillGapEntry] = []
    weak_skills: list[SkillGapEntry] = []
    missing_skills: list[SkillGapEntry] = []
    summary: str = ""

    @property
    def bonus_skills(self) -> list[SkillGapEntry]:
        return [
            entry
            for entry in self.strong_skills + self.moderate_skills + self.weak_skills
            if not entry.required
        ]
