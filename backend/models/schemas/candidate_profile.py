"""Candidate-side input to the evaluation engine.

Fields mirror what the resume parser and profile store hand over. Optional
collections arrive as ``None`` from older records; they are normalized to
empty lists here so scoring code never has to check.
"""

from datetime import date

from pydantic import BaseModel, field_validator

NEUTRAL_READINESS_SCORE = 50.0


class WorkExperience(BaseModel):
    """A single work experience entry."""
    company: str = ""
    role: str = ""
    start_date: date | None = None
    end_date: date | None = None
    current: bool = False
    description: str = ""


class Education(BaseModel):
    """A single education entry."""
    degree: str = ""
    institution: str = ""
    year: str = ""


class Project(BaseModel):
    """A single project entry."""
    name: str = ""
    description: str = ""
    tech_stack: list[str] = []

    @field_validator("tech_stack", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return [] if value is None else value


class CandidateProfile(BaseModel):
    candidate_id: str | None = None
    name: str = ""
    skills: list[str] = []
    experience: list[WorkExperience] = []
    education: list[Education] = []
    certifications: list[str] = []
    projects: list[Project] = []
    years_of_experience: float | None = None

    # External signals, 0-100 when present
    code_activity_score: float | None = None  # e.g. GitHub analysis
    algorithmic_score: float | None = None  # e.g. LeetCode stats
    readiness_score: float = NEUTRAL_READINESS_SCORE  # latest completed assessment

    resume_text: str = ""
    cover_letter: str = ""
    github_username: str = ""
    linkedin_url: str = ""
    portfolio_url: str = ""
    top_languages: list[str] = []

    model_config = {"frozen": True}

    @field_validator(
        "skills", "experience", "education", "certifications", "projects", "top_languages",
        mode="before",
    )
    @classmethod
    def _none_to_empty(cls, value):
        return [] if value is None else value

    @field_validator("resume_text", "cover_letter", "github_username", "linkedin_url",
                     "portfolio_url", "name", mode="before")
    @classmethod
    def _none_to_blank(cls, value):
        return "" if value is None else value

    @field_validator("readiness_score", mode="before")
    @classmethod
    def _default_readiness(cls, value):
        if value is None:
            return NEUTRAL_READINESS_SCORE
        return max(0.0, min(100.0, float(value)))

    @field_validator("code_activity_score", "algorithmic_score", mode="before")
    @classmethod
    def _clamp_signal(cls, value):
        if value is None:
            return None
        return max(0.0, min(100.0, float(value)))
