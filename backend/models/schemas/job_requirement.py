"""Job-side input to the evaluation engine."""

from enum import Enum

from pydantic import BaseModel, field_validator


class JobCategory(str, Enum):
    SOFTWARE = "software"
    DATA_SCIENCE = "data-science"
    QA_AUTOMATION = "qa-automation"
    NON_TECHNICAL = "non-technical"
    BUSINESS = "business"


class ExperienceLevel(str, Enum):
    FRESHER = "fresher"
    JUNIOR = "junior"
    MID = "mid"
    SENIOR = "senior"


# Older job records still carry these level names
_LEGACY_LEVELS = {"entry": ExperienceLevel.FRESHER, "lead": ExperienceLevel.SENIOR}

TECHNICAL_CATEGORIES = frozenset({
    JobCategory.SOFTWARE,
    JobCategory.DATA_SCIENCE,
    JobCategory.QA_AUTOMATION,
})


class JobRequirement(BaseModel):
    """A job as the engine sees it.

    Unknown categories fall back to ``software`` and unknown experience
    levels to ``mid``, so any record from the persistence layer validates.
    """
    title: str = ""
    category: JobCategory = JobCategory.SOFTWARE
    experience_level: ExperienceLevel = ExperienceLevel.MID
    required_skills: list[str] = []

    # Descriptive fields, only used to give the AI judge context
    description: str = ""
    department: str = "General"
    location: str = "Remote"
    employment_type: str = "Full-time"

    model_config = {"frozen": True}

    @field_validator("category", mode="before")
    @classmethod
    def _coerce_category(cls, value):
        if isinstance(value, JobCategory):
            return value
        try:
            return JobCategory(str(value).strip().lower())
        except ValueError:
            return JobCategory.SOFTWARE

    @field_validator("experience_level", mode="before")
    @classmethod
    def _coerce_level(cls, value):
        if isinstance(value, ExperienceLevel):
            return value
        key = str(value).strip().lower()
        if key in _LEGACY_LEVELS:
            return _LEGACY_LEVELS[key]
        try:
            return ExperienceLevel(key)
        except ValueError:
            return ExperienceLevel.MID

    @field_validator("required_skills", mode="before")
    @classmethod
    def _drop_blank_skills(cls, value):
        if value is None:
            return []
        return [s for s in value if isinstance(s, str) and s.strip()]

    @property
    def is_technical(self) -> bool:
        return self.category in TECHNICAL_CATEGORIES
