"""Skill Normalizer output: overlap between a required and a candidate skill list."""

from pydantic import BaseModel


class SkillMatchDetail(BaseModel):
    """How a single required skill was resolved."""
    required_skill: str
    matched: bool = False
    matched_with: str = ""  # candidate token that satisfied it, empty if unmatched
    canonical: str = ""  # normalized form of the required skill


class SkillMatchResult(BaseModel):
    score: int = 0  # 0-100, share of required skills matched
    matched: list[str] = []
    missing: list[str] = []
    details: list[SkillMatchDetail] = []
