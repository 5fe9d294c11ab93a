"""Skill gap analysis: estimated proficiency per required skill.

Builds on the skill normalizer's matching rules. A required skill matched
by the same canonical form is rated higher than one only matched by
substring or alias, and core technologies get a small bump.
"""

import logging

from models.schemas.scoring_result import round_half_up
from models.schemas.skill_gap import SkillGapAnalysis, SkillGapEntry, SkillStatus
from services.skill_normalizer import match, normalize

logger = logging.getLogger(__name__)

EXACT_MATCH_LEVEL = 85
PARTIAL_MATCH_LEVEL = 65
CORE_SKILL_BONUS = 10

STRONG_THRESHOLD = 80
MODERATE_THRESHOLD = 50

# Checked by substring against the lower-cased skill
CORE_SKILLS = (
    "react", "angular", "vue", "node", "python", "java", "javascript", "typescript",
    "mongodb", "postgresql", "mysql", "docker", "kubernetes", "aws", "azure", "gcp", "git",
)


def is_core_skill(skill: str) -> bool:
    lowered = (skill or "").lower()
    return any(core in lowered for core in CORE_SKILLS)


def status_for(level: int) -> SkillStatus:
    if level >= STRONG_THRESHOLD:
        return SkillStatus.STRONG
    if level >= MODERATE_THRESHOLD:
        return SkillStatus.MODERATE
    return SkillStatus.WEAK


def estimate_level(skill: str, candidate_skills: list[str]) -> int:
    """Proficiency estimate for one required skill, 0 when the candidate lacks it."""
    hit = next((c for c in candidate_skills if match(skill, c)), None)
    if hit is None:
        return 0
    level = EXACT_MATCH_LEVEL if normalize(skill) == normalize(hit) else PARTIAL_MATCH_LEVEL
    if is_core_skill(skill):
        level += CORE_SKILL_BONUS
    return min(level, 100)


def _entry(skill: str, level: int, required: bool) -> SkillGapEntry:
    return SkillGapEntry(
        skill=skill,
        required=required,
        candidate_level=level,
        status=status_for(level) if level > 0 else SkillStatus.MISSING,
        gap=100 - level,
    )


def _summary(overall: int, required_count: int, counts: dict[SkillStatus, int]) -> str:
    text = f"Overall skill match: {overall}%. "
    if overall >= 80:
        text += "Excellent alignment! "
    elif overall >= 60:
        text += "Good alignment with some gaps. "
    else:
        text += "Significant skill gaps identified. "
    text += (
        f"Out of {required_count} required skills: "
        f"{counts[SkillStatus.STRONG]} strong, {counts[SkillStatus.MODERATE]} moderate, "
        f"{counts[SkillStatus.WEAK]} weak, {counts[SkillStatus.MISSING]} missing."
    )
    if counts[SkillStatus.MISSING]:
        text += " Focus on validating experience with missing skills during interview."
    return text


def analyze_skill_gaps(required_skills: list[str], candidate_skills: list[str]) -> SkillGapAnalysis:
    """Rate every required skill and list the candidate's extra skills as bonus entries."""
    required = [s for s in required_skills if normalize(s)]
    candidate = [s for s in candidate_skills if normalize(s)]

    entries = [_entry(skill, estimate_level(skill, candidate), required=True) for skill in required]

    # Bonus skills: whatever the candidate lists that no required skill accounts for
    seen_bonus: set[str] = set()
    for skill in candidate:
        norm = normalize(skill)
        if norm in seen_bonus or any(match(r, skill) for r in required):
            continue
        seen_bonus.add(norm)
        entries.append(_entry(skill, estimate_level(skill, [skill]), required=False))

    required_levels = [e.candidate_level for e in entries if e.required]
    overall = round_half_up(sum(required_levels) / len(required_levels)) if required_levels else 0

    grouped: dict[SkillStatus, list[SkillGapEntry]] = {status: [] for status in SkillStatus}
    for entry in entries:
        grouped[entry.status].append(entry)
    for status in (SkillStatus.STRONG, SkillStatus.MODERATE, SkillStatus.WEAK):
        grouped[status].sort(key=lambda e: e.candidate_level, reverse=True)

    counts = {
        status: sum(1 for e in grouped[status] if e.required) for status in SkillStatus
    }
    analysis = SkillGapAnalysis(
        overall_match=overall,
        strong_skills=grouped[SkillStatus.STRONG],
        moderate_skills=grouped[SkillStatus.MODERATE],
        weak_skills=grouped[SkillStatus.WEAK],
        missing_skills=grouped[SkillStatus.MISSING],
        summary=_summary(overall, len(required), counts),
    )
    logger.debug("Skill gap analysis: %d required, overall %d%%", len(required), overall)
    return analysis
