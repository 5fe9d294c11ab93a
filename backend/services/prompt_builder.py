"""Prompt template for the Gemini candidate evaluation call."""

from models.schemas.candidate_profile import CandidateProfile
from models.schemas.job_requirement import ExperienceLevel, JobRequirement
from models.schemas.scoring_result import ScoringResult
from services import skill_normalizer

# Rough years expected per level, quoted to the model
REQUIRED_YEARS = {
    ExperienceLevel.FRESHER: 0.5,
    ExperienceLevel.JUNIOR: 2,
    ExperienceLevel.MID: 4,
    ExperienceLevel.SENIOR: 6,
}

LEVEL_EXPECTATIONS = {
    ExperienceLevel.FRESHER: "Entry-level role: Focus on learning potential, basic projects are acceptable, academic experience counts.",
    ExperienceLevel.JUNIOR: "Junior role: Expect 1-3 years experience, personal/end-to-end projects, growing skill set.",
    ExperienceLevel.MID: "Mid-level role: Expect 3-6 years experience, production/team projects, solid expertise.",
    ExperienceLevel.SENIOR: "Senior role: Expect 6+ years experience, scalable systems, leadership, architecture skills.",
}


def _format_experience(candidate: CandidateProfile) -> str:
    if not candidate.experience:
        return "No experience listed"
    entries = []
    for exp in candidate.experience:
        start = exp.start_date.year if exp.start_date else "N/A"
        if exp.current:
            end = "Present"
        else:
            end = exp.end_date.year if exp.end_date else "N/A"
        line = f"{exp.role} at {exp.company} ({start} - {end})"
        if exp.description:
            line += f": {exp.description[:150]}"
        entries.append(line)
    return " | ".join(entries)


def _format_education(candidate: CandidateProfile) -> str:
    if not candidate.education:
        return "No education listed"
    return " | ".join(f"{e.degree} from {e.institution} ({e.year})" for e in candidate.education)


def _format_projects(candidate: CandidateProfile) -> str:
    if not candidate.projects:
        return "No projects listed"
    entries = []
    for proj in candidate.projects:
        line = proj.name
        if proj.tech_stack:
            line += f" [Tech: {', '.join(proj.tech_stack)}]"
        if proj.description:
            line += f" - {proj.description[:100]}"
        entries.append(line)
    return " | ".join(entries)


def _format_signal(value: float | None, label: str) -> str:
    return f"{label} score {value:.0f}/100" if value is not None else "Not provided"


def build_evaluation_prompt(
    candidate: CandidateProfile,
    job: JobRequirement,
    deterministic: ScoringResult | None = None,
) -> str:
    """Evaluation prompt with job-relative confidence rules and a strict JSON contract.

    The deterministic result, when given, is included as calibration context.
    """
    coverage = skill_normalizer.match_set(job.required_skills, candidate.skills)
    coverage_percent = coverage.score if job.required_skills else 0
    required_years = REQUIRED_YEARS.get(job.experience_level, 3)
    expectation = LEVEL_EXPECTATIONS.get(job.experience_level, LEVEL_EXPECTATIONS[ExperienceLevel.MID])

    has_resume = bool(candidate.skills or candidate.experience)
    has_complete_profile = bool(candidate.experience and candidate.education)
    has_external_signals = bool(candidate.code_activity_score or candidate.algorithmic_score)
    has_projects = bool(candidate.projects)

    if job.is_technical:
        activity_note = "Code activity (GitHub) is RELEVANT for this technical role - consider it in evaluation."
    else:
        activity_note = "Code activity (GitHub) is NOT RELEVANT for this non-technical role - do not penalize for missing GitHub."

    context_section = ""
    if deterministic is not None:
        bd = deterministic.scoring_breakdown
        context_section = f"""
## DETERMINISTIC PRE-ANALYSIS (use as calibration reference, not as final scores)
- Rule-based overall score: {deterministic.overall_score}/100
- Skill match: {bd.skill_match}, Experience: {bd.experience}, Education: {bd.education_strength}, Projects: {bd.project_relevance}
- Matched skills: {', '.join(coverage.matched) or 'None'}
- Missing skills: {', '.join(coverage.missing) or 'None'}
- Rule-based risks: {'; '.join(r.message for r in deterministic.risk_factors) or 'None'}
"""

    return f"""You are an AI hiring evaluation assistant.

Your task is to evaluate a candidate for a SPECIFIC JOB ROLE and return a structured assessment.

## CONTEXT-AWARE EVALUATION (IMPORTANT!)
- **Job Category**: {job.category.value} ({'Technical' if job.is_technical else 'Non-Technical'})
- **{activity_note}**
- **Experience Level Expectations**: {expectation}

## CONFIDENCE CALCULATION RULES (MANDATORY)
Calculate confidence using ONLY these job-relative factors:

1. **Skill Coverage** (based on required job skills):
   - >= 80% required skills matched -> +20 points
   - 60-79% matched -> +10 points
   - < 60% matched -> +0 points
   - Current skill coverage: {coverage_percent}% ({len(coverage.matched)}/{len(job.required_skills)} skills)

2. **Experience Alignment** (job requires {job.experience_level.value} level, ~{required_years}+ years):
   - Meets or exceeds requirement -> +20 points
   - Slightly below requirement -> +10 points
   - Far below requirement -> +0 points

3. **Signal Reliability**:
   - Resume + complete profile + relevant external signals -> +20 points
   - Resume + partial data -> +10 points
   - Resume only -> +0 points
   - Current signals: Resume={has_resume}, CompleteProfile={has_complete_profile}, ExternalSignals={has_external_signals}, Projects={has_projects}

4. **Risk Penalty**:
   - Deduct 10 points for EACH major risk factor identified

Final Confidence: Score >= 70 -> "High" | 50-69 -> "Medium" | < 50 -> "Low"

## JOB CONTEXT
- **Title**: {job.title}
- **Department**: {job.department}
- **Required Skills**: {', '.join(job.required_skills) or 'Not specified'}
- **Experience Level**: {job.experience_level.value} (~{required_years}+ years)
- **Location**: {job.location}
- **Employment Type**: {job.employment_type}
- **Job Description**: {job.description[:500]}

## CANDIDATE DATA
- **Name**: {candidate.name or 'Not provided'}
- **Declared Years of Experience**: {candidate.years_of_experience if candidate.years_of_experience is not None else 'Not specified'}
- **Skills**: {', '.join(candidate.skills) or 'Not specified'}
- **Work Experience**: {_format_experience(candidate)}
- **Education**: {_format_education(candidate)}
- **Projects**: {_format_projects(candidate)}
- **Certifications**: {', '.join(candidate.certifications) or 'None'}
- **GitHub Profile**: {candidate.github_username or 'Not provided'} ({_format_signal(candidate.code_activity_score, 'Activity')})
- **Top Languages**: {', '.join(candidate.top_languages) or 'N/A'}
- **Coding Challenges**: {_format_signal(candidate.algorithmic_score, 'Problem-solving')}
- **Cover Letter Summary**: {candidate.cover_letter[:200] or 'Not provided'}
{context_section}
## EVALUATION INSTRUCTIONS
1. Compare candidate skills against required skills using semantic matching (e.g., "Node" = "NodeJS" = "node.js").
2. Verify experience years and relevance of work history to the role.
3. Evaluate whether projects use a similar tech stack and their complexity.
4. Identify gaps between requirements and qualifications; flag inconsistencies.
5. Recommendation: aiMatchScore >= 75 -> "select", 50-74 -> "review", < 50 -> "reject".

## OUTPUT FORMAT (STRICT JSON ONLY - NO MARKDOWN, NO CODE BLOCKS)
{{
  "aiMatchScore": <number 0-100>,
  "hiringReadinessScore": <number 0-100>,
  "overallScore": <number 0-100 same as hiringReadinessScore>,
  "skillMatch": <number 0-100>,
  "experienceScore": <number 0-100>,
  "educationScore": <number 0-100>,
  "projectAlignmentScore": <number 0-100>,
  "confidenceLevel": "High" | "Medium" | "Low",
  "confidence": <number 0-100 internal calculation>,
  "riskFactors": ["risk 1", "risk 2"],
  "strengths": ["strength 1", "strength 2", "strength 3"],
  "gaps": ["gap 1", "gap 2"],
  "recommendation": "select" | "review" | "reject",
  "aiSummary": "2-3 sentence professional assessment",
  "projectAnalysis": "Brief analysis of how the candidate's projects align with job requirements",
  "interviewQuestions": ["targeted question 1", "targeted question 2", "targeted question 3"],
  "improvementSuggestions": ["suggestion 1", "suggestion 2"]
}}

## RULES
- Confidence MUST be job-specific and calculated per the rules above
- Do NOT use subjective or biased language
- Be explainable and ethical in scoring
- Consider both demonstrated skills and growth potential"""
