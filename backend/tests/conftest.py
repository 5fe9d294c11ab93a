"""Shared fixtures: sample jobs and candidate profiles."""

import pytest

from models.schemas.candidate_profile import CandidateProfile, Education, Project, WorkExperience
from models.schemas.job_requirement import JobRequirement


SAMPLE_RESUME = """
Jane Smith
Full-stack engineer with four years of experience building React frontends
and Node.js services. Shipped a payments dashboard used by 20k merchants and
migrated a monolith to containerized microservices on AWS.
"""


@pytest.fixture
def software_job():
    return JobRequirement(
        title="Full Stack Developer",
        category="software",
        experience_level="mid",
        required_skills=["React", "Node.js"],
        description="Build and maintain our merchant-facing web platform.",
    )


@pytest.fixture
def business_job():
    return JobRequirement(
        title="Account Manager",
        category="business",
        experience_level="junior",
        required_skills=["Salesforce", "Negotiation"],
    )


@pytest.fixture
def minimal_candidate():
    """Skills and declared years only: no projects, no activity, no resume."""
    return CandidateProfile(
        candidate_id="cand-min",
        name="Sam Lee",
        skills=["react", "nodejs", "python"],
        years_of_experience=4,
    )


@pytest.fixture
def strong_candidate():
    return CandidateProfile(
        candidate_id="cand-strong",
        name="Jane Smith",
        skills=["React", "Node", "TypeScript", "PostgreSQL", "Docker"],
        experience=[
            WorkExperience(company="Shopify", role="Software Engineer", current=True),
            WorkExperience(company="Acme", role="Junior Developer"),
        ],
        education=[Education(degree="B.Tech Computer Science", institution="IIT Delhi", year="2019")],
        certifications=["AWS Certified Developer"],
        projects=[
            Project(name="Merchant dashboard", tech_stack=["React", "Node.js"]),
            Project(name="Billing API", tech_stack=["Express", "NodeJS", "PostgreSQL"]),
            Project(name="CLI tool", tech_stack=["Go"]),
        ],
        years_of_experience=4,
        code_activity_score=82,
        algorithmic_score=74,
        readiness_score=80,
        resume_text=SAMPLE_RESUME * 2,
        github_username="janesmith",
        linkedin_url="https://linkedin.com/in/janesmith",
        top_languages=["TypeScript", "JavaScript", "Go"],
    )
