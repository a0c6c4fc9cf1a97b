#!/usr/bin/env python3
"""
Test suite configuration and utilities.

All tests can be run with standard Python tools:

    # Run all tests
    python -m pytest tests/ -v

    # Using unittest
    python -m unittest discover tests -v

Helpers here build profiles and postings with sensible defaults so each
test only spells out the fields it cares about.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

from core.scorer.models import CandidateProfile, JobPosting

BASE_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_profile(**overrides: Any) -> CandidateProfile:
    """Build a CandidateProfile; labels may be given as lists."""
    data = {
        "candidate_id": "user-1",
        "profile_id": "profile-1",
        "certifications": [],
        "skills": [],
        "years_of_experience": 0,
    }
    data.update(overrides)
    return CandidateProfile.from_dict(data)


def make_job(job_id: str = "job-1", days_after_base: float = 0, **overrides: Any) -> JobPosting:
    """Build a JobPosting created `days_after_base` days after BASE_TIME."""
    data = {
        "id": job_id,
        "title": f"Nurse {job_id}",
        "facility_name": "General Hospital",
        "required_certifications": [],
        "required_skills": [],
        "min_experience_years": 0,
        "created_at": BASE_TIME + timedelta(days=days_after_base),
    }
    data.update(overrides)
    return JobPosting.from_dict(data)


def worked_example():
    """The reference scenario: a nurse, a partially matched job A and an open job B."""
    profile = make_profile(
        certifications=["BLS", "NCLEX"],
        skills=["Critical Care"],
        years_of_experience=3,
    )
    job_a = make_job(
        "job-a",
        days_after_base=0,
        required_certifications=["BLS", "ACLS"],
        required_skills=["Critical Care", "Patient Assessment"],
        min_experience_years=2,
    )
    job_b = make_job("job-b", days_after_base=1)
    return profile, job_a, job_b
