#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from core.scorer.models import MatchResult


class MatchSummary(BaseModel):
    """One ranked job for a candidate."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "job_id": "job-icu-001",
                "title": "ICU Registered Nurse",
                "facility_name": "St. Mary's Medical Center",
                "location": "Austin, TX",
                "employment_type": "full_time",
                "created_at": "2026-02-01T12:00:00+00:00",
                "match_score": 85,
                "matched_certifications": ["acls", "bls"],
                "matched_skills": ["critical care"],
                "experience_match": True,
                "scored_by": "rule_based"
            }
        }
    )

    job_id: str
    title: str
    facility_name: str
    location: Optional[str] = None
    employment_type: Optional[str] = None
    created_at: Optional[str] = None
    match_score: int = Field(ge=0, le=100)
    matched_certifications: List[str] = Field(default_factory=list)
    matched_skills: List[str] = Field(default_factory=list)
    experience_match: bool
    scored_by: str

    @classmethod
    def from_result(cls, result: MatchResult) -> "MatchSummary":
        return cls(**result.to_dict())


class MatchesResponse(BaseModel):
    """Response for the match list endpoints."""
    success: bool = True
    count: int
    matches: List[MatchSummary]


class HealthResponse(BaseModel):
    status: str
    service: str
