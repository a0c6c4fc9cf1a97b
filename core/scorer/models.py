#!/usr/bin/env python3
"""
Scoring Models - Data structures for matching inputs and results.

CandidateProfile and JobPosting are read-only inputs handed to the engine by
the stores. MatchResult is engine-owned and ephemeral: built fresh per scoring
call, never mutated, never persisted.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, FrozenSet, Optional, Tuple

SCORED_BY_RULES = "rule_based"
SCORED_BY_AI = "ai_assisted"


def _as_labels(value: Any) -> Tuple[str, ...]:
    """Coerce a raw label collection into a tuple, keeping order."""
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    try:
        return tuple(value)
    except TypeError:
        return ()


def _as_non_negative_int(value: Any) -> int:
    """Coerce experience-like values; anything unusable counts as 0."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(0, number)


def _as_optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _as_datetime(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class CandidateProfile:
    """A nurse's claims: certifications, skills, experience and preferences."""
    candidate_id: str
    certifications: Tuple[str, ...] = ()
    skills: Tuple[str, ...] = ()
    years_of_experience: int = 0
    specialization: Optional[str] = None
    location: Optional[str] = None
    profile_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CandidateProfile":
        """Build a profile from a store record, degrading bad fields to 'no claim'."""
        return cls(
            candidate_id=str(data.get("candidate_id") or data.get("user_id") or ""),
            certifications=_as_labels(data.get("certifications")),
            skills=_as_labels(data.get("skills")),
            years_of_experience=_as_non_negative_int(data.get("years_of_experience")),
            specialization=_as_optional_str(data.get("specialization")),
            location=_as_optional_str(data.get("location")),
            profile_id=_as_optional_str(data.get("profile_id")),
        )


@dataclass(frozen=True)
class JobPosting:
    """An active job posting with its requirements."""
    id: str
    title: str = ""
    facility_name: str = ""
    required_certifications: Tuple[str, ...] = ()
    required_skills: Tuple[str, ...] = ()
    min_experience_years: int = 0
    created_at: Optional[datetime] = None
    specialization: Optional[str] = None
    location: Optional[str] = None
    employment_type: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self):
        # Naive timestamps are read as UTC so postings from any store stay comparable
        if self.created_at is not None and self.created_at.tzinfo is None:
            object.__setattr__(self, "created_at", self.created_at.replace(tzinfo=timezone.utc))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JobPosting":
        """Build a posting from a store record."""
        return cls(
            id=str(data["id"]),
            title=str(data.get("title") or ""),
            facility_name=str(data.get("facility_name") or ""),
            required_certifications=_as_labels(data.get("required_certifications")),
            required_skills=_as_labels(data.get("required_skills")),
            min_experience_years=_as_non_negative_int(data.get("min_experience_years")),
            created_at=_as_datetime(data.get("created_at")),
            specialization=_as_optional_str(data.get("specialization")),
            location=_as_optional_str(data.get("location")),
            employment_type=_as_optional_str(data.get("employment_type")),
            description=_as_optional_str(data.get("description")),
        )


@dataclass(frozen=True)
class MatchResult:
    """Score and evidence for one (profile, job) pair."""
    job: JobPosting
    match_score: int
    matched_certifications: FrozenSet[str] = field(default_factory=frozenset)
    matched_skills: FrozenSet[str] = field(default_factory=frozenset)
    experience_match: bool = False
    scored_by: str = SCORED_BY_RULES

    def to_dict(self) -> Dict[str, Any]:
        """Serializable view with sorted evidence lists."""
        return {
            "job_id": self.job.id,
            "title": self.job.title,
            "facility_name": self.job.facility_name,
            "location": self.job.location,
            "employment_type": self.job.employment_type,
            "created_at": self.job.created_at.isoformat() if self.job.created_at else None,
            "match_score": self.match_score,
            "matched_certifications": sorted(self.matched_certifications),
            "matched_skills": sorted(self.matched_skills),
            "experience_match": self.experience_match,
            "scored_by": self.scored_by,
        }
