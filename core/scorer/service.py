#!/usr/bin/env python3
"""
Scoring Service - deterministic rule-based scoring.

Weighted-sum over four components (defaults shown, see ScorerConfig):
- Certifications (40): overlap ratio against required certifications
- Skills (30): overlap ratio against required skills
- Experience (20): full or linear partial credit against the minimum
- Affinity (10): specialization or location alignment bonus; a posting with
  no certification, skill or experience requirement earns it unconditionally

The result for a given pair is reproducible and also serves as the source
of truth for match evidence on the AI-assisted path.
"""

import logging
from typing import Optional

from core.config_loader import ScorerConfig
from core.scorer import components
from core.scorer.interfaces import MatchScorer
from core.scorer.models import CandidateProfile, JobPosting, MatchResult, SCORED_BY_RULES

logger = logging.getLogger(__name__)


class RuleBasedScorer(MatchScorer):
    """
    Deterministic scorer for one (profile, job) pair.

    Missing optional fields degrade to "no claim" rather than raising.
    """

    name = SCORED_BY_RULES

    def __init__(self, config: Optional[ScorerConfig] = None):
        self.config = config or ScorerConfig()

    def score(self, profile: CandidateProfile, job: JobPosting) -> MatchResult:
        """Calculate the rule-based MatchResult for a pair.

        Args:
            profile: Candidate profile (read-only)
            job: Job posting (read-only)

        Returns:
            MatchResult with score in [0, 100] and evidence drawn from the
            posting's requirements
        """
        cert_points, matched_certifications = components.calculate_overlap(
            job.required_certifications,
            profile.certifications,
            self.config.weight_certifications
        )
        skill_points, matched_skills = components.calculate_overlap(
            job.required_skills,
            profile.skills,
            self.config.weight_skills
        )
        experience_points, experience_match = components.calculate_experience(
            profile.years_of_experience,
            job.min_experience_years,
            self.config.weight_experience
        )
        if components.is_open_posting(job.required_certifications, job.required_skills, job.min_experience_years):
            affinity_points = float(self.config.weight_affinity)
        else:
            affinity_points = components.calculate_affinity(
                profile.specialization,
                job.specialization,
                profile.location,
                job.location,
                self.config.weight_affinity
            )

        total = cert_points + skill_points + experience_points + affinity_points
        match_score = components.round_score(total)

        logger.debug(
            f"Job {job.id}: certs={cert_points:.1f}, skills={skill_points:.1f}, "
            f"experience={experience_points:.1f}, affinity={affinity_points:.1f}, score={match_score}"
        )

        return MatchResult(
            job=job,
            match_score=match_score,
            matched_certifications=matched_certifications,
            matched_skills=matched_skills,
            experience_match=experience_match,
            scored_by=SCORED_BY_RULES
        )
