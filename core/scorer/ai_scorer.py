#!/usr/bin/env python3
"""
AI-Assisted Scorer - provider-backed headline score with rule-based evidence.

The provider sets the numeric match_score only. Matched certifications,
matched skills and the experience flag always come from the RuleBasedScorer
on the same pair, so displayed evidence stays auditable whichever scorer
produced the number.

Any provider problem is reported as a typed ProviderFailure from try_score();
score() turns that into the plain rule-based result for the job.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from core.llm.interfaces import (
    ScoringProvider,
    ScoringProviderError,
    ProviderTimeoutError,
    MalformedProviderResponseError,
)
from core.normalizer import canonicalize_labels
from core.scorer.components import round_score
from core.scorer.interfaces import MatchScorer
from core.scorer.models import CandidateProfile, JobPosting, MatchResult, SCORED_BY_AI
from core.scorer.service import RuleBasedScorer

logger = logging.getLogger(__name__)

SCORE_FIELD = "compatibility_score"


class FailureReason:
    """Reasons the AI-assisted path can fail."""
    NOT_CONFIGURED = "not_configured"
    TIMEOUT = "timeout"
    PROVIDER_ERROR = "provider_error"
    MALFORMED_RESPONSE = "malformed_response"
    NON_NUMERIC_SCORE = "non_numeric_score"


@dataclass(frozen=True)
class ProviderFailure:
    """Typed failure reported instead of raising, so callers can fall back."""
    reason: str
    detail: str = ""


@dataclass(frozen=True)
class ScoreAttempt:
    """Outcome of one AI-assisted attempt: exactly one of result/failure is set."""
    result: Optional[MatchResult] = None
    failure: Optional[ProviderFailure] = None

    @property
    def succeeded(self) -> bool:
        return self.result is not None


class NonNumericScoreError(ValueError):
    """The provider's score field is missing or not a usable number."""
    pass


def parse_compatibility_score(data: Dict[str, Any]) -> int:
    """Read, validate and clamp the provider's compatibility figure.

    Accepts ints, floats and numeric strings. Booleans, NaN, infinities and
    anything else are rejected.

    Raises:
        NonNumericScoreError: When no usable number is present
    """
    if SCORE_FIELD not in data:
        raise NonNumericScoreError(f"Response has no '{SCORE_FIELD}' field")

    raw = data[SCORE_FIELD]
    if isinstance(raw, bool) or raw is None:
        raise NonNumericScoreError(f"'{SCORE_FIELD}' is not numeric: {raw!r}")

    if isinstance(raw, (int, float)):
        value = float(raw)
    elif isinstance(raw, str):
        try:
            value = float(raw.strip().rstrip('%'))
        except ValueError:
            raise NonNumericScoreError(f"'{SCORE_FIELD}' is not numeric: {raw!r}")
    else:
        raise NonNumericScoreError(f"'{SCORE_FIELD}' is not numeric: {raw!r}")

    if not math.isfinite(value):
        raise NonNumericScoreError(f"'{SCORE_FIELD}' is not finite: {raw!r}")

    return round_score(value)


def _format_labels(labels) -> str:
    canonical = sorted(canonicalize_labels(labels))
    return ", ".join(canonical) if canonical else "none"


def build_profile_summary(profile: CandidateProfile) -> str:
    """Serialize the candidate for the provider. Identifiers are left out."""
    lines = [
        f"Certifications: {_format_labels(profile.certifications)}",
        f"Skills: {_format_labels(profile.skills)}",
        f"Years of experience: {profile.years_of_experience}",
        f"Specialization: {profile.specialization or 'not stated'}",
        f"Location: {profile.location or 'not stated'}",
    ]
    return "\n".join(lines)


def build_job_summary(job: JobPosting) -> str:
    """Serialize the posting for the provider."""
    lines = [
        f"Title: {job.title or 'not stated'}",
        f"Facility: {job.facility_name or 'not stated'}",
        f"Required certifications: {_format_labels(job.required_certifications)}",
        f"Required skills: {_format_labels(job.required_skills)}",
        f"Minimum years of experience: {job.min_experience_years}",
        f"Specialization: {job.specialization or 'not stated'}",
        f"Location: {job.location or 'not stated'}",
        f"Employment type: {job.employment_type or 'not stated'}",
    ]
    if job.description:
        lines.append(f"Description: {job.description[:2000]}")
    return "\n".join(lines)


class AIAssistedScorer(MatchScorer):
    """
    Scorer that asks a generative provider for the headline number.

    Only selected when the provider's capability flag is set; failures for
    one job fall back to the rule-based result for that job only.
    """

    name = SCORED_BY_AI

    def __init__(self, provider: ScoringProvider, rule_scorer: RuleBasedScorer):
        self.provider = provider
        self.rule_scorer = rule_scorer

    def is_available(self) -> bool:
        return self.provider.is_available()

    def try_score(self, profile: CandidateProfile, job: JobPosting) -> ScoreAttempt:
        """Attempt AI-assisted scoring without raising for provider problems.

        Returns:
            ScoreAttempt carrying either the AI-scored MatchResult or a ProviderFailure
        """
        if not self.provider.is_available():
            return ScoreAttempt(failure=ProviderFailure(FailureReason.NOT_CONFIGURED))

        try:
            data = self.provider.request_compatibility(
                build_profile_summary(profile),
                build_job_summary(job)
            )
            ai_score = parse_compatibility_score(data)
        except ProviderTimeoutError as e:
            return ScoreAttempt(failure=ProviderFailure(FailureReason.TIMEOUT, str(e)))
        except MalformedProviderResponseError as e:
            return ScoreAttempt(failure=ProviderFailure(FailureReason.MALFORMED_RESPONSE, str(e)))
        except ScoringProviderError as e:
            return ScoreAttempt(failure=ProviderFailure(FailureReason.PROVIDER_ERROR, str(e)))
        except NonNumericScoreError as e:
            return ScoreAttempt(failure=ProviderFailure(FailureReason.NON_NUMERIC_SCORE, str(e)))
        except Exception as e:
            # Provider implementations outside core.llm may raise anything
            logger.error(f"Unexpected provider error for job {job.id}: {e}", exc_info=True)
            return ScoreAttempt(failure=ProviderFailure(FailureReason.PROVIDER_ERROR, str(e)))

        evidence = self.rule_scorer.score(profile, job)
        return ScoreAttempt(result=MatchResult(
            job=job,
            match_score=ai_score,
            matched_certifications=evidence.matched_certifications,
            matched_skills=evidence.matched_skills,
            experience_match=evidence.experience_match,
            scored_by=SCORED_BY_AI
        ))

    def score(self, profile: CandidateProfile, job: JobPosting) -> MatchResult:
        """Score with the provider, falling back to the rule-based result on failure."""
        attempt = self.try_score(profile, job)
        if attempt.succeeded:
            return attempt.result

        logger.warning(
            f"AI scoring failed for job {job.id} ({attempt.failure.reason}: "
            f"{attempt.failure.detail}), falling back to rule-based"
        )
        return self.rule_scorer.score(profile, job)
