#!/usr/bin/env python3
"""
Score Components - the four weighted parts of the rule-based score.

Each function returns the points a component contributes (already scaled
by its weight) plus whatever evidence it produces.
"""

import math
from typing import FrozenSet, Iterable, Optional, Tuple

from core.normalizer import canonicalize_labels, labels_equal


def calculate_overlap(
    required: Iterable[str],
    held: Iterable[str],
    weight: float
) -> Tuple[float, FrozenSet[str]]:
    """Calculate an overlap-ratio component (certifications or skills).

    The ratio is taken over distinct canonical requirements. A posting that
    requires nothing is fully satisfied and yields no evidence.

    Args:
        required: Posting's required labels (raw)
        held: Candidate's labels (raw)
        weight: Points awarded for full coverage

    Returns:
        Tuple of (points, matched canonical labels drawn from the requirements)
    """
    required_canonical = canonicalize_labels(required)
    if not required_canonical:
        return float(weight), frozenset()

    matched = required_canonical & canonicalize_labels(held)
    points = weight * len(matched) / len(required_canonical)
    return points, frozenset(matched)


def calculate_experience(
    years_of_experience: int,
    min_experience_years: int,
    weight: float
) -> Tuple[float, bool]:
    """Calculate the experience component.

    Full credit when the candidate meets the minimum (or none is set),
    otherwise linear partial credit. The flag is True only on full credit.
    """
    years = max(0, years_of_experience or 0)
    minimum = max(0, min_experience_years or 0)

    if minimum == 0 or years >= minimum:
        return float(weight), True
    return weight * years / minimum, False


def calculate_affinity(
    candidate_specialization: Optional[str],
    job_specialization: Optional[str],
    candidate_location: Optional[str],
    job_location: Optional[str],
    weight: float
) -> float:
    """Bonus for specialization or location alignment, all or nothing."""
    if labels_equal(candidate_specialization, job_specialization):
        return float(weight)
    if labels_equal(candidate_location, job_location):
        return float(weight)
    return 0.0


def is_open_posting(
    required_certifications: Iterable[str],
    required_skills: Iterable[str],
    min_experience_years: int
) -> bool:
    """True when the posting states no certification, skill or experience requirement."""
    return (
        not canonicalize_labels(required_certifications)
        and not canonicalize_labels(required_skills)
        and (min_experience_years or 0) <= 0
    )


def round_score(total: float) -> int:
    """Round half-up and clamp to the closed interval [0, 100]."""
    if math.isnan(total):
        return 0
    rounded = int(math.floor(total + 0.5)) if math.isfinite(total) else (100 if total > 0 else 0)
    return max(0, min(100, rounded))
