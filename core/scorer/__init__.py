#!/usr/bin/env python3
"""
Scoring Module - rule-based and AI-assisted match scoring.

Public API:
- RuleBasedScorer: deterministic weighted-sum scorer
- AIAssistedScorer: provider-backed scorer with per-job rule-based fallback
- MatchScorer: the strategy interface both implement
- CandidateProfile, JobPosting, MatchResult: data structures

Modules:

- models.py: Data structures
- components.py: The four weighted score components
- service.py: RuleBasedScorer
- ai_scorer.py: AIAssistedScorer, response validation, typed failures
"""

from core.scorer.models import CandidateProfile, JobPosting, MatchResult
from core.scorer.interfaces import MatchScorer
from core.scorer.service import RuleBasedScorer
from core.scorer.ai_scorer import AIAssistedScorer, ProviderFailure, ScoreAttempt, FailureReason

__all__ = [
    'CandidateProfile', 'JobPosting', 'MatchResult',
    'MatchScorer', 'RuleBasedScorer',
    'AIAssistedScorer', 'ProviderFailure', 'ScoreAttempt', 'FailureReason',
]
