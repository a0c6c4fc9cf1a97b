"""Matcher Module - ranks active jobs for a nurse profile."""
from core.matcher.service import MatchOrchestrator, sort_results
from core.matcher.matching_service import MatchingService

__all__ = [
    'MatchOrchestrator', 'MatchingService', 'sort_results'
]
