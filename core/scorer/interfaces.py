"""
Scorer Interface - the strategy the orchestrator fans out with.

Two implementations exist: the deterministic RuleBasedScorer and the
provider-backed AIAssistedScorer, which falls back to the former per job.
"""
from abc import ABC, abstractmethod

from core.scorer.models import CandidateProfile, JobPosting, MatchResult


class MatchScorer(ABC):
    """
    Scores one (profile, job) pair.
    """

    name: str = "scorer"

    @abstractmethod
    def score(self, profile: CandidateProfile, job: JobPosting) -> MatchResult:
        """
        Return a MatchResult for the pair.

        Implementations must not raise for structurally valid input.
        """
        pass
