"""Store interfaces consumed by the matching service."""
from abc import ABC, abstractmethod
from typing import List, Optional

from core.scorer.models import CandidateProfile, JobPosting


class ProfileStore(ABC):
    """Read access to nurse profiles."""

    @abstractmethod
    def get_by_candidate_id(self, candidate_id: str) -> Optional[CandidateProfile]:
        """Profile owned by the given candidate (user) id, or None."""
        pass

    @abstractmethod
    def get_by_profile_id(self, profile_id: str) -> Optional[CandidateProfile]:
        """Profile with the given profile id, or None."""
        pass


class JobStore(ABC):
    """Read access to job postings."""

    @abstractmethod
    def list_active(self) -> List[JobPosting]:
        """
        All postings currently open for matching.

        Raises:
            JobStoreError (or any exception) when the backing store is unavailable
        """
        pass
