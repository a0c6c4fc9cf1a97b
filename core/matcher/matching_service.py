#!/usr/bin/env python3
"""
Matching service - looks up the nurse profile and the active job set, then
hands both to the MatchOrchestrator.
"""

import logging
import threading
from typing import List, Optional

from core.exceptions import JobStoreError, ProfileNotFoundError
from core.matcher.service import MatchOrchestrator
from core.scorer.models import JobPosting, MatchResult
from stores.base import JobStore, ProfileStore

logger = logging.getLogger(__name__)


class MatchingService:
    """Entry point for candidate-facing and admin matching calls."""

    def __init__(
        self,
        profile_store: ProfileStore,
        job_store: JobStore,
        orchestrator: MatchOrchestrator
    ):
        self.profile_store = profile_store
        self.job_store = job_store
        self.orchestrator = orchestrator

    def get_matches_for_candidate(
        self,
        candidate_id: str,
        cancel_event: Optional[threading.Event] = None
    ) -> List[MatchResult]:
        """
        Rank active jobs for the current candidate and notify on a strong top match.

        Raises:
            ProfileNotFoundError: No profile for candidate_id
            JobStoreError: Active jobs could not be loaded
            MatchingCancelledError: cancel_event was set mid-run
        """
        profile = self.profile_store.get_by_candidate_id(candidate_id)
        if profile is None:
            raise ProfileNotFoundError(candidate_id)

        jobs = self._load_active_jobs()
        return self.orchestrator.match_candidate(profile, jobs, notify=True, cancel_event=cancel_event)

    def get_matches_for_profile(
        self,
        profile_id: str,
        cancel_event: Optional[threading.Event] = None
    ) -> List[MatchResult]:
        """
        Admin view of one nurse's matches. Never notifies.

        Raises:
            ProfileNotFoundError: No profile with profile_id
            JobStoreError: Active jobs could not be loaded
            MatchingCancelledError: cancel_event was set mid-run
        """
        profile = self.profile_store.get_by_profile_id(profile_id)
        if profile is None:
            raise ProfileNotFoundError(profile_id)

        jobs = self._load_active_jobs()
        return self.orchestrator.match_candidate(profile, jobs, notify=False, cancel_event=cancel_event)

    def _load_active_jobs(self) -> List[JobPosting]:
        try:
            jobs = list(self.job_store.list_active())
        except JobStoreError:
            raise
        except Exception as e:
            logger.error(f"Failed to load active jobs: {e}", exc_info=True)
            raise JobStoreError(f"Failed to load active jobs: {e}") from e
        logger.debug(f"Loaded {len(jobs)} active jobs")
        return jobs
