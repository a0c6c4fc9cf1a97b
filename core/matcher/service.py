#!/usr/bin/env python3
"""
Match Orchestrator - ranks every active job for one candidate.

Flow per invocation:
1. Pick the scorer: AI-assisted when the provider is available, else rule-based
2. Fan out across jobs on a bounded thread pool (one job's AI failure falls
   back for that job only, inside the scorer)
3. Sort by score, then newer postings, then job id
4. Notify the messaging gateway when the top match clears the threshold

The orchestrator holds no state between invocations.
"""

import logging
import threading
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from core.config_loader import MatchingConfig, NotificationConfig
from core.exceptions import MatchingCancelledError
from core.scorer.ai_scorer import AIAssistedScorer
from core.scorer.interfaces import MatchScorer
from core.scorer.models import CandidateProfile, JobPosting, MatchResult
from core.scorer.service import RuleBasedScorer
from notification.message_builder import MatchNotification
from notification.service import MessagingGateway

logger = logging.getLogger(__name__)

# Postings without a timestamp rank as oldest on ties
_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def sort_results(results: Iterable[MatchResult]) -> List[MatchResult]:
    """Sort by match_score desc, created_at desc, then job id asc."""
    ordered = sorted(results, key=lambda r: r.job.id)
    ordered.sort(key=lambda r: (r.match_score, r.job.created_at or _OLDEST), reverse=True)
    return ordered


class MatchOrchestrator:
    """
    Produces the ranked match list for one candidate against a job set.
    """

    # Seconds between cancellation checks while waiting on workers
    poll_interval_seconds = 0.05

    def __init__(
        self,
        rule_scorer: RuleBasedScorer,
        ai_scorer: Optional[AIAssistedScorer] = None,
        gateway: Optional[MessagingGateway] = None,
        config: Optional[MatchingConfig] = None,
        notification_config: Optional[NotificationConfig] = None
    ):
        self.rule_scorer = rule_scorer
        self.ai_scorer = ai_scorer
        self.gateway = gateway
        self.config = config or MatchingConfig()
        self.notification_config = notification_config or NotificationConfig()

    def select_scorer(self) -> MatchScorer:
        """AI-assisted when its capability flag is set, rule-based otherwise."""
        if self.ai_scorer is not None and self.ai_scorer.is_available():
            return self.ai_scorer
        return self.rule_scorer

    def _score_one(
        self,
        scorer: MatchScorer,
        profile: CandidateProfile,
        job: JobPosting,
        cancel_event: Optional[threading.Event]
    ) -> MatchResult:
        if cancel_event is not None and cancel_event.is_set():
            raise MatchingCancelledError("Matching cancelled before scoring job " + job.id)
        return scorer.score(profile, job)

    def score_jobs(
        self,
        profile: CandidateProfile,
        jobs: Iterable[JobPosting],
        cancel_event: Optional[threading.Event] = None
    ) -> List[MatchResult]:
        """Score every job and return results sorted for display.

        Args:
            profile: Candidate profile
            jobs: Active job postings (filtered upstream)
            cancel_event: Set by the caller to abandon the run

        Returns:
            Sorted MatchResults (empty for an empty job set)

        Raises:
            MatchingCancelledError: If cancel_event is set before all jobs finish
        """
        jobs = list(jobs or [])
        if not jobs:
            return []

        if cancel_event is not None and cancel_event.is_set():
            raise MatchingCancelledError("Matching cancelled before start")

        scorer = self.select_scorer()
        max_workers = min(self.config.max_workers, len(jobs))
        logger.debug(f"Scoring {len(jobs)} jobs with {scorer.name} scorer ({max_workers} workers)")

        if max_workers == 1:
            results = [self._score_one(scorer, profile, job, cancel_event) for job in jobs]
            return sort_results(results)

        executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="match")
        try:
            futures: List[Future] = [
                executor.submit(self._score_one, scorer, profile, job, cancel_event)
                for job in jobs
            ]
            pending = set(futures)
            while pending:
                done, pending = wait(pending, timeout=self.poll_interval_seconds, return_when=FIRST_COMPLETED)
                if cancel_event is not None and cancel_event.is_set():
                    raise MatchingCancelledError("Matching cancelled by caller")
                for future in done:
                    # Surfaces worker exceptions, including cancellation
                    future.result()
            results = [future.result() for future in futures]
        finally:
            # In-flight provider calls finish on their own; their results are discarded
            executor.shutdown(wait=False, cancel_futures=True)

        return sort_results(results)

    def match_candidate(
        self,
        profile: CandidateProfile,
        jobs: Iterable[JobPosting],
        notify: bool = True,
        cancel_event: Optional[threading.Event] = None
    ) -> List[MatchResult]:
        """Rank jobs for a candidate and notify about a strong top match.

        Args:
            profile: Candidate profile
            jobs: Active job postings
            notify: Whether the top-match notification may be sent
            cancel_event: Set by the caller to abandon the run

        Returns:
            Sorted MatchResults
        """
        results = self.score_jobs(profile, jobs, cancel_event=cancel_event)

        if results:
            by_scorer: Dict[str, int] = {}
            for result in results:
                by_scorer[result.scored_by] = by_scorer.get(result.scored_by, 0) + 1
            logger.info(
                f"Matched {len(results)} jobs for candidate {profile.candidate_id}; "
                f"top score {results[0].match_score} ({by_scorer})"
            )

        if notify:
            self.notify_top_match(profile, results)

        return results

    def should_notify(self, results: List[MatchResult]) -> bool:
        """True iff the list is non-empty and the top score reaches the threshold."""
        if not results:
            return False
        return results[0].match_score >= self.notification_config.min_score_threshold

    def notify_top_match(self, profile: CandidateProfile, results: List[MatchResult]) -> bool:
        """Fire-and-forget notification for the top result. Never raises.

        Returns:
            True if the gateway was invoked
        """
        if self.gateway is None or not self.notification_config.enabled:
            return False
        if not self.should_notify(results):
            return False

        top = results[0]
        notification = MatchNotification(
            candidate_id=profile.candidate_id,
            job_id=top.job.id,
            score=top.match_score,
            job_title=top.job.title,
            facility_name=top.job.facility_name
        )
        try:
            self.gateway.notify_top_match(notification)
        except Exception as e:
            logger.error(f"Top-match notification failed for job {top.job.id}: {e}", exc_info=True)
        return True
