"""
Unit tests for MatchOrchestrator.

Covers scorer selection, ordering, per-job fallback isolation, the
notification trigger and cancellation.
"""
import threading
import time
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from core.config_loader import MatchingConfig, NotificationConfig
from core.exceptions import MatchingCancelledError
from core.llm.interfaces import ProviderTimeoutError, ScoringProvider
from core.matcher.service import MatchOrchestrator, sort_results
from core.scorer.ai_scorer import AIAssistedScorer
from core.scorer.models import (
    CandidateProfile,
    JobPosting,
    MatchResult,
    SCORED_BY_AI,
    SCORED_BY_RULES,
)
from core.scorer.service import RuleBasedScorer
from notification.message_builder import MatchNotification
from tests import make_job, make_profile, worked_example


def _ai_scorer(rule_scorer, available=True, side_effect=None):
    provider = MagicMock(spec=ScoringProvider)
    provider.is_available.return_value = available
    provider.request_compatibility.side_effect = side_effect
    return AIAssistedScorer(provider, rule_scorer), provider


class TestWorkedExample:

    def test_sorted_output_and_single_notification(self, orchestrator, gateway):
        profile, job_a, job_b = worked_example()

        results = orchestrator.match_candidate(profile, [job_a, job_b])

        assert [r.job.id for r in results] == ["job-b", "job-a"]
        assert [r.match_score for r in results] == [100, 55]
        gateway.notify_top_match.assert_called_once()
        notification = gateway.notify_top_match.call_args[0][0]
        assert isinstance(notification, MatchNotification)
        assert notification.job_id == "job-b"
        assert notification.candidate_id == profile.candidate_id
        assert notification.score == 100

    def test_repeatable(self, orchestrator):
        profile, job_a, job_b = worked_example()

        first = orchestrator.match_candidate(profile, [job_a, job_b], notify=False)
        second = orchestrator.match_candidate(profile, [job_b, job_a], notify=False)

        assert first == second


class TestSorting:

    def test_score_descending(self, orchestrator):
        profile = make_profile(certifications=["BLS"])
        jobs = [
            make_job("low", required_certifications=["ACLS"]),
            make_job("high"),
            make_job("mid", required_certifications=["BLS", "ACLS"]),
        ]

        results = orchestrator.match_candidate(profile, jobs, notify=False)

        scores = [r.match_score for r in results]
        assert scores == sorted(scores, reverse=True)
        assert [r.job.id for r in results] == ["high", "mid", "low"]

    def test_ties_prefer_newer_then_id(self):
        profile = make_profile()
        older = make_job("job-old", days_after_base=0)
        newer = make_job("job-new", days_after_base=5)
        undated_b = make_job("job-b", created_at=None)
        undated_a = make_job("job-a", created_at=None)
        results = [
            MatchResult(job=job, match_score=80)
            for job in (undated_b, older, undated_a, newer)
        ]

        ordered = sort_results(results)

        assert [r.job.id for r in ordered] == ["job-new", "job-old", "job-a", "job-b"]

    def test_mixed_naive_aware_and_missing_timestamps(self, orchestrator):
        profile = CandidateProfile("c1")
        jobs = [
            JobPosting(id="naive", created_at=datetime(2026, 1, 1)),
            JobPosting(id="undated", created_at=None),
            JobPosting(id="aware", created_at=datetime(2026, 1, 2, tzinfo=timezone.utc)),
        ]

        results = orchestrator.match_candidate(profile, jobs, notify=False)

        assert [r.job.id for r in results] == ["aware", "naive", "undated"]
        assert results[1].job.created_at.tzinfo is timezone.utc

    def test_identical_timestamps_break_on_id(self):
        results = [MatchResult(job=make_job(job_id), match_score=60) for job_id in ("c", "a", "b")]
        assert [r.job.id for r in sort_results(results)] == ["a", "b", "c"]


class TestScorerSelection:

    def test_rule_based_without_ai(self, orchestrator):
        profile, job_a, _ = worked_example()

        results = orchestrator.match_candidate(profile, [job_a], notify=False)

        assert results[0].scored_by == SCORED_BY_RULES

    def test_ai_unavailable_never_calls_provider(self, rule_scorer, gateway):
        ai_scorer, provider = _ai_scorer(rule_scorer, available=False)
        orchestrator = MatchOrchestrator(rule_scorer, ai_scorer, gateway)
        profile, job_a, job_b = worked_example()

        orchestrator.match_candidate(profile, [job_a, job_b], notify=False)

        provider.request_compatibility.assert_not_called()
        assert orchestrator.select_scorer() is rule_scorer

    def test_ai_available_is_selected(self, rule_scorer):
        ai_scorer, _ = _ai_scorer(rule_scorer)
        orchestrator = MatchOrchestrator(rule_scorer, ai_scorer)
        assert orchestrator.select_scorer() is ai_scorer

    def test_one_failing_job_falls_back_alone(self, rule_scorer, gateway):
        profile, job_a, job_b = worked_example()

        def respond(profile_summary, job_summary):
            if "Required skills: critical care" in job_summary:
                raise ProviderTimeoutError("slow")
            return {"compatibility_score": 77}

        ai_scorer, _ = _ai_scorer(rule_scorer, side_effect=respond)
        orchestrator = MatchOrchestrator(rule_scorer, ai_scorer, gateway)

        results = orchestrator.match_candidate(profile, [job_a, job_b])
        by_id = {r.job.id: r for r in results}

        assert by_id["job-a"] == rule_scorer.score(profile, job_a)
        assert by_id["job-b"].match_score == 77
        assert by_id["job-b"].scored_by == SCORED_BY_AI
        gateway.notify_top_match.assert_called_once()
        assert gateway.notify_top_match.call_args[0][0].job_id == "job-b"


class TestNotificationTrigger:

    def test_no_jobs_no_results_no_notification(self, orchestrator, gateway):
        assert orchestrator.match_candidate(make_profile(), []) == []
        gateway.notify_top_match.assert_not_called()

    def test_below_threshold_does_not_notify(self, orchestrator, gateway):
        profile = make_profile()
        job = make_job(required_certifications=["BLS"], required_skills=["Triage"])

        results = orchestrator.match_candidate(profile, [job])

        assert results[0].match_score == 20
        gateway.notify_top_match.assert_not_called()

    def test_exactly_threshold_notifies(self, orchestrator, gateway):
        profile = make_profile(location="Austin")
        job = make_job(required_skills=["Triage"], location="Austin")

        results = orchestrator.match_candidate(profile, [job])

        assert results[0].match_score == 70
        gateway.notify_top_match.assert_called_once()

    def test_notify_false_suppresses(self, orchestrator, gateway):
        profile, job_a, job_b = worked_example()
        orchestrator.match_candidate(profile, [job_a, job_b], notify=False)
        gateway.notify_top_match.assert_not_called()

    def test_disabled_notifications_suppress(self, rule_scorer, gateway):
        orchestrator = MatchOrchestrator(
            rule_scorer, gateway=gateway,
            notification_config=NotificationConfig(enabled=False)
        )
        profile, job_a, job_b = worked_example()

        orchestrator.match_candidate(profile, [job_a, job_b])

        gateway.notify_top_match.assert_not_called()

    def test_custom_threshold(self, rule_scorer, gateway):
        orchestrator = MatchOrchestrator(
            rule_scorer, gateway=gateway,
            notification_config=NotificationConfig(min_score_threshold=50)
        )
        profile, job_a, _ = worked_example()

        orchestrator.match_candidate(profile, [job_a])

        gateway.notify_top_match.assert_called_once()

    def test_gateway_failure_does_not_fail_matching(self, orchestrator, gateway):
        gateway.notify_top_match.side_effect = RuntimeError("novu down")
        profile, job_a, job_b = worked_example()

        results = orchestrator.match_candidate(profile, [job_a, job_b])

        assert [r.job.id for r in results] == ["job-b", "job-a"]


class TestConcurrencyAndCancellation:

    def test_many_jobs_all_scored(self, orchestrator):
        profile = make_profile(certifications=["BLS"])
        jobs = [make_job(f"job-{i:03d}", required_certifications=["BLS", f"CERT{i % 4}"]) for i in range(50)]

        results = orchestrator.match_candidate(profile, jobs, notify=False)

        assert len(results) == 50
        assert {r.job.id for r in results} == {j.id for j in jobs}

    def test_pre_cancelled_run_raises(self, orchestrator, gateway):
        cancel_event = threading.Event()
        cancel_event.set()
        profile, job_a, job_b = worked_example()

        with pytest.raises(MatchingCancelledError):
            orchestrator.match_candidate(profile, [job_a, job_b], cancel_event=cancel_event)

        gateway.notify_top_match.assert_not_called()

    def test_cancel_mid_run_abandons(self, rule_scorer, gateway):
        cancel_event = threading.Event()
        release = threading.Event()

        def slow_provider(profile_summary, job_summary):
            cancel_event.set()
            release.wait(timeout=2)
            return {"compatibility_score": 90}

        ai_scorer, _ = _ai_scorer(rule_scorer, side_effect=slow_provider)
        orchestrator = MatchOrchestrator(
            rule_scorer, ai_scorer, gateway, config=MatchingConfig(max_workers=2)
        )
        profile = make_profile()
        jobs = [make_job(f"job-{i}") for i in range(6)]

        started = time.monotonic()
        with pytest.raises(MatchingCancelledError):
            orchestrator.match_candidate(profile, jobs, cancel_event=cancel_event)
        release.set()

        assert time.monotonic() - started < 2
        gateway.notify_top_match.assert_not_called()

    def test_single_worker_path(self, rule_scorer):
        orchestrator = MatchOrchestrator(rule_scorer, config=MatchingConfig(max_workers=1))
        profile, job_a, job_b = worked_example()

        results = orchestrator.match_candidate(profile, [job_a, job_b], notify=False)

        assert [r.job.id for r in results] == ["job-b", "job-a"]
