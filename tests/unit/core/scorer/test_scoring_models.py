"""
Unit tests for CandidateProfile / JobPosting parsing and MatchResult serialization.
"""
import unittest
from datetime import datetime, timezone

from core.scorer.models import CandidateProfile, JobPosting, MatchResult, SCORED_BY_RULES


class TestCandidateProfileFromDict(unittest.TestCase):

    def test_accepts_user_id_alias(self):
        profile = CandidateProfile.from_dict({"user_id": "user-9", "certifications": ["BLS"]})
        self.assertEqual(profile.candidate_id, "user-9")
        self.assertEqual(profile.certifications, ("BLS",))

    def test_bad_fields_degrade_to_no_claim(self):
        profile = CandidateProfile.from_dict({
            "candidate_id": "user-1",
            "certifications": None,
            "skills": 12,
            "years_of_experience": "lots",
            "specialization": "   ",
        })
        self.assertEqual(profile.certifications, ())
        self.assertEqual(profile.skills, ())
        self.assertEqual(profile.years_of_experience, 0)
        self.assertIsNone(profile.specialization)

    def test_experience_coercion(self):
        for raw, expected in ((3, 3), ("4", 4), (2.9, 2), (-1, 0), (True, 0), (float("inf"), 0)):
            with self.subTest(raw=raw):
                profile = CandidateProfile.from_dict({"candidate_id": "u", "years_of_experience": raw})
                self.assertEqual(profile.years_of_experience, expected)


class TestJobPostingFromDict(unittest.TestCase):

    def test_parses_iso_timestamp_with_z(self):
        job = JobPosting.from_dict({"id": "job-1", "created_at": "2026-02-01T09:00:00Z"})
        self.assertEqual(job.created_at, datetime(2026, 2, 1, 9, 0, tzinfo=timezone.utc))

    def test_naive_timestamp_is_utc(self):
        job = JobPosting.from_dict({"id": "job-1", "created_at": datetime(2026, 2, 1, 9, 0)})
        self.assertEqual(job.created_at.tzinfo, timezone.utc)

    def test_direct_construction_normalizes_naive_timestamp(self):
        job = JobPosting(id="job-1", created_at=datetime(2026, 2, 1, 9, 0))
        self.assertEqual(job.created_at, datetime(2026, 2, 1, 9, 0, tzinfo=timezone.utc))

    def test_unparseable_timestamp_is_missing(self):
        job = JobPosting.from_dict({"id": "job-1", "created_at": "last tuesday"})
        self.assertIsNone(job.created_at)

    def test_numeric_id_becomes_string(self):
        job = JobPosting.from_dict({"id": 42})
        self.assertEqual(job.id, "42")
        self.assertEqual(job.min_experience_years, 0)


class TestMatchResultToDict(unittest.TestCase):

    def test_serializes_sorted_evidence(self):
        job = JobPosting.from_dict({
            "id": "job-1",
            "title": "ICU Nurse",
            "facility_name": "St. Mary's",
            "created_at": "2026-02-01T09:00:00+00:00",
        })
        result = MatchResult(
            job=job,
            match_score=77,
            matched_certifications=frozenset({"bls", "acls"}),
            matched_skills=frozenset({"triage"}),
            experience_match=True,
        )

        data = result.to_dict()

        self.assertEqual(data["job_id"], "job-1")
        self.assertEqual(data["match_score"], 77)
        self.assertEqual(data["matched_certifications"], ["acls", "bls"])
        self.assertEqual(data["matched_skills"], ["triage"])
        self.assertEqual(data["created_at"], "2026-02-01T09:00:00+00:00")
        self.assertEqual(data["scored_by"], SCORED_BY_RULES)


if __name__ == '__main__':
    unittest.main()
