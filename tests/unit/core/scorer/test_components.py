"""
Unit tests for the rule-based score components.
"""
import math
import unittest

from core.scorer.components import (
    calculate_affinity,
    calculate_experience,
    calculate_overlap,
    is_open_posting,
    round_score,
)


class TestCalculateOverlap(unittest.TestCase):

    def test_partial_overlap(self):
        points, matched = calculate_overlap(["BLS", "ACLS"], ["bls", "NCLEX"], 40)
        self.assertEqual(points, 20)
        self.assertEqual(matched, frozenset({"bls"}))

    def test_full_overlap(self):
        points, matched = calculate_overlap(["BLS", "ACLS"], ["ACLS", "BLS", "PALS"], 40)
        self.assertEqual(points, 40)
        self.assertEqual(matched, frozenset({"bls", "acls"}))

    def test_empty_requirements_award_full_weight_without_evidence(self):
        points, matched = calculate_overlap([], ["BLS"], 40)
        self.assertEqual(points, 40)
        self.assertEqual(matched, frozenset())

    def test_ratio_uses_distinct_requirements(self):
        # "BLS" listed twice still counts as a single requirement
        points, matched = calculate_overlap(["BLS", "bls ", "ACLS"], ["BLS"], 40)
        self.assertEqual(points, 20)
        self.assertEqual(matched, frozenset({"bls"}))

    def test_matched_is_subset_of_requirements(self):
        _, matched = calculate_overlap(["Critical Care"], ["critical care", "Telemetry"], 30)
        self.assertTrue(matched <= frozenset({"critical care"}))

    def test_candidate_without_labels(self):
        points, matched = calculate_overlap(["BLS"], None, 40)
        self.assertEqual(points, 0)
        self.assertEqual(matched, frozenset())


class TestCalculateExperience(unittest.TestCase):

    def test_meets_minimum(self):
        self.assertEqual(calculate_experience(3, 2, 20), (20.0, True))

    def test_exactly_minimum(self):
        self.assertEqual(calculate_experience(2, 2, 20), (20.0, True))

    def test_partial_credit(self):
        points, matched = calculate_experience(1, 4, 20)
        self.assertEqual(points, 5)
        self.assertFalse(matched)

    def test_no_minimum_is_satisfied(self):
        self.assertEqual(calculate_experience(0, 0, 20), (20.0, True))

    def test_no_experience_against_minimum(self):
        self.assertEqual(calculate_experience(0, 3, 20), (0, False))


class TestCalculateAffinity(unittest.TestCase):

    def test_specialization_match(self):
        self.assertEqual(calculate_affinity("Pediatrics", "pediatrics", None, None, 10), 10)

    def test_location_match(self):
        self.assertEqual(calculate_affinity(None, "ICU", "Austin, TX", " austin, tx", 10), 10)

    def test_both_match_is_not_doubled(self):
        self.assertEqual(calculate_affinity("ICU", "ICU", "Austin", "Austin", 10), 10)

    def test_no_claim(self):
        self.assertEqual(calculate_affinity(None, None, None, None, 10), 0)

    def test_mismatch(self):
        self.assertEqual(calculate_affinity("ICU", "Pediatrics", "Austin", "Houston", 10), 0)


class TestIsOpenPosting(unittest.TestCase):

    def test_no_requirements(self):
        self.assertTrue(is_open_posting([], [], 0))

    def test_blank_labels_do_not_count(self):
        self.assertTrue(is_open_posting(["  "], None, 0))

    def test_any_requirement_closes_it(self):
        self.assertFalse(is_open_posting(["BLS"], [], 0))
        self.assertFalse(is_open_posting([], ["Triage"], 0))
        self.assertFalse(is_open_posting([], [], 1))


class TestRoundScore(unittest.TestCase):

    def test_rounds_half_up(self):
        self.assertEqual(round_score(54.5), 55)
        self.assertEqual(round_score(55.5), 56)
        self.assertEqual(round_score(54.49), 54)

    def test_clamps(self):
        self.assertEqual(round_score(130), 100)
        self.assertEqual(round_score(-5), 0)

    def test_non_finite(self):
        self.assertEqual(round_score(math.nan), 0)
        self.assertEqual(round_score(math.inf), 100)
        self.assertEqual(round_score(-math.inf), 0)


if __name__ == '__main__':
    unittest.main()
