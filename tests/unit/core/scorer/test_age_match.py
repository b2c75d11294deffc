#!/usr/bin/env python3
"""
Tests for the course age match percentage.
"""

import unittest

from core.config_loader import AgeMatchConfig
from core.scorer import course_age_match, parse_age_range


class TestCourseAgeMatch(unittest.TestCase):

    def test_boundaries_for_7_to_10(self):
        cases = {
            7: 100,
            10: 100,
            6: 85,
            11: 85,
            12: 70,
            5: 70,
            13: 0,
            14: 0,
        }
        for age, expected in cases.items():
            with self.subTest(age=age):
                self.assertEqual(course_age_match(age, "7-10"), expected)

    def test_missing_data_defaults_to_50(self):
        self.assertEqual(course_age_match(8, None), 50)
        self.assertEqual(course_age_match(8, ""), 50)
        self.assertEqual(course_age_match(None, "7-10"), 50)

    def test_malformed_range_defaults_to_50(self):
        for bad in ("7", "7-10-12", "seven-ten", "10-7", "7 to 10"):
            with self.subTest(age_range=bad):
                self.assertEqual(course_age_match(8, bad), 50)

    def test_configurable_penalty(self):
        config = AgeMatchConfig(grace_years=3, penalty_per_year=10, insufficient_data_score=40)

        self.assertEqual(course_age_match(13, "7-10", config), 70)
        self.assertEqual(course_age_match(14, "7-10", config), 0)
        self.assertEqual(course_age_match(None, "7-10", config), 40)

    def test_parse_age_range_tolerates_whitespace(self):
        self.assertEqual(parse_age_range(" 6 - 9 "), (6, 9))
        self.assertIsNone(parse_age_range("10-7"))


if __name__ == '__main__':
    unittest.main()
