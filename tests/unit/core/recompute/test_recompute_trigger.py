#!/usr/bin/env python3
"""
Tests for match invalidation.
"""

import unittest
from decimal import Decimal

from sqlalchemy import select

from core.config_loader import MatchingConfig
from core.recompute import RecomputeTrigger
from database.models import MatchRecord, STATUS_ACTIVE, STATUS_STALE
from database.uow import care_uow
from tests import create_test_engine, create_session_factory


class TestRecomputeTrigger(unittest.TestCase):

    def setUp(self):
        self.engine = create_test_engine()
        self.session_factory = create_session_factory(self.engine)
        self.trigger = RecomputeTrigger(MatchingConfig(rating_change_threshold=1.0), self.session_factory)

        with care_uow(self.session_factory) as repo:
            repo.matches.record_match("Y001", "T001", 80, weight_version=1, algorithm_version="1.0", basis={})
            repo.matches.record_match("Y001", "T002", 70, weight_version=2, algorithm_version="1.0", basis={})
            repo.matches.record_match("Y002", "T001", 60, weight_version=2, algorithm_version="1.0", basis={})

    def tearDown(self):
        self.engine.dispose()

    def _statuses(self):
        with self.session_factory() as session:
            records = session.execute(select(MatchRecord)).scalars().all()
            return {(r.youth_id, r.target_id): (r.status, r.invalidated_reason) for r in records}

    def test_weights_changed_marks_older_versions_stale(self):
        count = self.trigger.on_weights_changed(2)

        statuses = self._statuses()
        self.assertEqual(count, 1)
        self.assertEqual(statuses[("Y001", "T001")][0], STATUS_STALE)
        self.assertIn("version 2", statuses[("Y001", "T001")][1])
        self.assertEqual(statuses[("Y001", "T002")][0], STATUS_ACTIVE)

    def test_material_rating_change_marks_teacher_stale(self):
        count = self.trigger.on_teacher_rating_changed("T001", Decimal("80"), Decimal("85"))

        statuses = self._statuses()
        self.assertEqual(count, 2)
        self.assertEqual(statuses[("Y001", "T001")][0], STATUS_STALE)
        self.assertEqual(statuses[("Y002", "T001")][0], STATUS_STALE)
        self.assertEqual(statuses[("Y001", "T002")][0], STATUS_ACTIVE)

    def test_immaterial_rating_change_is_ignored(self):
        count = self.trigger.on_teacher_rating_changed("T001", Decimal("80.00"), Decimal("80.40"))

        self.assertEqual(count, 0)
        self.assertTrue(all(status == STATUS_ACTIVE for status, _ in self._statuses().values()))

    def test_first_rating_counts_against_missing_default(self):
        # No rating yet normalizes to 50, so a first rating of 90 is material
        self.assertEqual(self.trigger.on_teacher_rating_changed("T002", None, 90), 1)

    def test_profile_changes(self):
        self.assertEqual(self.trigger.on_child_profile_changed("Y001"), 2)
        self.assertEqual(self.trigger.on_teacher_profile_changed("T001"), 1)

        statuses = self._statuses()
        self.assertEqual(statuses[("Y002", "T001")], (STATUS_STALE, "teacher profile changed"))

    def test_stale_records_are_not_marked_twice(self):
        self.trigger.on_teacher_profile_changed("T001")

        self.assertEqual(self.trigger.on_teacher_profile_changed("T001"), 0)


if __name__ == '__main__':
    unittest.main()
