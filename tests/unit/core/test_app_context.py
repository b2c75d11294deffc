#!/usr/bin/env python3
"""
Tests for AppContext wiring.
"""

import unittest

from core.admission import InMemorySeatStore, SqlSeatStore
from core.app_context import AppContext
from core.config_loader import AppConfig
from core.exceptions import NotFoundError
from tests import create_test_engine, create_session_factory, add_youth, add_course


class TestAppContextBuild(unittest.TestCase):

    def setUp(self):
        self.engine = create_test_engine()
        self.session_factory = create_session_factory(self.engine)
        add_youth(self.session_factory, "Y001", age=8)
        add_course(self.session_factory, "C001", capacity=2, age_range="7-10")

    def tearDown(self):
        self.engine.dispose()

    def test_default_admission_shares_directory_with_ranking(self):
        ctx = AppContext.build(AppConfig(), session_factory=self.session_factory)

        self.assertIsInstance(ctx.admission_controller.store, SqlSeatStore)
        self.assertEqual([c.course_id for c in ctx.ranking_service.ranked_courses("Y001")], ["C001"])

        ctx.admission_controller.enroll("Y001", "C001")

        course = ctx.ranking_service.ranked_courses("Y001")[0]
        self.assertEqual((course.current_enrollment, course.seats_left), (1, 1))

    def test_backend_key_in_config_is_ignored(self):
        config = AppConfig(**{"admission": {"backend": "memory", "max_attempts": 4}})

        ctx = AppContext.build(config, session_factory=self.session_factory)

        self.assertIsInstance(ctx.admission_controller.store, SqlSeatStore)
        self.assertEqual(ctx.admission_controller.config.max_attempts, 4)
        self.assertEqual(ctx.admission_controller.enroll("Y001", "C001").course_id, "C001")

    def test_injected_seat_store_is_used(self):
        store = InMemorySeatStore()
        store.add_child("Y900", family_id="F900")
        store.add_course("M001", capacity=1)

        ctx = AppContext.build(AppConfig(), session_factory=self.session_factory, seat_store=store)

        self.assertIs(ctx.admission_controller.store, store)
        ctx.admission_controller.enroll("Y900", "M001")
        self.assertEqual(ctx.admission_controller.occupancy("M001").current_enrollment, 1)

        # Only what the caller loaded is admissible
        with self.assertRaises(NotFoundError):
            ctx.admission_controller.enroll("Y001", "C001")


if __name__ == '__main__':
    unittest.main()
