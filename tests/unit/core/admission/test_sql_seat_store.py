#!/usr/bin/env python3
"""
Tests for admission control over the SQL seat store (SQLite).
"""

import threading
import unittest

import pytest
from sqlalchemy import select, func, text

from core.admission import AdmissionController, SqlSeatStore
from core.config_loader import AdmissionConfig
from core.exceptions import (
    CapacityExceededError,
    AlreadyEnrolledError,
    NotEnrolledError,
    NotFoundError,
    AdmissionTimeoutError,
    TransientStoreError,
)
from database.models import Course, CourseSelection, ENROLLED, DROPPED
from tests import create_test_engine, create_session_factory, add_youth, add_course


def fast_config() -> AdmissionConfig:
    return AdmissionConfig(backoff_min_seconds=0.0, backoff_max_seconds=0.0)


def course_state(session_factory, course_id):
    """(current_enrollment, enrolled row count) for a course."""
    with session_factory() as session:
        current = session.get(Course, course_id).current_enrollment
        enrolled = session.execute(
            select(func.count()).select_from(CourseSelection).where(
                CourseSelection.course_id == course_id,
                CourseSelection.status == ENROLLED
            )
        ).scalar_one()
    return current, enrolled


class TestSqlSeatStore(unittest.TestCase):

    def setUp(self):
        self.engine = create_test_engine()
        self.session_factory = create_session_factory(self.engine)
        self.store = SqlSeatStore(self.session_factory)
        self.controller = AdmissionController(self.store, fast_config())

        add_youth(self.session_factory, "Y001", family_id="F001")
        add_youth(self.session_factory, "Y002", family_id="F002")
        add_course(self.session_factory, "C001", capacity=2)
        add_course(self.session_factory, "SOLO", capacity=1)

    def tearDown(self):
        self.engine.dispose()

    def test_enroll_writes_row_and_counter(self):
        record = self.controller.enroll("Y001", "C001", family_id="F001")

        self.assertEqual(record.status, ENROLLED)
        self.assertIsNotNone(record.selection_id)
        self.assertEqual(course_state(self.session_factory, "C001"), (1, 1))

        seats = self.controller.occupancy("C001")
        self.assertEqual((seats.capacity, seats.current_enrollment, seats.seats_left), (2, 1, 1))

    def test_not_found(self):
        with self.assertRaises(NotFoundError):
            self.controller.enroll("NOPE", "C001")
        with self.assertRaises(NotFoundError):
            self.controller.enroll("Y001", "NOPE")
        with self.assertRaises(NotFoundError):
            self.controller.enroll("Y001", "C001", family_id="F002")

    def test_capacity_and_duplicate_are_distinct(self):
        self.controller.enroll("Y001", "SOLO")

        with self.assertRaises(CapacityExceededError):
            self.controller.enroll("Y002", "SOLO")

        self.controller.enroll("Y001", "C001")
        with self.assertRaises(AlreadyEnrolledError):
            self.controller.enroll("Y001", "C001")

        self.assertEqual(course_state(self.session_factory, "SOLO"), (1, 1))
        self.assertEqual(course_state(self.session_factory, "C001"), (1, 1))

    def test_double_drop_decrements_once(self):
        self.controller.enroll("Y001", "C001")
        self.controller.enroll("Y002", "C001")

        dropped = self.controller.drop("Y001", "C001")
        with self.assertRaises(NotEnrolledError):
            self.controller.drop("Y001", "C001")

        self.assertEqual(dropped.status, DROPPED)
        self.assertEqual(course_state(self.session_factory, "C001"), (1, 1))

    def test_drop_unknown_child_or_course_is_not_enrolled(self):
        self.controller.enroll("Y001", "C001")

        for child_id, course_id in (("NOPE", "C001"), ("Y001", "NOPE")):
            with self.subTest(child_id=child_id, course_id=course_id):
                with self.assertRaises(NotEnrolledError):
                    self.controller.drop(child_id, course_id)

        self.assertEqual(course_state(self.session_factory, "C001"), (1, 1))

    def test_reenroll_reactivates_existing_row(self):
        first = self.controller.enroll("Y001", "C001")
        self.controller.drop("Y001", "C001")

        again = self.controller.enroll("Y001", "C001")

        self.assertEqual(again.selection_id, first.selection_id)
        self.assertIsNone(again.dropped_at)
        records = self.controller.enrollments_for_child("Y001")
        self.assertEqual([(r.course_id, r.status) for r in records], [("C001", ENROLLED)])

    def test_timeout_rolls_back_claim_and_row(self):
        ticks = iter(range(100))
        controller = AdmissionController(self.store, fast_config(), clock=lambda: float(next(ticks)))

        with self.assertRaises(AdmissionTimeoutError):
            controller.enroll("Y001", "C001", timeout=2.5)

        self.assertEqual(course_state(self.session_factory, "C001"), (0, 0))
        self.assertEqual(self.controller.enrollments_for_child("Y001"), [])

    def test_unique_violation_maps_to_already_enrolled(self):
        with self.assertRaises(AlreadyEnrolledError):
            with self.store.atomic() as tx:
                self.assertTrue(tx.claim_seat("C001"))
                tx.repo.enrollments.create("Y001", "C001")
                tx.repo.enrollments.create("Y001", "C001")

        self.assertEqual(course_state(self.session_factory, "C001"), (0, 0))

    def test_operational_error_is_transient(self):
        with self.assertRaises(TransientStoreError):
            with self.store.atomic() as tx:
                tx.repo.db.execute(text("SELECT * FROM table_that_does_not_exist"))

    def test_release_never_goes_below_zero(self):
        with self.store.atomic() as tx:
            self.assertFalse(tx.release_seat("C001"))

        self.assertEqual(course_state(self.session_factory, "C001"), (0, 0))


@pytest.mark.concurrency
class TestSqlSeatStoreConcurrency:
    """Threads contend through a file-backed database."""

    def _race(self, controller, child_ids, course_id):
        barrier = threading.Barrier(len(child_ids))
        outcomes = {}

        def attempt(child_id):
            barrier.wait()
            try:
                controller.enroll(child_id, course_id)
                outcomes[child_id] = "enrolled"
            except CapacityExceededError:
                outcomes[child_id] = "full"

        threads = [threading.Thread(target=attempt, args=(c,)) for c in child_ids]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        return outcomes

    def test_capacity_one_two_children(self, file_session_factory):
        add_youth(file_session_factory, "Y001")
        add_youth(file_session_factory, "Y002")
        add_course(file_session_factory, "SOLO", capacity=1)
        controller = AdmissionController(SqlSeatStore(file_session_factory), fast_config())

        outcomes = self._race(controller, ["Y001", "Y002"], "SOLO")

        assert sorted(outcomes.values()) == ["enrolled", "full"]
        assert course_state(file_session_factory, "SOLO") == (1, 1)

    def test_capacity_invariant_under_load(self, file_session_factory):
        children = [f"Y{i:03d}" for i in range(8)]
        for child_id in children:
            add_youth(file_session_factory, child_id)
        add_course(file_session_factory, "C001", capacity=3)
        controller = AdmissionController(SqlSeatStore(file_session_factory), fast_config())

        outcomes = self._race(controller, children, "C001")

        assert list(outcomes.values()).count("enrolled") == 3
        assert course_state(file_session_factory, "C001") == (3, 3)
