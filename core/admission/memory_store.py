"""
In-memory seat store.

For deployments without a relational store, and for tests. A single lock
serializes atomic units. Writes are staged on the transaction and applied
only when the unit exits normally, so an exception anywhere in the block
leaves counters and enrollments untouched.
"""

import contextlib
import logging
import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, Iterator, List, Optional, Tuple

from core.admission.models import ChildRef, CourseSeats, EnrollmentRecord, ENROLLED, DROPPED
from core.admission.store import SeatStore, SeatTransaction
from core.exceptions import AlreadyEnrolledError, TransientStoreError

logger = logging.getLogger(__name__)

EnrollmentKey = Tuple[str, str]


class InMemorySeatTransaction(SeatTransaction):
    def __init__(self, store: 'InMemorySeatStore'):
        self.store = store
        self.staged_courses: Dict[str, CourseSeats] = {}
        self.staged_enrollments: Dict[EnrollmentKey, EnrollmentRecord] = {}

    def get_child(self, child_id: str) -> Optional[ChildRef]:
        return self.store.children.get(child_id)

    def get_course(self, course_id: str) -> Optional[CourseSeats]:
        if course_id in self.staged_courses:
            return self.staged_courses[course_id]
        return self.store.courses.get(course_id)

    def get_enrollment(self, child_id: str, course_id: str) -> Optional[EnrollmentRecord]:
        key = (child_id, course_id)
        if key in self.staged_enrollments:
            return self.staged_enrollments[key]
        return self.store.enrollments.get(key)

    def claim_seat(self, course_id: str) -> bool:
        course = self.get_course(course_id)
        if course is None or course.current_enrollment >= course.capacity:
            return False
        self.staged_courses[course_id] = replace(course, current_enrollment=course.current_enrollment + 1)
        return True

    def release_seat(self, course_id: str) -> bool:
        course = self.get_course(course_id)
        if course is None or course.current_enrollment <= 0:
            logger.error(f"Occupancy counter for course {course_id} already at zero")
            return False
        self.staged_courses[course_id] = replace(course, current_enrollment=course.current_enrollment - 1)
        return True

    def activate_enrollment(self, child_id: str, course_id: str) -> EnrollmentRecord:
        existing = self.get_enrollment(child_id, course_id)
        if existing is not None and existing.is_active:
            raise AlreadyEnrolledError(f"Child {child_id} is already enrolled in course {course_id}")

        record = EnrollmentRecord(
            child_id=child_id,
            course_id=course_id,
            status=ENROLLED,
            selection_date=datetime.now(timezone.utc),
            selection_id=existing.selection_id if existing is not None else self.store.next_selection_id(),
        )
        self.staged_enrollments[(child_id, course_id)] = record
        return record

    def deactivate_enrollment(self, child_id: str, course_id: str) -> Optional[EnrollmentRecord]:
        existing = self.get_enrollment(child_id, course_id)
        if existing is None or not existing.is_active:
            return None

        record = replace(existing, status=DROPPED, dropped_at=datetime.now(timezone.utc))
        self.staged_enrollments[(child_id, course_id)] = record
        return record

    def apply(self) -> None:
        self.store.courses.update(self.staged_courses)
        self.store.enrollments.update(self.staged_enrollments)


class InMemorySeatStore(SeatStore):
    """SeatStore kept in process memory."""

    def __init__(self, lock_timeout_seconds: float = 5.0):
        self.lock_timeout_seconds = lock_timeout_seconds
        self.children: Dict[str, ChildRef] = {}
        self.courses: Dict[str, CourseSeats] = {}
        self.enrollments: Dict[EnrollmentKey, EnrollmentRecord] = {}
        self._lock = threading.Lock()
        self._selection_seq = 0

    def add_child(self, child_id: str, family_id: Optional[str] = None) -> ChildRef:
        child = ChildRef(child_id=child_id, family_id=family_id)
        with self._lock:
            self.children[child_id] = child
        return child

    def add_course(self, course_id: str, capacity: int, current_enrollment: int = 0, name: Optional[str] = None) -> CourseSeats:
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        if not 0 <= current_enrollment <= capacity:
            raise ValueError(f"current_enrollment {current_enrollment} outside [0, {capacity}]")
        course = CourseSeats(course_id=course_id, capacity=capacity, current_enrollment=current_enrollment, name=name)
        with self._lock:
            self.courses[course_id] = course
        return course

    def next_selection_id(self) -> int:
        self._selection_seq += 1
        return self._selection_seq

    @contextlib.contextmanager
    def atomic(self, timeout: Optional[float] = None) -> Iterator[SeatTransaction]:
        wait = self.lock_timeout_seconds if timeout is None else min(timeout, self.lock_timeout_seconds)
        if not self._lock.acquire(timeout=max(0.0, wait)):
            raise TransientStoreError(f"Seat store lock not acquired within {wait:.2f}s")
        try:
            tx = InMemorySeatTransaction(self)
            yield tx
            tx.apply()
        finally:
            self._lock.release()

    def list_enrollments(self, child_id: str) -> List[EnrollmentRecord]:
        with self._lock:
            records = [r for (cid, _), r in self.enrollments.items() if cid == child_id]
        return sorted(records, key=lambda r: r.course_id)

    def occupancy(self, course_id: str) -> Optional[CourseSeats]:
        with self._lock:
            return self.courses.get(course_id)
