#!/usr/bin/env python3
"""
Enrollment Admission Controller - decides whether a child may take a seat.

enroll() runs its checks, the conditional seat claim and the enrollment
write inside one atomic unit of the configured SeatStore:

1. child exists (and belongs to the family, when one is given)
2. course exists
3. the course has a free seat
4. the child is not already enrolled

A seat claim that loses a race reports CapacityExceeded; a concurrent
duplicate enrollment reports AlreadyEnrolled. Either way the unit rolls back.

Retryable contention is retried with exponential backoff; once attempts run
out the caller gets BusyError. A caller deadline is checked before commit
and expiry rolls the unit back with AdmissionTimeoutError.
"""

import logging
import time
from typing import Callable, List, Optional, TypeVar

from tenacity import (
    Retrying,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    before_sleep_log,
)

from core.admission.models import CourseSeats, EnrollmentRecord
from core.admission.store import SeatStore, SeatTransaction
from core.config_loader import AdmissionConfig
from core.exceptions import (
    NotFoundError,
    CapacityExceededError,
    AlreadyEnrolledError,
    NotEnrolledError,
    BusyError,
    AdmissionTimeoutError,
    TransientStoreError,
)

logger = logging.getLogger(__name__)

T = TypeVar('T')


class Deadline:
    """Absolute deadline derived from a relative timeout (None never expires)."""

    def __init__(self, timeout: Optional[float], clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self.expires_at = clock() + timeout if timeout is not None else None

    def remaining(self) -> Optional[float]:
        if self.expires_at is None:
            return None
        return max(0.0, self.expires_at - self.clock())

    def expired(self) -> bool:
        return self.expires_at is not None and self.clock() >= self.expires_at


class AdmissionController:
    """Serializes seat claims and releases through a SeatStore."""

    def __init__(
        self,
        store: SeatStore,
        config: Optional[AdmissionConfig] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        self.store = store
        self.config = config or AdmissionConfig()
        self.clock = clock

    def enroll(
        self,
        child_id: str,
        course_id: str,
        family_id: Optional[str] = None,
        timeout: Optional[float] = None
    ) -> EnrollmentRecord:
        """
        Enroll a child in a course.

        Args:
            child_id: Child to enroll
            course_id: Target course
            family_id: When given, the child must belong to this family
            timeout: Seconds before the attempt is abandoned

        Returns:
            The active enrollment

        Raises:
            NotFoundError: Unknown child (or not in family) or course
            CapacityExceededError: No free seat
            AlreadyEnrolledError: Child already enrolled in the course
            BusyError: Contention persisted after retries
            AdmissionTimeoutError: Deadline expired before commit
        """
        def unit(tx: SeatTransaction, deadline: Deadline) -> EnrollmentRecord:
            self._require_child(tx, child_id, family_id)
            course = self._require_course(tx, course_id)

            if course.is_full:
                raise CapacityExceededError(
                    f"Course {course_id} is full ({course.current_enrollment}/{course.capacity})"
                )

            existing = tx.get_enrollment(child_id, course_id)
            if existing is not None and existing.is_active:
                raise AlreadyEnrolledError(f"Child {child_id} is already enrolled in course {course_id}")

            if not tx.claim_seat(course_id):
                raise CapacityExceededError(f"Course {course_id} filled up before the seat was claimed")

            record = tx.activate_enrollment(child_id, course_id)
            self._check_deadline(deadline, "enroll", child_id, course_id)
            return record

        record = self._run("enroll", unit, timeout)
        logger.info(f"Enrolled child {child_id} in course {course_id}")
        return record

    def drop(
        self,
        child_id: str,
        course_id: str,
        family_id: Optional[str] = None,
        timeout: Optional[float] = None
    ) -> EnrollmentRecord:
        """
        Drop an active enrollment and free its seat.

        A second drop of the same enrollment raises NotEnrolledError and
        never decrements the counter twice. A family_id that does not own
        the child, an unknown child and an unknown course are all treated the
        same as a missing enrollment.
        """
        def unit(tx: SeatTransaction, deadline: Deadline) -> EnrollmentRecord:
            child = tx.get_child(child_id)
            if child is None or (family_id is not None and child.family_id != family_id):
                raise NotEnrolledError(f"Child {child_id} has no active enrollment in course {course_id}")

            if tx.get_course(course_id) is None:
                raise NotEnrolledError(f"Child {child_id} has no active enrollment in course {course_id}")

            record = tx.deactivate_enrollment(child_id, course_id)
            if record is None:
                raise NotEnrolledError(f"Child {child_id} has no active enrollment in course {course_id}")

            tx.release_seat(course_id)
            self._check_deadline(deadline, "drop", child_id, course_id)
            return record

        record = self._run("drop", unit, timeout)
        logger.info(f"Dropped child {child_id} from course {course_id}")
        return record

    def enrollments_for_child(self, child_id: str) -> List[EnrollmentRecord]:
        return self.store.list_enrollments(child_id)

    def occupancy(self, course_id: str) -> CourseSeats:
        seats = self.store.occupancy(course_id)
        if seats is None:
            raise NotFoundError(f"Course {course_id} not found")
        return seats

    def _run(self, operation: str, unit: Callable[[SeatTransaction, Deadline], T], timeout: Optional[float]) -> T:
        if timeout is None:
            timeout = self.config.default_timeout_seconds
        deadline = Deadline(timeout, self.clock)

        retryer = Retrying(
            stop=stop_after_attempt(self.config.max_attempts),
            wait=wait_exponential(
                multiplier=self.config.backoff_min_seconds,
                min=self.config.backoff_min_seconds,
                max=self.config.backoff_max_seconds,
            ),
            retry=retry_if_exception_type(TransientStoreError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )

        def attempt() -> T:
            self._check_deadline(deadline, operation)
            with self.store.atomic(timeout=deadline.remaining()) as tx:
                return unit(tx, deadline)

        try:
            return retryer(attempt)
        except TransientStoreError as e:
            if deadline.expired():
                raise AdmissionTimeoutError(f"{operation} timed out waiting for the course") from e
            logger.error(f"{operation} gave up after {self.config.max_attempts} attempts: {e}")
            raise BusyError(f"Enrollment service is busy, please retry ({operation})") from e

    @staticmethod
    def _require_child(tx: SeatTransaction, child_id: str, family_id: Optional[str]) -> None:
        child = tx.get_child(child_id)
        if child is None:
            raise NotFoundError(f"Child {child_id} not found")
        if family_id is not None and child.family_id != family_id:
            raise NotFoundError(f"Child {child_id} not found in family {family_id}")

    @staticmethod
    def _require_course(tx: SeatTransaction, course_id: str) -> CourseSeats:
        course = tx.get_course(course_id)
        if course is None:
            raise NotFoundError(f"Course {course_id} not found")
        return course

    @staticmethod
    def _check_deadline(deadline: Deadline, operation: str, *ids: str) -> None:
        if deadline.expired():
            target = f" ({', '.join(ids)})" if ids else ""
            raise AdmissionTimeoutError(f"{operation}{target} exceeded its deadline and was rolled back")
