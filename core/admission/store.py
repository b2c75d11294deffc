"""
Seat store - the atomic unit behind admission control.

A SeatStore hands out SeatTransactions through ``atomic()``. Everything done
through one transaction either commits together on normal exit or is rolled
back when the block raises. Implementations must linearize transactions that
touch the same course.

Backends signal retryable contention (lock waits, serialization failures)
with TransientStoreError; the controller owns the retry policy.
"""

from abc import ABC, abstractmethod
from typing import ContextManager, List, Optional

from core.admission.models import ChildRef, CourseSeats, EnrollmentRecord


class SeatTransaction(ABC):
    """Operations available inside one atomic unit."""

    @abstractmethod
    def get_child(self, child_id: str) -> Optional[ChildRef]:
        pass

    @abstractmethod
    def get_course(self, course_id: str) -> Optional[CourseSeats]:
        """Read the course's seat counters, locking them for the rest of the unit."""
        pass

    @abstractmethod
    def get_enrollment(self, child_id: str, course_id: str) -> Optional[EnrollmentRecord]:
        pass

    @abstractmethod
    def claim_seat(self, course_id: str) -> bool:
        """Increment occupancy only if below capacity. False if the course is full."""
        pass

    @abstractmethod
    def release_seat(self, course_id: str) -> bool:
        """Decrement occupancy only if above zero."""
        pass

    @abstractmethod
    def activate_enrollment(self, child_id: str, course_id: str) -> EnrollmentRecord:
        """
        Insert an enrolled row, or re-activate a dropped one.

        Raises:
            AlreadyEnrolledError: If the pair is already enrolled
        """
        pass

    @abstractmethod
    def deactivate_enrollment(self, child_id: str, course_id: str) -> Optional[EnrollmentRecord]:
        """Move an enrolled row to dropped. None if there was no enrolled row."""
        pass


class SeatStore(ABC):
    """Storage backend for course seats and enrollments."""

    @abstractmethod
    def atomic(self, timeout: Optional[float] = None) -> ContextManager[SeatTransaction]:
        """
        Open an atomic unit.

        Args:
            timeout: Upper bound in seconds on waiting for locks, None for the
                backend default

        Raises:
            TransientStoreError: On retryable contention
        """
        pass

    @abstractmethod
    def list_enrollments(self, child_id: str) -> List[EnrollmentRecord]:
        pass

    @abstractmethod
    def occupancy(self, course_id: str) -> Optional[CourseSeats]:
        pass
