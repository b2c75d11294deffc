"""
SQL seat store.

One care_uow per atomic unit. The course row is read with SELECT ... FOR
UPDATE where the backend supports it and the seat is claimed with a
conditional UPDATE, so the capacity bound holds even if the lock is not
available (SQLite serializes the whole unit with BEGIN IMMEDIATE instead).
"""

import contextlib
import logging
from typing import Iterator, List, Optional

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, OperationalError

from core.admission.models import ChildRef, CourseSeats, EnrollmentRecord, ENROLLED
from core.admission.store import SeatStore, SeatTransaction
from core.exceptions import AlreadyEnrolledError, TransientStoreError
from database.repository import CareRepository
from database.uow import care_uow

logger = logging.getLogger(__name__)


class SqlSeatTransaction(SeatTransaction):
    def __init__(self, repo: CareRepository):
        self.repo = repo

    def get_child(self, child_id: str) -> Optional[ChildRef]:
        youth = self.repo.directory.get_youth(child_id)
        if youth is None:
            return None
        return ChildRef(child_id=youth.youth_id, family_id=youth.family_id)

    def get_course(self, course_id: str) -> Optional[CourseSeats]:
        course = self.repo.courses.get_by_id(course_id, for_update=True)
        if course is None:
            return None
        return CourseSeats(
            course_id=course.course_id,
            capacity=course.capacity,
            current_enrollment=course.current_enrollment,
            name=course.name,
        )

    def get_enrollment(self, child_id: str, course_id: str) -> Optional[EnrollmentRecord]:
        selection = self.repo.enrollments.get(child_id, course_id)
        return EnrollmentRecord.from_orm(selection) if selection is not None else None

    def claim_seat(self, course_id: str) -> bool:
        return self.repo.courses.try_claim_seat(course_id)

    def release_seat(self, course_id: str) -> bool:
        return self.repo.courses.release_seat(course_id)

    def activate_enrollment(self, child_id: str, course_id: str) -> EnrollmentRecord:
        selection = self.repo.enrollments.get(child_id, course_id)

        if selection is None:
            # A concurrent insert of the same pair surfaces as IntegrityError
            selection = self.repo.enrollments.create(child_id, course_id)
            return EnrollmentRecord.from_orm(selection)

        if selection.status == ENROLLED or not self.repo.enrollments.reactivate(selection):
            raise AlreadyEnrolledError(f"Child {child_id} is already enrolled in course {course_id}")

        return EnrollmentRecord.from_orm(selection)

    def deactivate_enrollment(self, child_id: str, course_id: str) -> Optional[EnrollmentRecord]:
        selection = self.repo.enrollments.get(child_id, course_id)
        if selection is None or not self.repo.enrollments.deactivate(selection):
            return None
        return EnrollmentRecord.from_orm(selection)


class SqlSeatStore(SeatStore):
    """SeatStore over the relational database."""

    def __init__(self, session_factory=None):
        self.session_factory = session_factory

    @contextlib.contextmanager
    def atomic(self, timeout: Optional[float] = None) -> Iterator[SeatTransaction]:
        try:
            with care_uow(self.session_factory) as repo:
                if timeout is not None:
                    self._set_lock_timeout(repo, timeout)
                yield SqlSeatTransaction(repo)
        except IntegrityError as e:
            raise AlreadyEnrolledError("Enrollment already exists for this child and course") from e
        except OperationalError as e:
            logger.warning(f"Seat store contention: {e.orig if e.orig is not None else e}")
            raise TransientStoreError(str(e)) from e

    def list_enrollments(self, child_id: str) -> List[EnrollmentRecord]:
        with care_uow(self.session_factory) as repo:
            return [EnrollmentRecord.from_orm(s) for s in repo.enrollments.list_for_youth(child_id)]

    def occupancy(self, course_id: str) -> Optional[CourseSeats]:
        with care_uow(self.session_factory) as repo:
            course = repo.courses.get_by_id(course_id)
            if course is None:
                return None
            return CourseSeats(
                course_id=course.course_id,
                capacity=course.capacity,
                current_enrollment=course.current_enrollment,
                name=course.name,
            )

    @staticmethod
    def _set_lock_timeout(repo: CareRepository, timeout: float) -> None:
        # SQLite bounds lock waits with the connection's busy timeout instead
        if repo.db.get_bind().dialect.name != 'postgresql':
            return
        millis = max(1, int(timeout * 1000))
        repo.db.execute(text(f"SET LOCAL lock_timeout = '{millis}ms'"))
