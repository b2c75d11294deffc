import logging
from typing import Optional

from sqlalchemy import select, update

from database.models import Course
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class CourseRepository(BaseRepository):
    def get_by_id(self, course_id: str, for_update: bool = False) -> Optional[Course]:
        stmt = select(Course).where(Course.course_id == course_id)
        if for_update:
            # Row lock on backends that support it (no-op on SQLite)
            stmt = stmt.with_for_update()
        return self.db.execute(stmt).scalar_one_or_none()

    def try_claim_seat(self, course_id: str) -> bool:
        """Increment current_enrollment by one if a seat is free.

        The comparison and the increment happen in a single UPDATE, so a
        concurrent claim against a stale read cannot overbook the course.

        Returns:
            True if a seat was claimed, False if the course was full.
        """
        stmt = (
            update(Course)
            .where(
                Course.course_id == course_id,
                Course.current_enrollment < Course.capacity
            )
            .values(current_enrollment=Course.current_enrollment + 1)
            .execution_options(synchronize_session=False)
        )
        claimed = self.db.execute(stmt).rowcount == 1
        self._expire(course_id)
        return claimed

    def release_seat(self, course_id: str) -> bool:
        """Decrement current_enrollment by one, never below zero."""
        stmt = (
            update(Course)
            .where(
                Course.course_id == course_id,
                Course.current_enrollment > 0
            )
            .values(current_enrollment=Course.current_enrollment - 1)
            .execution_options(synchronize_session=False)
        )
        released = self.db.execute(stmt).rowcount == 1
        if not released:
            logger.error(f"Occupancy counter for course {course_id} already at zero")
        self._expire(course_id)
        return released

    def _expire(self, course_id: str) -> None:
        course = self.db.get(Course, course_id)
        if course is not None:
            self.db.expire(course)
