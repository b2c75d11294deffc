from typing import List, Optional

from sqlalchemy import select

from database.models import Youth, Teacher, Course
from database.repositories.base import BaseRepository


class DirectoryRepository(BaseRepository):
    """Read-only lookups for youths, teachers and courses."""

    def get_youth(self, youth_id: str) -> Optional[Youth]:
        return self.db.get(Youth, youth_id)

    def get_teacher(self, teacher_id: str) -> Optional[Teacher]:
        return self.db.get(Teacher, teacher_id)

    def list_teachers(self) -> List[Teacher]:
        stmt = select(Teacher).order_by(Teacher.teacher_id)
        return self.db.execute(stmt).scalars().all()

    def list_courses(
        self,
        course_type: Optional[str] = None,
        neighborhood_id: Optional[str] = None,
        open_only: bool = False
    ) -> List[Course]:
        stmt = select(Course)

        if course_type:
            stmt = stmt.where(Course.type == course_type)

        if neighborhood_id:
            stmt = stmt.where(Course.neighborhood_id == neighborhood_id)

        if open_only:
            stmt = stmt.where(Course.current_enrollment < Course.capacity)

        stmt = stmt.order_by(Course.course_id)
        return self.db.execute(stmt).scalars().all()
