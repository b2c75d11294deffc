import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select, update

from database.models import CourseSelection, ENROLLED, DROPPED
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class EnrollmentRepository(BaseRepository):
    def get(self, youth_id: str, course_id: str) -> Optional[CourseSelection]:
        stmt = select(CourseSelection).where(
            CourseSelection.youth_id == youth_id,
            CourseSelection.course_id == course_id
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def create(self, youth_id: str, course_id: str) -> CourseSelection:
        """Insert a new enrolled row. Raises IntegrityError on a duplicate pair."""
        selection = CourseSelection(
            youth_id=youth_id,
            course_id=course_id,
            status=ENROLLED,
            selection_date=datetime.now(timezone.utc)
        )
        return self.add(selection)

    def reactivate(self, selection: CourseSelection) -> bool:
        """Transition a dropped row back to enrolled. False if it was not dropped."""
        stmt = (
            update(CourseSelection)
            .where(
                CourseSelection.selection_id == selection.selection_id,
                CourseSelection.status == DROPPED
            )
            .values(
                status=ENROLLED,
                selection_date=datetime.now(timezone.utc),
                dropped_at=None
            )
            .execution_options(synchronize_session=False)
        )
        changed = self.db.execute(stmt).rowcount == 1
        self.db.expire(selection)
        return changed

    def deactivate(self, selection: CourseSelection) -> bool:
        """Transition an enrolled row to dropped. False if it was not enrolled."""
        stmt = (
            update(CourseSelection)
            .where(
                CourseSelection.selection_id == selection.selection_id,
                CourseSelection.status == ENROLLED
            )
            .values(status=DROPPED, dropped_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        changed = self.db.execute(stmt).rowcount == 1
        self.db.expire(selection)
        return changed

    def list_for_youth(self, youth_id: str, status: Optional[str] = None) -> List[CourseSelection]:
        stmt = select(CourseSelection).where(CourseSelection.youth_id == youth_id)

        if status is not None:
            stmt = stmt.where(CourseSelection.status == status)

        stmt = stmt.order_by(CourseSelection.course_id)
        return self.db.execute(stmt).scalars().all()
