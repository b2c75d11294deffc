"""Admission DTOs, detached from any storage backend."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

ENROLLED = 'enrolled'
DROPPED = 'dropped'


@dataclass(frozen=True)
class ChildRef:
    child_id: str
    family_id: Optional[str] = None


@dataclass(frozen=True)
class CourseSeats:
    course_id: str
    capacity: int
    current_enrollment: int
    name: Optional[str] = None

    @property
    def seats_left(self) -> int:
        return max(0, self.capacity - self.current_enrollment)

    @property
    def is_full(self) -> bool:
        return self.current_enrollment >= self.capacity


@dataclass(frozen=True)
class EnrollmentRecord:
    child_id: str
    course_id: str
    status: str
    selection_date: Optional[datetime] = None
    dropped_at: Optional[datetime] = None
    selection_id: Optional[int] = None

    @property
    def is_active(self) -> bool:
        return self.status == ENROLLED

    @classmethod
    def from_orm(cls, selection) -> 'EnrollmentRecord':
        return cls(
            child_id=selection.youth_id,
            course_id=selection.course_id,
            status=selection.status,
            selection_date=selection.selection_date,
            dropped_at=selection.dropped_at,
            selection_id=selection.selection_id,
        )
