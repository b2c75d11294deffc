from sqlalchemy import Column, Integer, String, TIMESTAMP, ForeignKey, UniqueConstraint, Index, func
from sqlalchemy.orm import relationship

from .base import Base

ENROLLED = 'enrolled'
DROPPED = 'dropped'


class CourseSelection(Base):
    """
    Enrollment of one youth in one course.

    Unique on (youth_id, course_id): a re-enrollment after a drop
    re-activates the existing row instead of inserting a second one.
    """
    __tablename__ = 'course_selection'

    selection_id = Column(Integer, primary_key=True, autoincrement=True)
    youth_id = Column(String(20), ForeignKey('youth.youth_id', ondelete='CASCADE'), nullable=False)
    course_id = Column(String(20), ForeignKey('course.course_id', ondelete='CASCADE'), nullable=False)

    status = Column(String(20), nullable=False, default=ENROLLED)  # enrolled|dropped
    selection_date = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    dropped_at = Column(TIMESTAMP(timezone=True), nullable=True)

    course = relationship("Course", back_populates="selections")

    __table_args__ = (
        UniqueConstraint('youth_id', 'course_id', name='uq_course_selection_youth_course'),
        Index('idx_course_selection_course_status', 'course_id', 'status'),
    )
