from sqlalchemy import Column, Integer, String, Text, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import relationship

from .base import Base


class Course(Base):
    """
    A community course with a fixed number of seats.

    current_enrollment is the authoritative occupancy counter. It is only
    changed by the admission controller's atomic unit and the CHECK
    constraints keep it within [0, capacity] even for stray writers.
    """
    __tablename__ = 'course'

    course_id = Column(String(20), primary_key=True)
    teacher_id = Column(String(20), ForeignKey('teacher.teacher_id', ondelete='SET NULL'), nullable=True)
    neighborhood_id = Column(String(20))
    name = Column(String(100), nullable=False)
    type = Column(String(50), nullable=False)
    age_range = Column(String(20))  # "min-max", e.g. "7-10"
    schedule = Column(Text)

    capacity = Column(Integer, nullable=False, default=20)
    current_enrollment = Column(Integer, nullable=False, default=0)

    teacher = relationship("Teacher", back_populates="courses")
    selections = relationship("CourseSelection", back_populates="course", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint('capacity >= 1', name='chk_course_capacity_positive'),
        CheckConstraint(
            'current_enrollment >= 0 AND current_enrollment <= capacity',
            name='chk_course_enrollment_bounds'
        ),
        Index('idx_course_teacher', 'teacher_id'),
        Index('idx_course_neighborhood', 'neighborhood_id'),
    )
