from sqlalchemy import Column, String, Text, Numeric
from sqlalchemy.orm import relationship

from .base import Base


class Teacher(Base):
    __tablename__ = 'teacher'

    teacher_id = Column(String(20), primary_key=True)
    neighborhood_id = Column(String(20))
    name = Column(String(50), nullable=False)
    certificate = Column(String(100))
    specialty = Column(Text)  # comma-separated tags
    teaching_style = Column(String(50))
    available_time = Column(Text)

    # Maintained by evaluation aggregation, read-only here
    avg_score = Column(Numeric(5, 2))

    courses = relationship("Course", back_populates="teacher")
