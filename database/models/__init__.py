from .base import Base
from .youth import Youth
from .teacher import Teacher
from .course import Course
from .enrollment import CourseSelection, ENROLLED, DROPPED
from .match import (
    MatchRecord,
    TARGET_TEACHER,
    TARGET_COURSE,
    STATUS_ACTIVE,
    STATUS_STALE,
    STATUS_SUPERSEDED,
)
from .parameter import SystemParameter

__all__ = [
    'Base',
    'Youth',
    'Teacher',
    'Course',
    'CourseSelection',
    'ENROLLED',
    'DROPPED',
    'MatchRecord',
    'TARGET_TEACHER',
    'TARGET_COURSE',
    'STATUS_ACTIVE',
    'STATUS_STALE',
    'STATUS_SUPERSEDED',
    'SystemParameter',
]
