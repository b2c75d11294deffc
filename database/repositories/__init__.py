from database.repositories.base import BaseRepository
from database.repositories.directory import DirectoryRepository
from database.repositories.course import CourseRepository
from database.repositories.enrollment import EnrollmentRepository
from database.repositories.match import MatchRepository
from database.repositories.parameter import ParameterRepository

__all__ = [
    'BaseRepository',
    'DirectoryRepository',
    'CourseRepository',
    'EnrollmentRepository',
    'MatchRepository',
    'ParameterRepository',
]
