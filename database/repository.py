from sqlalchemy.orm import Session

from database.repositories import (
    DirectoryRepository,
    CourseRepository,
    EnrollmentRepository,
    MatchRepository,
    ParameterRepository,
)


class CareRepository:
    """Facade bundling the per-aggregate repositories over one Session."""

    def __init__(self, db: Session):
        self.db = db
        self.directory = DirectoryRepository(db)
        self.courses = CourseRepository(db)
        self.enrollments = EnrollmentRepository(db)
        self.matches = MatchRepository(db)
        self.parameters = ParameterRepository(db)

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
