import contextlib
import logging

from database.database import SessionLocal, get_engine
from database.repository import CareRepository

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def care_uow(session_factory=None):
    """Per-unit-of-work transaction scope.

    Yields a CareRepository bound to a fresh Session. Commits on success,
    rolls back on exception, always closes.

    Usage:
        with care_uow() as repo:
            course = repo.courses.get_by_id(course_id)
            # perform operations...
        # commit happens automatically on successful exit
    """
    if session_factory is None:
        get_engine()
        session_factory = SessionLocal
    session = session_factory()
    try:
        repo = CareRepository(session)
        yield repo
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
