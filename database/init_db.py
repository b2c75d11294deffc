import logging
from typing import Optional

from tenacity import retry, stop_after_attempt, wait_fixed

from core.config_loader import MatchingWeights
from core.parameters import ParameterStore
from database.database import get_engine
from database.models import Base

logger = logging.getLogger(__name__)


@retry(stop=stop_after_attempt(5), wait=wait_fixed(2))
def init_db(engine=None, session_factory=None, default_weights: Optional[MatchingWeights] = None) -> int:
    """Create tables and seed default parameters.

    Retried because the database container may still be starting.

    Returns:
        Number of parameters seeded
    """
    logger.info("Initializing database...")
    try:
        Base.metadata.create_all(bind=engine or get_engine())
        logger.info("Tables created or verified.")

        seeded = ParameterStore(session_factory, default_weights=default_weights).seed_defaults()
        logger.info(f"Seeded {seeded} default parameters.")
        return seeded
    except Exception as e:
        logger.error(f"Error initializing DB: {e}")
        raise


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
