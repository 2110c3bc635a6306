import logging
import time

from sqlalchemy.exc import OperationalError

from core.database import engine, Base
import core.models  # noqa: F401  registers the tables on Base.metadata

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 7


def init_db(sleep=time.sleep):
    logger.info("Creating database tables...")

    for attempt in range(1, MAX_ATTEMPTS + 1):
        try:
            Base.metadata.create_all(bind=engine)
            logger.info("Database tables ready")
            return
        except OperationalError as e:
            logger.warning("Database not ready (attempt %d/%d): %s", attempt, MAX_ATTEMPTS, e)
            sleep(min(2 * attempt, 10))

    raise RuntimeError("Database not reachable after retries. Startup aborted.")
