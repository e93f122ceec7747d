"""
Bounded retries for transient database errors.
"""
import logging
import time
from typing import Callable, Optional, TypeVar
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session
from weeklydiary.core.config import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_with_retries(
    db: Session,
    operation: Callable[[Session], T],
    retries: Optional[int] = None,
    delay: Optional[float] = None,
) -> T:
    """
    Run `operation(db)`, retrying on OperationalError with exponential backoff.

    The session is rolled back before every retry. The last error is re-raised.
    """
    retries = retries or settings.DB_RETRY_ATTEMPTS
    delay = settings.DB_RETRY_DELAY if delay is None else delay
    for attempt in range(retries):
        try:
            return operation(db)
        except OperationalError as e:
            db.rollback()
            if attempt == retries - 1:
                logger.error(f"Database operation failed after {retries} attempts: {e}")
                raise
            wait_time = delay * (2 ** attempt)
            logger.warning(f"Transient database error, retrying in {wait_time:.2f}s ({attempt + 1}/{retries}): {e}")
            time.sleep(wait_time)
