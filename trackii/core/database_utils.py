"""
Session scope for work done outside a request: startup table checks, the
health endpoint and background sweeps.
"""
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session

from trackii.db.session import SessionLocal

logger = logging.getLogger(__name__)


@contextmanager
def get_db_session() -> Iterator[Session]:
    """
    Yield a session that is committed on exit, or rolled back when the block
    raises.

        with get_db_session() as db:
            db.execute(text("SELECT 1"))
    """
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception as e:
        session.rollback()
        logger.error(f"Rolling back database session: {e}")
        raise
    finally:
        session.close()
