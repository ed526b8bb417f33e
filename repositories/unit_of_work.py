"""
Unit of work - the single atomic-unit capability used by the services.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.exceptions import StorageError

logger = logging.getLogger("nutrilife.unit_of_work")


@contextmanager
def unit_of_work(db: Session) -> Iterator[Session]:
    """
    Commit everything done inside the block, or nothing.

    Any exception rolls the session back and propagates. IntegrityError is
    re-raised untouched so services can translate constraint violations;
    other database failures surface as StorageError.

    Usage:
        with unit_of_work(db):
            repo.add(entity)
    """
    try:
        yield db
        db.commit()
    except IntegrityError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"unit_of_work_failed error={e}")
        raise StorageError("Database operation failed") from e
    except Exception:
        db.rollback()
        raise
