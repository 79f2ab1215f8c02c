# ration_store/shared/database/transaction.py
from contextlib import contextmanager
from functools import wraps
from typing import Iterator, Optional
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ration_store.core.exceptions import ConflictError, RationStoreError, StoreError

logger = logging.getLogger(__name__)


@contextmanager
def atomic(db: Session, conflict_message: Optional[str] = None) -> Iterator[Session]:
    """
    Run a block as one transaction: commit on success, roll back on any error.

    Storage errors are translated to the API taxonomy:
    - IntegrityError -> ConflictError(conflict_message) when a message is given
    - any other SQLAlchemyError -> StoreError (engine text is only logged)

    Business errors raised inside the block roll back and propagate unchanged.
    """
    try:
        yield db
        db.commit()
    except RationStoreError:
        db.rollback()
        raise
    except IntegrityError as e:
        db.rollback()
        if conflict_message:
            raise ConflictError(conflict_message) from e
        logger.exception("Integrity error in transaction")
        raise StoreError() from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Database error in transaction")
        raise StoreError() from e
    except Exception:
        db.rollback()
        raise


def run_query(description: str):
    """Decorator translating storage failures of read-only queries into StoreError"""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except SQLAlchemyError as e:
                logger.exception(f"Error {description}")
                raise StoreError() from e
        return wrapper
    return decorator


@run_query("reloading record")
def reload(db: Session, instance):
    """Refresh a committed instance from the database"""
    db.refresh(instance)
    return instance
