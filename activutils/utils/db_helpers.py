import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from activutils.core.exceptions import PreferenceStoreError

logger = logging.getLogger(__name__)


def handle_db_exception(db: Session, e: SQLAlchemyError, message: str = "Operation failed", key: str = None):
    """Roll back and re-raise e as PreferenceStoreError"""
    db.rollback()

    logger.error(f"{message}: {type(e).__name__}: {e}")

    kind = "CONFLICT" if isinstance(e, IntegrityError) else "DB ERROR"
    raise PreferenceStoreError(f"{message} | {kind}: {e}", key=key) from e
