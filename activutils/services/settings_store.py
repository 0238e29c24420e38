"""
activutils/services/settings_store.py
Key-value stores backing persisted preferences
"""
import logging
from typing import Callable, Dict, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from activutils.models.preference import Preference
from activutils.utils.db_helpers import handle_db_exception

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class InMemoryKeyValueStore:
    """Process-local store, nothing survives a restart"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class SqlKeyValueStore:
    """
    Store backed by the preferences table

    Each call opens and closes its own session from session_factory.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        db = self.session_factory()
        try:
            row = db.get(Preference, key)
            return row.value if row is not None else None
        except SQLAlchemyError as e:
            handle_db_exception(db, e, f"Failed to read preference {key!r}", key=key)
        finally:
            db.close()

    def set(self, key: str, value: str) -> None:
        db = self.session_factory()
        try:
            row = db.get(Preference, key)
            if row is None:
                db.add(Preference(key=key, value=value))
            else:
                row.value = value
            db.commit()
            logger.debug(f"Stored preference {key}={value!r}")
        except SQLAlchemyError as e:
            handle_db_exception(db, e, f"Failed to store preference {key!r}", key=key)
        finally:
            db.close()
