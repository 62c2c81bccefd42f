"""
Key-value persistence adapters for the wardrobe store.

The store writes one serialized blob per collection after every mutation and
reads them back once at startup. Adapters only move strings; they know nothing
about the entities inside.
"""
import logging
from typing import Callable, Dict, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ecowardrobe.core.exceptions import PersistenceFailure
from ecowardrobe.database import Base, SessionLocal, engine
from ecowardrobe.models import StoredBlob

logger = logging.getLogger(__name__)


class KeyValueStore:
    """Persistence interface: load/save a text blob by key."""

    def load(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def save(self, key: str, blob: str) -> None:
        raise NotImplementedError

    def save_many(self, blobs: Mapping[str, str]) -> None:
        """Write several keys in the given order. Adapters that can do it atomically should."""
        for key, blob in blobs.items():
            self.save(key, blob)


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store, used in tests and with STORAGE_BACKEND=memory."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def save(self, key: str, blob: str) -> None:
        self._data[key] = blob

    def keys(self):
        return sorted(self._data)


class SQLKeyValueStore(KeyValueStore):
    """Blob store on the ``stored_blobs`` table."""

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal) -> None:
        self._session_factory = session_factory

    def load(self, key: str) -> Optional[str]:
        try:
            with self._session_factory() as db:
                row = db.get(StoredBlob, key)
                return row.value if row else None
        except SQLAlchemyError as e:
            logger.error(f"Failed to load '{key}' from database: {e}")
            raise PersistenceFailure(f"Could not read '{key}'", key=key) from e

    def save(self, key: str, blob: str) -> None:
        self.save_many({key: blob})

    def save_many(self, blobs: Mapping[str, str]) -> None:
        """Write all keys in one transaction: either every blob is stored or none is."""
        keys = ", ".join(blobs)
        try:
            with self._session_factory() as db:
                for key, blob in blobs.items():
                    row = db.get(StoredBlob, key)
                    if row is None:
                        db.add(StoredBlob(key=key, value=blob))
                    else:
                        row.value = blob
                db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to save '{keys}' to database: {e}")
            raise PersistenceFailure(f"Could not write '{keys}'", key=keys) from e


def create_tables(bind=None) -> None:
    """Create the blob table if it does not exist yet (idempotent)."""
    Base.metadata.create_all(bind=bind or engine)
