"""
Key-value blob table backing the SQL persistence adapter.
"""
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text

from ecowardrobe.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StoredBlob(Base):
    """One serialized collection (items, logs or moods) per row"""
    __tablename__ = "stored_blobs"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=False)  # JSON array of entities
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)
