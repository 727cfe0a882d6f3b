"""
Storage Entry Model - One row per storage key, value is a JSON document
"""

from sqlalchemy import Column, String, Text, DateTime
from datetime import datetime, timezone

from smarttrack.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StorageEntry(Base):
    """
    Key-value table standing in for browser local storage.

    Each collection (users, tasks, files) and the session live under their
    own key. Writes always replace the whole value - there is no partial
    update of a collection.
    """
    __tablename__ = "storage_entries"

    key = Column(String(255), primary_key=True)  # Namespaced key, e.g. "iqac_tasks"
    value = Column(Text, nullable=False)  # Serialized JSON array/object
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    def __repr__(self):
        return f"<StorageEntry {self.key} ({len(self.value or '')} bytes)>"
