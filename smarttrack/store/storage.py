"""
Key-Value Storage - JSON documents under string keys, one table row per key
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import Any, Optional
import json
import logging

from smarttrack.models import StorageEntry

logger = logging.getLogger(__name__)


class KeyValueStorage:
    """
    Minimal local-storage replacement on top of a SQLAlchemy session.

    Values are whole JSON documents. ``set_json`` rewrites the entire value
    and commits immediately, so every write is a full replace. There is no
    locking: concurrent writers to the same key race and the last commit wins,
    including two sessions that both create a missing key.

    Errors (malformed JSON, database failures) are not caught here.
    """

    def __init__(self, db: Session, namespace: str = "iqac"):
        self.db = db
        self.namespace = namespace

    def key(self, name: str) -> str:
        """Namespaced key, e.g. "tasks" -> "iqac_tasks" """
        return f"{self.namespace}_{name}" if self.namespace else name

    def _entry(self, name: str) -> Optional[StorageEntry]:
        return self.db.get(StorageEntry, self.key(name))

    def has(self, name: str) -> bool:
        return self._entry(name) is not None

    def get_json(self, name: str) -> Optional[Any]:
        """Parsed value, or None when the key is absent"""
        entry = self._entry(name)
        if entry is None:
            return None
        return json.loads(entry.value)

    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def _insert(self, name: str, payload: str) -> bool:
        """Insert a new row; False when another session created the key first"""
        self.db.add(StorageEntry(key=self.key(name), value=payload))
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.debug(f"Key {self.key(name)} was created concurrently")
            return False
        except Exception:
            self.db.rollback()
            raise
        return True

    def set_json(self, name: str, value: Any) -> None:
        payload = json.dumps(value)
        entry = self._entry(name)
        if entry is None:
            if not self._insert(name, payload):
                # Lost the insert race: overwrite, last writer wins
                self.db.merge(StorageEntry(key=self.key(name), value=payload))
                self._commit()
        else:
            entry.value = payload
            self._commit()
        logger.debug(f"💾 Wrote {self.key(name)} ({len(payload)} bytes)")

    def seed_json(self, name: str, value: Any) -> bool:
        """Write ``value`` only if the key is absent; True when this call created it"""
        if self.has(name):
            return False
        return self._insert(name, json.dumps(value))

    def remove(self, name: str) -> None:
        entry = self._entry(name)
        if entry is None:
            return
        self.db.delete(entry)
        self._commit()
        logger.debug(f"🗑️  Removed {self.key(name)}")
