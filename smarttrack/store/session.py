"""
Session Store - The signed-in identity under a single well-known key
"""

from typing import Optional
import logging

from smarttrack.schemas import SessionRecord, UserRecord
from smarttrack.store.storage import KeyValueStorage
from smarttrack.utils.timestamps import utcnow

logger = logging.getLogger(__name__)

SESSION_KEY = "user"


class SessionStore:
    """
    One session at a time: login overwrites it, logout removes it.
    Sessions never expire on their own.
    """

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    def start(self, user: UserRecord) -> SessionRecord:
        session = SessionRecord(user=user, signed_in_at=utcnow())
        self.storage.set_json(SESSION_KEY, session.model_dump(mode="json"))
        logger.info(f"🔑 Session started for {user.email}")
        return session

    def current(self) -> Optional[SessionRecord]:
        data = self.storage.get_json(SESSION_KEY)
        if data is None:
            return None
        return SessionRecord.model_validate(data)

    def end(self) -> None:
        self.storage.remove(SESSION_KEY)
        logger.info("🔒 Session ended")
