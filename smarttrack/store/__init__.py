"""
Store Package - Data-access layer for users, tasks, files and the session
"""

from smarttrack.store.base import DataStore
from smarttrack.store.storage import KeyValueStorage
from smarttrack.store.local import LocalStore
from smarttrack.store.remote import RemoteClient, RemoteStore
from smarttrack.store.session import SessionStore

__all__ = [
    "DataStore",
    "KeyValueStorage",
    "LocalStore",
    "RemoteClient",
    "RemoteStore",
    "SessionStore",
]
