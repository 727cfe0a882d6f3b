"""
Import smoke test - every layer loads and the storage table can be created
"""


def test_config_imports():
    from smarttrack.core.config import settings
    assert settings.APP_NAME


def test_security_imports():
    from smarttrack.core.security import hash_password, verify_password
    hashed = hash_password('admin123')
    assert verify_password('admin123', hashed)
    assert not verify_password('wrong', hashed)


def test_models_and_store_import():
    from smarttrack.models import StorageEntry, TaskStatus
    from smarttrack.store import LocalStore, RemoteStore
    assert StorageEntry.__tablename__ == 'storage_entries'
    assert TaskStatus.IN_PROGRESS.is_active
    assert LocalStore.backend == 'local' and RemoteStore.backend == 'remote'


def test_dependencies_import():
    from smarttrack.core.dependencies import get_current_user, get_store
    assert callable(get_current_user) and callable(get_store)


def test_init_db_creates_storage_table():
    from sqlalchemy import inspect
    from smarttrack.database import engine, init_db
    init_db()
    assert 'storage_entries' in inspect(engine).get_table_names()
