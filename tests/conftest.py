"""
SmartTrack - Test Configuration and Fixtures
"""
import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set testing environment before the app reads its settings
os.environ['DATABASE_URL'] = 'sqlite://'
os.environ['SECRET_KEY'] = 'test-secret-key-for-testing-only'
os.environ['STORE_BACKEND'] = 'local'
os.environ['STORAGE_NAMESPACE'] = 'iqac'

from smarttrack.main import app
from smarttrack.database import Base, get_db
from smarttrack import models  # noqa: F401 - registers the storage table
from smarttrack.store import KeyValueStorage, LocalStore, SessionStore

ADMIN_LOGIN = {"email": "iqac@university.edu", "role": "qa-office", "password": "admin123"}
STAFF_LOGIN = {"email": "staff@university.edu", "role": "staff", "password": "staff123"}


@pytest.fixture
def engine():
    """Fresh in-memory database per test"""
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def storage(db_session) -> KeyValueStorage:
    return KeyValueStorage(db_session, namespace='iqac')


@pytest.fixture
def store(storage) -> LocalStore:
    """Local store over empty storage - first access seeds the defaults"""
    return LocalStore(storage)


@pytest.fixture
def sessions(storage) -> SessionStore:
    return SessionStore(storage)


@pytest.fixture
def client(session_factory):
    """Test client with the database dependency pointed at the test engine"""
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def login(client, credentials=None) -> dict:
    response = client.post('/api/auth/login', json=credentials or ADMIN_LOGIN)
    assert response.status_code == 200, response.text
    return {'Authorization': f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def auth_headers(client) -> dict:
    """Headers for a signed-in QA office user"""
    return login(client)


@pytest.fixture
def staff_headers(client) -> dict:
    """Headers for a signed-in staff member (replaces any other session)"""
    return login(client, STAFF_LOGIN)
