import os

# Ensure JWT_SECRET exists before importing jobtrackr.main (it calls require_jwt_secret() at import time).
os.environ.setdefault("JWT_SECRET", "test_jwt_secret")
# The app engine is never used in tests (get_db is overridden); keep it off Postgres.
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

from contextlib import contextmanager

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobtrackr.core.base import Base
from jobtrackr.core import config as app_config
from jobtrackr.core.security import hash_password

# Import models so they register with SQLAlchemy metadata.
from jobtrackr.models.user import User  # noqa: F401
from jobtrackr.models.profile import Profile  # noqa: F401
from jobtrackr.models.job_application import JobApplication  # noqa: F401
from jobtrackr.models.story import Story  # noqa: F401
from jobtrackr.models.note import Note  # noqa: F401
from jobtrackr.models.prep_folder import PrepFolder  # noqa: F401
from jobtrackr.models.prep_item import PrepItem  # noqa: F401
from jobtrackr.models.prep_item_tag import PrepItemTag  # noqa: F401

from jobtrackr.core.database import get_db
from jobtrackr.dependencies.auth import get_current_user


@pytest.fixture(scope="session")
def db_engine():
    # In-memory SQLite for fast, isolated tests.
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return engine


@pytest.fixture()
def db_session(db_engine):
    # Important: because we use an in-memory SQLite DB with StaticPool, the DB
    # persists across tests. Reset schema per test to avoid cross-test coupling.
    Base.metadata.drop_all(bind=db_engine)
    Base.metadata.create_all(bind=db_engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def app(db_session):
    app_config.settings.JWT_SECRET = app_config.settings.JWT_SECRET or "test_jwt_secret"

    from jobtrackr.main import app as fastapi_app

    def override_get_db():
        yield db_session
    fastapi_app.dependency_overrides[get_db] = override_get_db
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture()
def users(db_session):
    """
    Two distinct active users for ownership / isolation tests.
    """
    user_a = User(
        email="test@example.com",
        password_hash=hash_password("test_password_123"),
        user_metadata={"full_name": "Test User"},
        is_active=True,
    )
    user_b = User(
        email="other@example.com",
        password_hash=hash_password("test_password_123"),
        user_metadata={"full_name": "Other User"},
        is_active=True,
    )
    db_session.add_all([user_a, user_b])
    db_session.commit()
    db_session.refresh(user_a)
    db_session.refresh(user_b)
    return user_a, user_b


@pytest.fixture()
def client(app, users):
    """
    Default client authenticated as user_a.
    """
    user_a, _ = users
    app.dependency_overrides[get_current_user] = lambda: user_a
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.pop(get_current_user, None)


@pytest.fixture()
def client_for(app):
    """
    Context manager to create a client authenticated as an arbitrary user.

    Usage:
        with client_for(user) as c:
            ...
    """

    @contextmanager
    def _client_for(user: User):
        app.dependency_overrides[get_current_user] = lambda: user
        with TestClient(app) as c:
            yield c
        app.dependency_overrides.pop(get_current_user, None)

    return _client_for


@pytest.fixture()
def anon_client(app):
    """Client with no auth override; requests go through the real bearer check."""
    with TestClient(app) as c:
        yield c
