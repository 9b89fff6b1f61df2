import os
import tempfile

# Must be set before the application modules read their configuration.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "kandang-test-logs"))

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db
from main import app
from models import Kandang, User
from utils.auth_utils import JWT_ALGORITHM, JWT_SECRET_KEY
from utils.space_storage import get_storage


class FakeStorage:
    """In-memory stand-in for the Spaces client."""

    def __init__(self, fail_on_upload=None):
        self.files = {}
        self.returned_urls = []
        self.deleted = []
        self.upload_calls = 0
        self.fail_on_upload = fail_on_upload

    def upload_file_to_space(self, file_content, filename, category):
        self.upload_calls += 1
        if self.fail_on_upload is not None and self.upload_calls == self.fail_on_upload:
            raise RuntimeError("Space upload failed: simulated outage")
        key = f"{category}/{filename}"
        self.files[key] = file_content
        url = f"https://kandang-assets.test/{key}"
        self.returned_urls.append(url)
        return url

    def delete_file_from_space(self, file_key, category):
        key = f"{category}/{file_key}"
        self.files.pop(key, None)
        self.deleted.append(key)


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def storage():
    return FakeStorage()


@pytest.fixture()
def client(session_factory, storage):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def user(db):
    db_user = User(nama="Budi", role="peternak", email="budi@example.com")
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


def _make_kandang(db, owner, **overrides):
    values = {
        "nama": "Kandang A",
        "lokasi": "Blitar",
        "longitude": 112.16,
        "latitude": -8.09,
        "jumlah_ayam": 500,
    }
    values.update(overrides)
    db_kandang = Kandang(id_pemilik=owner.id, **values)
    db.add(db_kandang)
    db.commit()
    db.refresh(db_kandang)
    return db_kandang


@pytest.fixture()
def kandang(db, user):
    return _make_kandang(db, user)


def _auth_headers(user_or_claims):
    claims = user_or_claims if isinstance(user_or_claims, dict) else {"id": str(user_or_claims.id)}
    token = jwt.encode(claims, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def headers(user):
    return _auth_headers(user)


@pytest.fixture()
def make_kandang(db):
    return lambda owner, **overrides: _make_kandang(db, owner, **overrides)


@pytest.fixture()
def auth_headers():
    return _auth_headers
