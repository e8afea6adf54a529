import os

os.environ["DATABASE"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("ALGORITHM", "HS256")

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker
import pytest

from cloudvault.database import Base, get_db
from cloudvault.dependencies import get_storage
from cloudvault.main import app
from cloudvault.models.user_model import User
from cloudvault.utils.auth import hash_password

DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(DATABASE_URL,
                       connect_args={
                           "check_same_thread": False,
                       },
                       poolclass=StaticPool)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)

PASSWORD = "Password1!"
PASSWORD_HASH = hash_password(PASSWORD)


class FakeObjectStore:
    """In-memory stand-in for the bucket, same interface as ObjectStore."""

    def __init__(self):
        self.objects = {}
        self.removed = []
        self.signed = []

    def upload(self, key, data, content_type="application/octet-stream"):
        self.objects[key] = (data, content_type)
        return key

    def remove(self, key):
        self.removed.append(key)
        self.objects.pop(key, None)

    def public_url(self, key):
        return f"http://storage.test/uploads/{key}"

    def signed_url(self, key, expires_in):
        self.signed.append((key, expires_in))
        return f"http://storage.test/uploads/{key}?X-Amz-Expires={expires_in}&X-Amz-Signature=sig"


def override_get_db():
    database = TestingSessionLocal()
    try:
        yield database
    finally:
        database.close()

app.dependency_overrides[get_db] = override_get_db


@pytest.fixture
def storage():
    fake = FakeObjectStore()
    app.dependency_overrides[get_storage] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_storage, None)


@pytest.fixture
def client(storage):
    return TestClient(app)


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(autouse=True)
def setup_and_teardown():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    session.add_all([
        User(email="user@example.com", password_hash=PASSWORD_HASH),
        User(email="other@example.com", password_hash=PASSWORD_HASH),
        User(email="disabled@example.com", password_hash=PASSWORD_HASH, is_active=False),
    ])
    session.commit()
    session.close()

    yield
    Base.metadata.drop_all(bind=engine)


def login(client, email):
    response = client.post("/api/auth/login", json={"email": email, "password": PASSWORD})
    assert response.status_code == 200, response.text
    return response.json()


@pytest.fixture
def auth_headers(client):
    return {"Authorization": f"Bearer {login(client, 'user@example.com')['token']}"}


@pytest.fixture
def other_headers(client):
    return {"Authorization": f"Bearer {login(client, 'other@example.com')['token']}"}


def upload(client, headers, name="report.pdf", content=b"%PDF-1.4 report", content_type="application/pdf",
           folder_id=None):
    data = {"folder_id": str(folder_id)} if folder_id is not None else None
    response = client.post("/api/upload", files={"file": (name, content, content_type)}, data=data,
                           headers=headers)
    assert response.status_code == 200, response.text
    return response.json()["savedFile"]


@pytest.fixture
def uploaded_file(client, auth_headers):
    return upload(client, auth_headers)
