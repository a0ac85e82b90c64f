import os
import tempfile
from pathlib import Path

import pytest

# Settings are read at import time, so the environment must be in place first.
TEST_DB_PATH = Path(tempfile.gettempdir()) / f"storefront_test_{os.getpid()}.db"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "Sup3rSecret"
os.environ["ADMIN_EMAILS"] = "owner@gmail.com"
os.environ["GOOGLE_CLIENT_ID"] = "test-client-id.apps.googleusercontent.com"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ENVIRONMENT"] = "test"
os.environ["WHATSAPP_NUMBER"] = "+91 94363 57001"
os.environ["CLOUDINARY_CLOUD_NAME"] = "demo"
os.environ["CLOUDINARY_API_KEY"] = "key"
os.environ["CLOUDINARY_API_SECRET"] = "secret"
for var in ("EMAIL_USER", "EMAIL_APP_PASSWORD", "MYSQL_SERVER"):
    os.environ.pop(var, None)

import cloudinary.uploader  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from storefront.main import app  # noqa: E402

ADMIN_CREDENTIALS = {"username": "admin", "password": "Sup3rSecret"}


class FakeCloudinary:
    """Records uploads and deletes instead of calling Cloudinary."""

    def __init__(self):
        self.uploads = []
        self.destroyed = []

    def upload(self, content, folder=None, **kwargs):
        name = content.decode() if isinstance(content, bytes) else str(len(self.uploads))
        public_id = f"{folder}/{name}"
        self.uploads.append(public_id)
        return {
            "secure_url": f"https://res.cloudinary.com/demo/image/upload/v1700000000/{public_id}.jpg",
            "public_id": public_id,
        }

    def destroy(self, public_id, **kwargs):
        self.destroyed.append(public_id)
        return {"result": "ok"}


@pytest.fixture
def fake_cloudinary(monkeypatch):
    fake = FakeCloudinary()
    monkeypatch.setattr(cloudinary.uploader, "upload", fake.upload)
    monkeypatch.setattr(cloudinary.uploader, "destroy", fake.destroy)
    return fake


@pytest.fixture
def client(fake_cloudinary):
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()
    with TestClient(app) as test_client:
        yield test_client
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()


@pytest.fixture
def admin_token(client) -> str:
    response = client.post("/api/admin/login", json=ADMIN_CREDENTIALS)
    assert response.status_code == 200, response.text
    return response.json()["token"]


@pytest.fixture
def auth_headers(admin_token) -> dict:
    return {"Authorization": f"Bearer {admin_token}"}


def image_file(name: str, content_type: str = "image/jpeg"):
    # The fake uploader names the stored image after the file's bytes
    return ("photos", (f"{name}.jpg", name.encode(), content_type))


@pytest.fixture
def create_artwork(client, auth_headers):
    def _create(title="Sunset", category="Paintings", photos=("front",), labels=None, **fields):
        data = {"title": title, "category": category, "price": "₹1,200", **fields}
        if labels is not None:
            data["labels"] = list(labels)
        files = [image_file(p) for p in photos]
        response = client.post("/api/artworks/", data=data, files=files, headers=auth_headers)
        assert response.status_code == 201, response.text
        return response.json()
    return _create


@pytest.fixture
def create_artist(client, auth_headers):
    def _create(name="Meera Das", **fields):
        response = client.post("/api/artists/", data={"name": name, **fields}, headers=auth_headers)
        assert response.status_code == 201, response.text
        return response.json()
    return _create


@pytest.fixture
def rate_limited(client, monkeypatch):
    """Turns the per-IP limiter on with fresh counters for one test."""
    from storefront.core.rate_limit import limiter

    limiter.reset()
    monkeypatch.setattr(limiter, "enabled", True)
    yield limiter
    limiter.reset()
