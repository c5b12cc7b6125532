"""Shared fixtures: a throwaway database and upload directory per test."""

import base64
import os
import tempfile

import pytest

# Settings are read from the environment when the package is imported.
# Point the import-time defaults at a scratch directory so that merely
# importing the app never touches the working tree.
_SCRATCH = tempfile.mkdtemp(prefix="noita-tests-")
os.environ.setdefault("DATABASE_URL", os.path.join(_SCRATCH, "noita.db"))
os.environ.setdefault("UPLOAD_DIR", os.path.join(_SCRATCH, "images"))
os.environ.setdefault("SECRET_KEY", "test-secret")

from fastapi.testclient import TestClient  # noqa: E402

from noita_api.app.core.config import settings  # noqa: E402
from noita_api.app.core.db import get_connection, init_db  # noqa: E402
from noita_api.app.core.security import create_access_token  # noqa: E402
from noita_api.app.main import create_app  # noqa: E402
from noita_api.app.schemas.carousel import CarouselCreate  # noqa: E402
from noita_api.app.services import carousel_service  # noqa: E402
from noita_api.app.services.image_store import get_image_store  # noqa: E402

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16
PNG_DATA = "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode("ascii")


@pytest.fixture
def app_settings(tmp_path, monkeypatch):
    """Settings pointing at a fresh database and upload directory."""
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "noita.db"))
    monkeypatch.setattr(settings, "upload_dir", str(tmp_path / "images"))
    monkeypatch.setattr(settings, "admin_static_token", "")
    init_db()
    return settings


@pytest.fixture
def conn(app_settings):
    connection = get_connection()
    yield connection
    connection.close()


@pytest.fixture
def image_store(app_settings):
    return get_image_store()


@pytest.fixture
def client(app_settings):
    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(app_settings):
    token = create_access_token({"sub": "admin@noita.ch"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def seed_pictures(conn, image_store):
    """Return a helper adding ``count`` pictures through the service."""

    def _seed(count):
        pictures = []
        for _ in range(count):
            result = carousel_service.add_picture(conn, CarouselCreate(picture64=PNG_DATA), image_store)
            assert result.success, result.error
            pictures.append(result.data)
        return pictures

    return _seed


def positions(conn):
    """Positions currently stored, in ascending order."""
    rows = conn.execute("SELECT position FROM carousel_picture ORDER BY position").fetchall()
    return [row["position"] for row in rows]


def insert_picture(conn, position, url=None):
    """Insert a carousel row directly, bypassing the service guards."""
    cursor = conn.execute(
        "INSERT INTO carousel_picture (url, position) VALUES (?, ?)",
        (url or f"/images/seeded-{position}.png", position),
    )
    return cursor.lastrowid
