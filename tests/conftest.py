from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.config import settings
from app.database.supabase_client import get_clients
from app.main import app
from tests.fakes import FakeClients, FakeSupabase


@pytest.fixture()
def fake_supabase():
    return FakeSupabase()


@pytest.fixture()
def upload_dir(tmp_path, monkeypatch):
    path = tmp_path / "uploads"
    monkeypatch.setattr(settings, "upload_dir", str(path))
    return path


@pytest.fixture()
def make_client(upload_dir):
    """Build a TestClient whose provider calls land on the given clients object."""
    app.state.limiter.enabled = False

    def _make(clients):
        app.dependency_overrides[get_clients] = lambda: clients
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture()
def client(make_client, fake_supabase):
    return make_client(FakeClients(fake_supabase))


def seed_user(fake, email, password="secret123", full_name=None, role=None, app_metadata=None):
    """Create an auth user (and a profile when role is given); returns (user, token)."""
    metadata = {"full_name": full_name} if full_name else {}
    user = fake.auth.create(email, password, metadata, app_metadata)
    if role is not None:
        fake.tables.setdefault("profiles", []).append({
            "id": user.id,
            "email": email,
            "full_name": full_name,
            "grade_level": None,
            "school": None,
            "role": role,
            "created_at": "2024-01-01T00:00:00+00:00",
        })
    return user, fake.auth.token_for(user)


def bearer(token):
    return {"Authorization": f"Bearer {token}"}
