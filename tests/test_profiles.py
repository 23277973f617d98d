from supabase import PostgrestAPIError

from app.modules.profiles.schemas import AuthIdentity
from app.modules.profiles.service import ProfileService, fallback_full_name
from tests.fakes import FakeSupabase


def identity(user_id="u-1", email="ada@example.com", full_name=None):
    metadata = {"full_name": full_name} if full_name else {}
    return AuthIdentity(id=user_id, email=email, user_metadata=metadata)


def test_fallback_full_name_prefers_display_name():
    assert fallback_full_name(identity(full_name="Ada Lovelace")) == "Ada Lovelace"
    assert fallback_full_name(identity()) == "ada"
    assert fallback_full_name(identity(full_name="   ")) == "ada"


def test_from_provider_user_accepts_objects_and_dicts():
    from types import SimpleNamespace

    user = SimpleNamespace(id="u-9", email="x@y.z", user_metadata=None, app_metadata={"role": "admin"}, created_at=None)
    assert AuthIdentity.from_provider_user(user).app_metadata == {"role": "admin"}
    assert AuthIdentity.from_provider_user({"id": "u-9", "email": "x@y.z"}).user_metadata == {}


def test_ensure_profile_creates_missing_profile():
    fake = FakeSupabase()
    profile = ProfileService(fake).ensure_profile(identity(full_name="Ada Lovelace"))

    assert profile is not None
    assert profile.full_name == "Ada Lovelace"
    assert profile.role == "student"
    assert profile.grade_level is None and profile.school is None
    assert len(fake.rows("profiles")) == 1
    assert fake.rows("profiles")[0]["email"] == "ada@example.com"


def test_ensure_profile_is_idempotent():
    fake = FakeSupabase()
    service = ProfileService(fake)

    first = service.ensure_profile(identity())
    second = service.ensure_profile(identity(full_name="Someone Else"))

    assert len(fake.rows("profiles")) == 1
    assert fake.count_calls("profiles", "upsert") == 1
    assert second.id == first.id
    assert second.full_name == "ada"


def test_ensure_profile_returns_existing_row_unchanged():
    fake = FakeSupabase()
    fake.tables["profiles"] = [{"id": "u-1", "full_name": "Teacher Set", "email": "ada@example.com", "role": "admin"}]

    profile = ProfileService(fake).ensure_profile(identity(full_name="Ada Lovelace"))

    assert profile.full_name == "Teacher Set"
    assert profile.role == "admin"
    assert fake.count_calls("profiles", "upsert") == 0


def test_ensure_profile_survives_concurrent_first_login(monkeypatch):
    fake = FakeSupabase()
    fake.tables["profiles"] = [{"id": "u-1", "full_name": "Winner", "email": "ada@example.com", "role": "student"}]
    service = ProfileService(fake)
    real_get_profile = service.get_profile
    lookups = []

    def racing_get_profile(user_id):
        lookups.append(user_id)
        # First lookup misses as if the other request had not committed yet
        if len(lookups) == 1:
            return None
        return real_get_profile(user_id)

    monkeypatch.setattr(service, "get_profile", racing_get_profile)

    profile = service.ensure_profile(identity())

    assert profile.full_name == "Winner"
    assert len(fake.rows("profiles")) == 1
    assert fake.count_calls("profiles", "upsert") == 1


def test_ensure_profile_swallows_lookup_failure():
    fake = FakeSupabase()
    fake.failures[("profiles", "select")] = PostgrestAPIError({"message": "connection reset", "code": "08006"})

    assert ProfileService(fake).ensure_profile(identity()) is None
    assert fake.count_calls("profiles", "upsert") == 0


def test_ensure_profile_swallows_insert_failure():
    fake = FakeSupabase()
    fake.failures[("profiles", "upsert")] = PostgrestAPIError({"message": "permission denied", "code": "42501"})

    assert ProfileService(fake).ensure_profile(identity()) is None
    assert fake.rows("profiles") == []


def test_list_profiles_newest_first():
    fake = FakeSupabase()
    fake.tables["profiles"] = [
        {"id": "a", "full_name": "Old", "created_at": "2024-01-01T00:00:00+00:00"},
        {"id": "b", "full_name": "New", "created_at": "2024-06-01T00:00:00+00:00"},
    ]
    names = [p.full_name for p in ProfileService(fake).list_profiles()]
    assert names == ["New", "Old"]
