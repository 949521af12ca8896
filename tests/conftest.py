"""Shared pytest fixtures.

Fixture overview
----------------
supabase      : in-memory FakeSupabase seeded with one user, one admin and two homes
client        : TestClient for the app with both Supabase dependencies pointed at the fake
user_headers  : bearer header for the regular user (user-1)
owner_headers : bearer header for the owner of the seeded homes (owner-1)
admin_headers : bearer header for the admin (admin-1)
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.database.supabase_client import get_service_supabase, get_supabase
from app.main import app
from app.modules.auth.service import clear_auth_cache
from app.modules.news.service import clear_cache as clear_news_cache
from tests.fakes import FakeSupabase

USER_ID = "user-1"
OWNER_ID = "owner-1"
ADMIN_ID = "admin-1"


def home_row(home_id: int, **overrides) -> dict:
    row = {
        "id": home_id,
        "title": f"Home {home_id}",
        "country": "India",
        "state": "Uttar Pradesh",
        "city": "Kanpur",
        "price": "4500000",
        "sqft": "1,200 sqft",
        "bedrooms": 3,
        "bathrooms": 2,
        "description": "Corner plot close to the ring road",
        "categories": ["Villa", "Parking", "Garden"],
        "images": ["properties/1700000000000-abcd.jpg"],
        "user_id": OWNER_ID,
        "archived_at": None,
        "created_at": f"2025-03-0{home_id}T10:00:00+00:00",
    }
    row.update(overrides)
    return row


@pytest.fixture(autouse=True)
def _clear_module_caches():
    clear_auth_cache()
    clear_news_cache()
    yield
    clear_auth_cache()
    clear_news_cache()


@pytest.fixture
def supabase() -> FakeSupabase:
    fake = FakeSupabase({
        "users": [
            {"id": USER_ID, "email": "asha@example.com", "name": "Asha", "avatar_url": None,
             "is_active": True, "metadata": {}, "created_at": "2025-01-10T08:00:00+00:00"},
            {"id": OWNER_ID, "email": "ravi@example.com", "name": "Ravi", "avatar_url": None,
             "is_active": True, "metadata": {}, "created_at": "2025-01-10T08:00:00+00:00"},
        ],
        "admin_users": [
            {"id": ADMIN_ID, "email": "admin@example.com", "name": "Admin", "is_active": True},
        ],
        "homes": [home_row(1), home_row(2, title="Lake View Flat", categories=["Apartment"])],
    })
    fake.unique("user_favorites", "user_id", "property_id")
    fake.unique("forum_likes", "post_id", "user_id")
    fake.auth.add_user("user-token", USER_ID, "asha@example.com", "Asha")
    fake.auth.add_user("owner-token", OWNER_ID, "ravi@example.com", "Ravi")
    fake.auth.add_user("admin-token", ADMIN_ID, "admin@example.com", "Admin")
    return fake


@pytest.fixture
def client(supabase: FakeSupabase):
    app.dependency_overrides[get_supabase] = lambda: supabase
    app.dependency_overrides[get_service_supabase] = lambda: supabase
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user_headers() -> dict:
    return {"Authorization": "Bearer user-token"}


@pytest.fixture
def owner_headers() -> dict:
    return {"Authorization": "Bearer owner-token"}


@pytest.fixture
def admin_headers() -> dict:
    return {"Authorization": "Bearer admin-token"}
