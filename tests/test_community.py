"""
Route tests for forums, announcements, contact form and mortgage leads.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from tests.conftest import USER_ID


class TestForums:
    def test_post_comment_and_like(self, client, supabase, user_headers) -> None:
        body = {"title": "Stamp duty in UP?", "content": "What rate applies for women buyers?", "category": "buying"}
        created = client.post("/api/v1/forums/posts", json=body, headers=user_headers)
        assert created.status_code == 201
        post_id = created.json()["id"]

        comment = client.post(
            f"/api/v1/forums/posts/{post_id}/comments", json={"comment": "One percent lower"}, headers=user_headers
        )
        assert comment.status_code == 201

        assert client.post(f"/api/v1/forums/posts/{post_id}/like", headers=user_headers).json() == {"liked": True}
        assert client.get(f"/api/v1/forums/posts/{post_id}/like", headers=user_headers).json() == {"liked": True}
        assert client.post(f"/api/v1/forums/posts/{post_id}/like", headers=user_headers).json() == {"liked": False}

        detail = client.get(f"/api/v1/forums/posts/{post_id}").json()
        assert detail["views"] == 1
        assert [c["comment"] for c in detail["comments"]] == ["One percent lower"]
        assert supabase.tables["forum_posts"][0]["views"] == 1

    def test_unknown_category_is_rejected(self, client, user_headers) -> None:
        body = {"title": "t", "content": "c", "category": "gossip"}
        assert client.post("/api/v1/forums/posts", json=body, headers=user_headers).status_code == 422

    def test_pinned_first_and_category_filter(self, client, supabase) -> None:
        supabase.tables["forum_posts"] = [
            {"id": 1, "user_id": USER_ID, "title": "Old pinned", "content": "c", "category": "general",
             "is_pinned": True, "created_at": "2025-01-01T00:00:00+00:00"},
            {"id": 2, "user_id": USER_ID, "title": "New", "content": "c", "category": "selling",
             "is_pinned": False, "created_at": "2025-03-01T00:00:00+00:00"},
        ]
        posts = client.get("/api/v1/forums/posts").json()
        assert [p["title"] for p in posts] == ["Old pinned", "New"]
        assert [p["title"] for p in client.get("/api/v1/forums/posts?category=selling").json()] == ["New"]

    def test_missing_post(self, client) -> None:
        assert client.get("/api/v1/forums/posts/99").status_code == 404


class TestAnnouncements:
    def test_create_broadcasts_and_lists_active(self, client, supabase, admin_headers) -> None:
        body = {"title": "Diwali offers", "message": "Zero brokerage this week", "priority": 2}
        created = client.post("/api/v1/announcements", json=body, headers=admin_headers)
        assert created.status_code == 201

        [notification] = supabase.tables["notifications"]
        assert notification["user_id"] is None
        assert notification["type"] == "announcement"

        assert [a["title"] for a in client.get("/api/v1/announcements").json()] == ["Diwali offers"]

    def test_expired_and_inactive_are_hidden(self, client, supabase) -> None:
        past = (datetime.now(timezone.utc) - timedelta(days=1)).isoformat()
        future = (datetime.now(timezone.utc) + timedelta(days=1)).isoformat()
        supabase.tables["announcements"] = [
            {"id": 1, "title": "Expired", "message": "m", "is_active": True, "priority": 0, "expires_at": past},
            {"id": 2, "title": "Hidden", "message": "m", "is_active": False, "priority": 0, "expires_at": None},
            {"id": 3, "title": "Live", "message": "m", "is_active": True, "priority": 0, "expires_at": future},
        ]
        assert [a["title"] for a in client.get("/api/v1/announcements").json()] == ["Live"]

    def test_creation_requires_admin(self, client, user_headers) -> None:
        body = {"title": "t", "message": "m"}
        assert client.post("/api/v1/announcements", json=body, headers=user_headers).status_code == 403


class TestContactForm:
    def test_public_submission(self, client, supabase) -> None:
        body = {
            "first_name": "Neha",
            "email": "neha@example.com",
            "message": "Looking for a 2BHK near IIT",
            "services": ["buying"],
        }
        response = client.post("/api/v1/contacts", json=body)
        assert response.status_code == 201
        assert supabase.tables["contacts"][0]["services"] == ["buying"]

    def test_invalid_email(self, client) -> None:
        body = {"first_name": "Neha", "email": "not-an-email", "message": "Hi"}
        assert client.post("/api/v1/contacts", json=body).status_code == 422


class TestMortgageRoutes:
    def test_calculate(self, client) -> None:
        response = client.post("/api/v1/mortgage/calculate", json={"home_price": 5000000})
        assert response.status_code == 200
        assert response.json()["loan_amount"] == 4000000

    def test_invalid_loan(self, client) -> None:
        response = client.post("/api/v1/mortgage/calculate", json={"home_price": 5000000, "interest_rate": 0})
        assert response.status_code == 400

    @pytest.mark.parametrize("body", [
        {"home_price": 5000000, "loan_term_years": 20000},
        {"home_price": 5000000, "interest_rate": 1000000},
    ])
    def test_out_of_range_terms_are_rejected(self, client, body: dict) -> None:
        response = client.post("/api/v1/mortgage/calculate", json=body)
        assert response.status_code == 400

    def test_affordability_rejects_long_terms(self, client) -> None:
        response = client.post(
            "/api/v1/mortgage/affordability",
            json={"annual_income": 1200000, "home_price": 5000000, "loan_term_years": 20000},
        )
        assert response.status_code == 400

    def test_anonymous_and_signed_in_leads(self, client, supabase, user_headers) -> None:
        body = {"name": "Vikram", "email": "vikram@example.com", "property_price": 4500000}
        assert client.post("/api/v1/mortgage/leads", json=body).status_code == 201
        assert client.post("/api/v1/mortgage/leads", json=body, headers=user_headers).status_code == 201
        assert [lead["user_id"] for lead in supabase.tables["mortgage_leads"]] == [None, USER_ID]
