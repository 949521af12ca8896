"""
Tests for the pending-home moderation workflow.
"""

from __future__ import annotations

import pytest
from fastapi import HTTPException

from app.database.supabase_client import get_service_supabase
from app.main import app
from app.modules.approvals.schemas import PendingHomeCreate
from app.modules.approvals.service import ApprovalService, numeric_text, status_message
from tests.conftest import ADMIN_ID, OWNER_ID, USER_ID
from tests.fakes import FakeSupabase


def pending_row(pending_id: int = 1, **overrides) -> dict:
    row = {
        "id": pending_id,
        "title": "Sunrise Duplex",
        "city": "Kanpur",
        "state": "Uttar Pradesh",
        "country": "India",
        "price": 6500000.0,
        "sqft": 1800.0,
        "bedrooms": 4,
        "bathrooms": 3,
        "description": "Duplex near the metro",
        "categories": ["Duplex", "Lift"],
        "images": ["properties/duplex.jpg"],
        "user_id": USER_ID,
        "status": "pending",
        "created_at": "2025-03-04T09:00:00+00:00",
    }
    row.update(overrides)
    return row


@pytest.fixture
def service(supabase) -> ApprovalService:
    supabase.tables["pending_homes"] = [pending_row()]
    return ApprovalService(supabase)


class TestHelpers:
    def test_numeric_text(self) -> None:
        assert numeric_text(4500000.0) == "4500000"
        assert numeric_text(99.5) == "99.5"
        assert numeric_text(None) is None

    def test_status_message(self) -> None:
        assert status_message({"status": "rejected", "rejection_reason": "Blurry photos"}) == "Rejected: Blurry photos"
        assert status_message({"status": "approved"}).startswith("Your property has been approved")
        assert status_message({"status": "archived"}) == "Status unknown"


class TestSubmit:
    def test_submission_starts_pending(self, supabase) -> None:
        created = ApprovalService(supabase).submit_pending_property(
            PendingHomeCreate(title="Garden Flat", price=3200000, city="Kanpur"), OWNER_ID
        )
        assert created.status == "pending"
        assert created.user_id == OWNER_ID
        assert supabase.tables["pending_homes"][0]["updated_at"] is not None

    def test_invalid_status_filter(self, service) -> None:
        with pytest.raises(HTTPException) as exc:
            service.get_all_pending_properties("archived")
        assert exc.value.status_code == 400


class TestApprove:
    def test_publishes_home_and_notifies_owner(self, service, supabase) -> None:
        home_id = service.approve_pending_property(1, ADMIN_ID)

        home = next(h for h in supabase.tables["homes"] if h["id"] == home_id)
        assert home["title"] == "Sunrise Duplex"
        assert home["price"] == "6500000"
        assert home["sqft"] == "1800"
        assert home["user_id"] == USER_ID

        pending = supabase.tables["pending_homes"][0]
        assert pending["status"] == "approved"
        assert pending["admin_id"] == ADMIN_ID
        assert pending["approved_at"] is not None

        notification = supabase.tables["notifications"][0]
        assert notification["user_id"] == USER_ID
        assert notification["data"] == {"pendingId": 1, "homeId": home_id}

    def test_only_pending_rows_can_be_approved(self, service, supabase) -> None:
        supabase.tables["pending_homes"][0]["status"] = "rejected"
        with pytest.raises(HTTPException) as exc:
            service.approve_pending_property(1, ADMIN_ID)
        assert exc.value.status_code == 409
        assert len(supabase.tables["homes"]) == 2

    def test_unknown_submission(self, service) -> None:
        with pytest.raises(HTTPException) as exc:
            service.approve_pending_property(42, ADMIN_ID)
        assert exc.value.status_code == 404

    def test_submitter_must_exist(self, service, supabase) -> None:
        supabase.tables["pending_homes"][0]["user_id"] = "deleted-user"
        with pytest.raises(HTTPException) as exc:
            service.approve_pending_property(1, ADMIN_ID)
        assert exc.value.status_code == 400

    def test_published_home_is_removed_when_status_update_fails(self, service, supabase) -> None:
        supabase.fail("pending_homes", "update")
        with pytest.raises(HTTPException) as exc:
            service.approve_pending_property(1, ADMIN_ID)
        assert exc.value.status_code == 500
        assert [h["id"] for h in supabase.tables["homes"]] == [1, 2]

    def test_notification_failure_does_not_undo_approval(self, service, supabase) -> None:
        supabase.fail("notifications", "insert")
        service.approve_pending_property(1, ADMIN_ID)
        assert supabase.tables["pending_homes"][0]["status"] == "approved"


class TestReject:
    def test_records_reason_and_notifies(self, service, supabase) -> None:
        service.reject_pending_property(1, ADMIN_ID, "Photos are missing", "incomplete")

        pending = supabase.tables["pending_homes"][0]
        assert pending["status"] == "rejected"
        assert pending["rejection_reason"] == "Photos are missing"
        assert pending["rejection_category"] == "incomplete"
        assert supabase.tables["notifications"][0]["title"] == "Property not approved"

    def test_status_includes_category_description(self, service, supabase) -> None:
        supabase.tables["rejection_categories"] = [
            {"id": 1, "name": "incomplete", "description": "Listing is missing details", "is_active": True},
        ]
        service.reject_pending_property(1, ADMIN_ID, "Photos are missing", "incomplete")

        [status] = service.get_user_property_status(USER_ID)
        assert status.status_message == "Rejected: Photos are missing"
        assert status.rejection_category_description == "Listing is missing details"
        assert status.images[0].startswith("https://fake.supabase.co/")


class TestRoutes:
    def test_submit_and_list_mine(self, client, user_headers) -> None:
        body = {"title": "Corner Shop", "price": 1500000, "city": "Kanpur"}
        assert client.post("/api/v1/pending-properties", json=body, headers=user_headers).status_code == 201

        mine = client.get("/api/v1/pending-properties/mine", headers=user_headers).json()
        assert [p["title"] for p in mine] == ["Corner Shop"]

    def test_approve_requires_admin(self, client, supabase, user_headers, admin_headers) -> None:
        supabase.tables["pending_homes"] = [pending_row()]
        assert client.post("/api/v1/pending-properties/1/approve", headers=user_headers).status_code == 403

        response = client.post("/api/v1/pending-properties/1/approve", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["home_id"] == 3

    def test_reject_needs_a_reason(self, client, supabase, admin_headers) -> None:
        supabase.tables["pending_homes"] = [pending_row()]
        response = client.post("/api/v1/pending-properties/1/reject", json={"reason": ""}, headers=admin_headers)
        assert response.status_code == 422

    def test_moderation_uses_the_service_client(self, client, supabase, admin_headers) -> None:
        service_client = FakeSupabase({"pending_homes": [pending_row()], "users": supabase.tables["users"]})
        app.dependency_overrides[get_service_supabase] = lambda: service_client

        listed = client.get("/api/v1/pending-properties", headers=admin_headers).json()
        assert [p["id"] for p in listed] == [1]

        response = client.post("/api/v1/pending-properties/1/reject", json={"reason": "Blurry photos"}, headers=admin_headers)
        assert response.status_code == 200
        assert service_client.tables["pending_homes"][0]["status"] == "rejected"
        assert supabase.tables.get("pending_homes", []) == []
