"""
Tests for notification storage, push delivery and the typed senders.
"""

from __future__ import annotations

from datetime import datetime

import httpx
import pytest
from fastapi import HTTPException

from app.modules.notifications.push import (
    PushNotifier,
    format_open_house_date,
    truncate_message,
)
from app.modules.notifications.schemas import NotificationCreate
from app.modules.notifications.service import NotificationService
from tests.conftest import OWNER_ID, USER_ID


class RecordingPost:
    """Stands in for httpx.post and remembers the payloads"""

    def __init__(self, status_code: int = 200):
        self.status_code = status_code
        self.payloads = []

    def __call__(self, url, json=None, timeout=None):
        self.payloads.append(json)
        return httpx.Response(self.status_code, request=httpx.Request("POST", url))


@pytest.fixture
def expo(monkeypatch) -> RecordingPost:
    recorder = RecordingPost()
    monkeypatch.setattr("app.modules.notifications.push.httpx.post", recorder)
    return recorder


@pytest.fixture
def with_token(supabase):
    supabase.tables["users"][0]["metadata"] = {
        "pushToken": "ExponentPushToken[abc]",
        "notificationPreferences": {"priceDrops": False},
    }
    return supabase


class TestNotificationService:
    def test_own_and_broadcast_newest_first(self, supabase) -> None:
        supabase.tables["notifications"] = [
            {"id": 1, "user_id": USER_ID, "title": "Mine", "message": "m", "created_at": "2025-03-01T00:00:00+00:00"},
            {"id": 2, "user_id": None, "title": "Everyone", "message": "b", "created_at": "2025-03-02T00:00:00+00:00"},
            {"id": 3, "user_id": OWNER_ID, "title": "Other", "message": "o", "created_at": "2025-03-03T00:00:00+00:00"},
        ]
        titles = [n.title for n in NotificationService(supabase).get_user_notifications(USER_ID)]
        assert titles == ["Everyone", "Mine"]

    def test_hidden_broadcasts_are_filtered(self, supabase) -> None:
        supabase.tables["notifications"] = [
            {"id": 2, "user_id": None, "title": "Everyone", "message": "b", "created_at": "2025-03-02T00:00:00+00:00"},
        ]
        supabase.tables["deleted_notifications"] = [{"notification_id": 2, "user_id": USER_ID}]
        assert NotificationService(supabase).get_user_notifications(USER_ID) == []

    def test_unfiltered_when_hide_table_fails(self, supabase) -> None:
        supabase.tables["notifications"] = [
            {"id": 2, "user_id": None, "title": "Everyone", "message": "b", "created_at": "2025-03-02T00:00:00+00:00"},
        ]
        supabase.fail("deleted_notifications")
        assert len(NotificationService(supabase).get_user_notifications(USER_ID)) == 1

    def test_empty_when_notifications_fail(self, supabase) -> None:
        supabase.fail("notifications")
        assert NotificationService(supabase).get_user_notifications(USER_ID) == []

    def test_delete_own_removes_row(self, supabase) -> None:
        service = NotificationService(supabase)
        created = service.create_notification(NotificationCreate(user_id=USER_ID, title="t", message="m"))
        service.delete_notification(created.id, USER_ID)
        assert supabase.tables["notifications"] == []

    def test_delete_broadcast_hides_it_once(self, supabase) -> None:
        service = NotificationService(supabase)
        created = service.create_notification(NotificationCreate(title="Sale", message="m"))
        service.delete_notification(created.id, USER_ID)
        service.delete_notification(created.id, USER_ID)
        assert len(supabase.tables["notifications"]) == 1
        assert len(supabase.tables["deleted_notifications"]) == 1

    def test_delete_someone_elses(self, supabase) -> None:
        service = NotificationService(supabase)
        created = service.create_notification(NotificationCreate(user_id=OWNER_ID, title="t", message="m"))
        with pytest.raises(HTTPException) as exc:
            service.delete_notification(created.id, USER_ID)
        assert exc.value.status_code == 403

    def test_delete_missing(self, supabase) -> None:
        with pytest.raises(HTTPException) as exc:
            NotificationService(supabase).delete_notification("77", USER_ID)
        assert exc.value.status_code == 404


class TestPushHelpers:
    def test_truncate_message(self) -> None:
        assert truncate_message("short") == "short"
        assert truncate_message("x" * 60) == "x" * 50 + "..."

    def test_format_open_house_date(self) -> None:
        assert format_open_house_date(datetime(2025, 3, 15, 14, 30)) == "Saturday, Mar 15, 2:30 PM"
        assert format_open_house_date(datetime(2025, 3, 16, 0, 5)) == "Sunday, Mar 16, 12:05 AM"


class TestPushNotifier:
    def test_no_token_skips_push(self, supabase, expo) -> None:
        assert PushNotifier(supabase).send_push(USER_ID, "t", "b") is False
        assert expo.payloads == []

    def test_push_payload(self, with_token, expo) -> None:
        sent = PushNotifier(with_token).send_push(USER_ID, "Title", "Body", {"a": 1}, "openHouse")
        assert sent is True
        assert expo.payloads == [{
            "to": "ExponentPushToken[abc]",
            "title": "Title",
            "body": "Body",
            "data": {"a": 1},
            "sound": "default",
            "channelId": "open-houses",
        }]

    def test_disabled_preference_skips_push_but_stores(self, with_token, expo) -> None:
        PushNotifier(with_token).send_price_drop_notification(USER_ID, "1", 5000000, 4500000)
        assert expo.payloads == []
        stored = with_token.tables["notifications"][0]
        assert stored["title"] == "Price Drop Alert! 💰"
        assert stored["message"] == "A property you're watching dropped by ₹5,00,000 (10.0%)"

    def test_http_failure_is_swallowed(self, with_token, monkeypatch) -> None:
        monkeypatch.setattr("app.modules.notifications.push.httpx.post", RecordingPost(status_code=500))
        assert PushNotifier(with_token).send_push(USER_ID, "t", "b") is False

    def test_agent_message_is_truncated(self, with_token, expo) -> None:
        PushNotifier(with_token).send_agent_message_notification(USER_ID, "Meera", "m" * 80)
        assert expo.payloads[0]["title"] == "Message from Meera 💬"
        assert expo.payloads[0]["body"] == "m" * 50 + "..."
        assert expo.payloads[0]["data"]["type"] == "agentMessage"
        assert with_token.tables["notifications"][0]["data"]["message"] == "m" * 80

    def test_new_property_body(self, with_token, expo) -> None:
        PushNotifier(with_token).send_new_property_notification(USER_ID, "7", "Lake View Flat", "4500000")
        assert expo.payloads[0]["body"] == "Lake View Flat - ₹45,00,000"
        assert expo.payloads[0]["channelId"] == "new-properties"


class TestNotificationRoutes:
    def test_list_and_mark_read(self, client, supabase, user_headers) -> None:
        supabase.tables["notifications"] = [
            {"id": 1, "user_id": USER_ID, "title": "Mine", "message": "m", "is_read": False,
             "created_at": "2025-03-01T00:00:00+00:00"},
        ]
        assert client.put("/api/v1/notifications/1/read", headers=user_headers).status_code == 200
        [notification] = client.get("/api/v1/notifications", headers=user_headers).json()
        assert notification["is_read"] is True

    def test_cannot_mark_someone_elses_notification(self, client, supabase, user_headers) -> None:
        supabase.tables["notifications"] = [
            {"id": 77, "user_id": OWNER_ID, "title": "Theirs", "message": "m", "is_read": False,
             "created_at": "2025-03-01T00:00:00+00:00"},
        ]
        assert client.put("/api/v1/notifications/77/read", headers=user_headers).status_code == 403
        assert supabase.tables["notifications"][0]["is_read"] is False
        assert client.put("/api/v1/notifications/78/read", headers=user_headers).status_code == 404

    def test_broadcast_requires_admin(self, client, user_headers, admin_headers) -> None:
        body = {"title": "Maintenance", "message": "Back soon"}
        assert client.post("/api/v1/notifications", json=body, headers=user_headers).status_code == 403
        response = client.post("/api/v1/notifications", json=body, headers=admin_headers)
        assert response.status_code == 201
        assert response.json()["user_id"] is None

    def test_save_push_token(self, client, supabase, user_headers) -> None:
        response = client.put(
            "/api/v1/users/me/push-token",
            json={"push_token": "ExponentPushToken[xyz]"},
            headers=user_headers,
        )
        assert response.status_code == 200
        assert response.json()["notificationPreferences"]["savedSearches"] is True
        assert supabase.tables["users"][0]["metadata"]["pushToken"] == "ExponentPushToken[xyz]"
