"""
Typed notification senders.

Each sender stores the notification (so it shows up in the in-app center) and then
pushes it to the user's device through the Expo push API. Delivery is best-effort:
a missing push token, a disabled preference or an HTTP failure is logged and skipped.
"""

from supabase import Client
from app.config import settings
from app.modules.notifications.schemas import NotificationCreate
from app.modules.notifications.service import NotificationService
from app.modules.users.service import UserService
from app.core.formatters import format_price_inr
from datetime import datetime
from typing import Optional, Dict, Any, List
import httpx
import logging

logger = logging.getLogger(__name__)

# notification type -> key in users.metadata.notificationPreferences
PREFERENCE_KEYS = {
    "newProperty": "newProperties",
    "priceDrop": "priceDrops",
    "openHouse": "openHouses",
    "marketUpdate": "marketUpdates",
    "agentMessage": "agentMessages",
    "savedSearch": "savedSearches",
}

# Android channel ids registered by the mobile client
CHANNELS = {
    "newProperty": "new-properties",
    "savedSearch": "new-properties",
    "priceDrop": "price-drops",
    "openHouse": "open-houses",
}

AGENT_MESSAGE_PREVIEW = 50


def truncate_message(message: str, length: int = AGENT_MESSAGE_PREVIEW) -> str:
    return message[:length] + "..." if len(message) > length else message


def format_open_house_date(date: datetime) -> str:
    """e.g. 'Saturday, Mar 15, 2:30 PM'"""
    hour = date.hour % 12 or 12
    return f"{date:%A}, {date:%b} {date.day}, {hour}:{date:%M} {date:%p}"


class PushNotifier:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.notifications = NotificationService(supabase)
        self.users = UserService(supabase)

    def send_push(
        self,
        user_id: str,
        title: str,
        body: str,
        data: Optional[Dict[str, Any]] = None,
        notification_type: Optional[str] = None
    ) -> bool:
        """Push to the user's registered device. Never raises; returns whether a push was sent."""
        try:
            metadata = self.users.get_metadata(user_id)
            token = metadata.get("pushToken")
            if not token:
                logger.debug(f"No push token for user {user_id}, skipping push")
                return False

            preferences = metadata.get("notificationPreferences") or {}
            preference_key = PREFERENCE_KEYS.get(notification_type or "")
            if preference_key and preferences.get(preference_key) is False:
                logger.info(f"User {user_id} disabled {preference_key} notifications")
                return False

            payload = {
                "to": token,
                "title": title,
                "body": body,
                "data": data or {},
                "sound": "default",
                "channelId": CHANNELS.get(notification_type or "", "default"),
            }
            response = httpx.post(settings.expo_push_url, json=payload, timeout=settings.http_timeout_seconds)
            response.raise_for_status()
            return True
        except Exception as e:
            logger.warning(f"Push delivery to {user_id} failed: {e}")
            return False

    def _deliver(
        self,
        user_id: str,
        title: str,
        body: str,
        notification_type: str,
        data: Dict[str, Any]
    ) -> None:
        self.send_push(user_id, title, body, {"type": notification_type, **data}, notification_type)
        try:
            self.notifications.create_notification(NotificationCreate(
                user_id=user_id,
                title=title,
                message=body,
                type=notification_type,
                data=data
            ))
        except Exception as e:
            logger.error(f"Error saving {notification_type} notification for {user_id}: {e}")

    def send_saved_search_notification(
        self,
        user_id: str,
        search_id: Optional[str],
        body: str,
        properties: List[Dict[str, Any]]
    ) -> None:
        self._deliver(
            user_id,
            "New Properties Found! 🏠",
            body,
            "savedSearch",
            {"searchId": search_id, "propertyCount": len(properties), "properties": properties}
        )

    def send_price_drop_notification(self, user_id: str, property_id: str, old_price: float, new_price: float) -> None:
        price_drop = old_price - new_price
        percentage = (price_drop / old_price * 100) if old_price else 0.0
        body = f"A property you're watching dropped by {format_price_inr(price_drop)} ({percentage:.1f}%)"
        data = {"propertyId": property_id, "oldPrice": old_price, "newPrice": new_price, "priceDrop": price_drop}
        self._deliver(user_id, "Price Drop Alert! 💰", body, "priceDrop", data)

    def send_open_house_notification(self, user_id: str, property_id: str, date: datetime, address: str) -> None:
        body = f"Open house at {address} on {format_open_house_date(date)}"
        data = {"propertyId": property_id, "date": date.isoformat(), "address": address}
        self._deliver(user_id, "Open House Reminder 🏠", body, "openHouse", data)

    def send_new_property_notification(self, user_id: str, property_id: str, property_name: str, price: Any) -> None:
        body = f"{property_name} - {format_price_inr(price)}"
        data = {"propertyId": property_id, "propertyName": property_name, "price": price}
        self._deliver(user_id, "New Property Alert! 🆕", body, "newProperty", data)

    def send_market_update_notification(self, user_id: str, update: str) -> None:
        self._deliver(user_id, "Market Update 📊", update, "marketUpdate", {"update": update})

    def send_agent_message_notification(self, user_id: str, agent_name: str, message: str) -> None:
        self._deliver(
            user_id,
            f"Message from {agent_name} 💬",
            truncate_message(message),
            "agentMessage",
            {"agentName": agent_name, "message": message}
        )
