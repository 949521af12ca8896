"""
Saved-search matching.

Listings are fetched once and filtered in memory against each saved search; listings
created after the search's last_checked timestamp are reported as new, then
last_checked is advanced so the same listing is not announced twice.
"""

from supabase import Client
from app.modules.listings.schemas import Property
from app.modules.listings.service import ListingService
from app.modules.notifications.push import PushNotifier
from app.modules.saved_searches.schemas import SearchCriteria, SavedSearchResponse
from app.modules.saved_searches.service import SavedSearchService
from app.core.formatters import format_price_inr, parse_timestamp
from datetime import datetime
from typing import List, Optional, Union
import re
import logging

logger = logging.getLogger(__name__)

MAX_LISTED_PROPERTIES = 3


def listing_price(prop: Property) -> Optional[float]:
    """Numeric price from free text, None when nothing numeric is left"""
    match = re.match(r"\d*\.?\d+", re.sub(r"[^0-9.]", "", prop.price or ""))
    return float(match.group(0)) if match else None


def matches(prop: Property, criteria: SearchCriteria) -> bool:
    if prop.sold:
        return False

    if criteria.location and criteria.location.strip():
        location = criteria.location.lower().strip()
        if location not in prop.address.lower() and location not in prop.name.lower():
            return False

    if criteria.property_type and criteria.property_type.strip():
        wanted = criteria.property_type.lower().strip()
        if wanted != "all" and prop.type.lower() != wanted:
            return False

    if criteria.min_price or criteria.max_price:
        price = listing_price(prop)
        # Unpriced listings are not excluded by a price range
        if price is not None:
            if criteria.min_price and price < criteria.min_price:
                return False
            if criteria.max_price and price > criteria.max_price:
                return False

    if criteria.bedrooms and prop.bedrooms < criteria.bedrooms:
        return False

    if criteria.bathrooms and prop.bathrooms < criteria.bathrooms:
        return False

    return True


def find_matching_properties(properties: List[Property], criteria: SearchCriteria) -> List[Property]:
    return [p for p in properties if matches(p, criteria)]


def new_since(properties: List[Property], last_checked: Union[str, datetime, None]) -> List[Property]:
    """Listings created strictly after last_checked; listings without a timestamp are skipped"""
    checked_at = parse_timestamp(last_checked)
    if checked_at is None:
        return []
    fresh = []
    for prop in properties:
        created_at = parse_timestamp(prop.created_at)
        if created_at is not None and created_at > checked_at:
            fresh.append(prop)
    return fresh


def build_saved_search_message(search_name: str, new_properties: List[Property]) -> str:
    if len(new_properties) == 1:
        prop = new_properties[0]
        return f"New property found: {prop.name} - {format_price_inr(prop.price)}"

    details = "\n".join(
        f"• {p.name} - {format_price_inr(p.price)}" for p in new_properties[:MAX_LISTED_PROPERTIES]
    )
    message = (
        f"{len(new_properties)} new properties found matching your \"{search_name}\" search:\n"
        f"{details}"
    )
    if len(new_properties) > MAX_LISTED_PROPERTIES:
        message += "\n...and more!"
    return message


class SavedSearchChecker:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.searches = SavedSearchService(supabase)
        self.listings = ListingService(supabase)
        self.notifier = PushNotifier(supabase)

    def _check_search(self, user_id: str, search: SavedSearchResponse, properties: List[Property]) -> bool:
        matching = find_matching_properties(properties, search.criteria)
        fresh = new_since(matching, search.last_checked)
        if not fresh:
            return False

        logger.info(f"Saved search {search.id} for {user_id}: {len(fresh)} new matching properties")
        self.notifier.send_saved_search_notification(
            user_id,
            search.id,
            build_saved_search_message(search.name, fresh),
            [{"id": p.id, "name": p.name, "price": p.price} for p in fresh]
        )
        self.searches.update_last_checked(search.id)
        return True

    def check_saved_searches(self, user_id: str) -> int:
        """Check every active search of a user; returns how many produced a notification"""
        searches = self.searches.get_saved_searches(user_id)
        if not searches:
            return 0

        properties = self.listings.get_properties()
        notified = 0
        for search in searches:
            try:
                if self._check_search(user_id, search, properties):
                    notified += 1
            except Exception as e:
                logger.error(f"Error checking saved search {search.id}: {e}")
        return notified

    def trigger(self, user_id: str) -> int:
        """On-demand check for one user"""
        return self.check_saved_searches(user_id)

    def check_all_users(self) -> int:
        notified = 0
        for user_id in self.searches.users_with_active_searches():
            try:
                notified += self.check_saved_searches(user_id)
            except Exception as e:
                logger.error(f"Error checking saved searches for {user_id}: {e}")
        return notified
