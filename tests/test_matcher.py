"""
Tests for saved-search matching and the checker that turns matches into notifications.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from app.modules.listings.schemas import Property
from app.modules.saved_searches.matcher import (
    SavedSearchChecker,
    build_saved_search_message,
    find_matching_properties,
    listing_price,
    matches,
    new_since,
)
from app.modules.saved_searches.schemas import SearchCriteria
from tests.conftest import USER_ID


def make_property(**overrides) -> Property:
    fields = {
        "id": "1",
        "name": "Green Acres Villa",
        "address": "Kanpur, Uttar Pradesh, India",
        "price": "4500000",
        "type": "Villa",
        "bedrooms": 3,
        "bathrooms": 2,
        "created_at": datetime(2025, 3, 2, tzinfo=timezone.utc),
    }
    fields.update(overrides)
    return Property(**fields)


class TestMatches:
    def test_empty_criteria_match_everything_unsold(self) -> None:
        assert matches(make_property(), SearchCriteria())

    def test_sold_never_matches(self) -> None:
        assert not matches(make_property(sold=True), SearchCriteria())

    def test_location_matches_address_or_name(self) -> None:
        assert matches(make_property(), SearchCriteria(location="kanpur"))
        assert matches(make_property(), SearchCriteria(location="green acres"))
        assert not matches(make_property(), SearchCriteria(location="Lucknow"))

    def test_property_type_is_case_insensitive_and_all_is_wildcard(self) -> None:
        assert matches(make_property(), SearchCriteria(property_type="villa"))
        assert matches(make_property(), SearchCriteria(property_type="All"))
        assert not matches(make_property(), SearchCriteria(property_type="Apartment"))

    def test_price_range(self) -> None:
        prop = make_property(price="₹45,00,000")
        assert matches(prop, SearchCriteria(min_price=4000000, max_price=5000000))
        assert not matches(prop, SearchCriteria(min_price=5000000))
        assert not matches(prop, SearchCriteria(max_price=4000000))

    def test_unpriced_listing_is_not_excluded_by_price(self) -> None:
        prop = make_property(price="Price on request")
        assert listing_price(prop) is None
        assert matches(prop, SearchCriteria(min_price=1, max_price=2))

    def test_bedrooms_and_bathrooms_are_minimums(self) -> None:
        assert matches(make_property(), SearchCriteria(bedrooms=3, bathrooms=1))
        assert not matches(make_property(), SearchCriteria(bedrooms=4))
        assert not matches(make_property(), SearchCriteria(bathrooms=3))

    def test_criteria_accept_client_keys(self) -> None:
        criteria = SearchCriteria(**{"minPrice": 100, "propertyType": "Villa"})
        assert criteria.min_price == 100
        assert criteria.property_type == "Villa"
        assert find_matching_properties([make_property(), make_property(type="Plot")], criteria) == [make_property()]


class TestNewSince:
    def test_strictly_after_last_check(self) -> None:
        old = make_property(id="1", created_at=datetime(2025, 3, 1, tzinfo=timezone.utc))
        fresh = make_property(id="2", created_at=datetime(2025, 3, 3, tzinfo=timezone.utc))
        same = make_property(id="3", created_at=datetime(2025, 3, 2, tzinfo=timezone.utc))
        assert new_since([old, fresh, same], "2025-03-02T00:00:00Z") == [fresh]

    def test_listings_without_timestamp_are_skipped(self) -> None:
        assert new_since([make_property(created_at=None)], "2025-01-01T00:00:00Z") == []

    def test_never_checked_reports_nothing(self) -> None:
        assert new_since([make_property()], None) == []


class TestBuildMessage:
    def test_single_property(self) -> None:
        message = build_saved_search_message("Kanpur villas", [make_property()])
        assert message == "New property found: Green Acres Villa - ₹45,00,000"

    def test_lists_at_most_three(self) -> None:
        props = [make_property(id=str(i), name=f"Home {i}") for i in range(5)]
        message = build_saved_search_message("Kanpur villas", props)
        assert message.startswith('5 new properties found matching your "Kanpur villas" search:')
        assert message.count("• ") == 3
        assert message.endswith("\n...and more!")

    def test_exactly_three_has_no_suffix(self) -> None:
        props = [make_property(id=str(i), name=f"Home {i}") for i in range(3)]
        assert "...and more!" not in build_saved_search_message("x", props)


class TestSavedSearchChecker:
    @pytest.fixture
    def seeded(self, supabase):
        supabase.tables["saved_searches"] = [{
            "id": 10,
            "user_id": USER_ID,
            "name": "Kanpur homes",
            "criteria": {"location": "Kanpur"},
            "is_active": True,
            "last_checked": "2025-03-01T12:00:00+00:00",
            "created_at": "2025-02-01T00:00:00+00:00",
        }]
        return supabase

    def test_new_match_sends_notification_and_advances_last_checked(self, seeded) -> None:
        notified = SavedSearchChecker(seeded).check_saved_searches(USER_ID)

        assert notified == 1
        notifications = seeded.tables["notifications"]
        assert len(notifications) == 1
        assert notifications[0]["type"] == "savedSearch"
        assert notifications[0]["data"]["propertyCount"] == 1
        assert notifications[0]["message"].startswith("New property found: Lake View Flat")
        assert seeded.tables["saved_searches"][0]["last_checked"] > "2025-03-01T12:00:00+00:00"

    def test_second_run_finds_nothing_new(self, seeded) -> None:
        checker = SavedSearchChecker(seeded)
        checker.check_saved_searches(USER_ID)
        assert checker.trigger(USER_ID) == 0
        assert len(seeded.tables["notifications"]) == 1

    def test_inactive_searches_are_ignored(self, seeded) -> None:
        seeded.tables["saved_searches"][0]["is_active"] = False
        assert SavedSearchChecker(seeded).check_all_users() == 0
        assert "notifications" not in seeded.tables

    def test_check_all_users(self, seeded) -> None:
        assert SavedSearchChecker(seeded).check_all_users() == 1
