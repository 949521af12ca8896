"""
Tests for listing mapping, the listing service and the /properties routes.
"""

from __future__ import annotations

import pytest
from fastapi import HTTPException

from app.modules.listings.schemas import PropertyCreate
from app.modules.listings.service import (
    PLACEHOLDER_IMAGE,
    ListingService,
    home_to_property,
    parse_area,
    property_to_home,
    split_categories,
)
from tests.conftest import OWNER_ID, USER_ID, home_row


class TestMapping:
    def test_first_category_is_type_rest_are_facilities(self) -> None:
        assert split_categories(["Villa", "Parking", "Garden"]) == ("Villa", ["Parking", "Garden"])
        assert split_categories(["Villa"]) == ("Villa", [])
        assert split_categories(None) == ("Property", [])

    def test_parse_area(self) -> None:
        assert parse_area("1,200 sqft") == 1200
        assert parse_area(None) == 0

    def test_home_to_property(self, supabase) -> None:
        prop = home_to_property(supabase, home_row(1))
        assert prop.id == "1"
        assert prop.address == "Kanpur, Uttar Pradesh, India"
        assert prop.type == "Villa"
        assert prop.facilities == ["Parking", "Garden"]
        assert prop.area == 1200
        assert prop.formatted_price == "₹45,00,000"
        assert prop.image.endswith("/KanpurRealty/properties/1700000000000-abcd.jpg")
        assert [g.id for g in prop.gallery] == ["1"]
        assert prop.sold is False
        assert prop.owner_id == OWNER_ID

    def test_pending_rows_get_placeholders(self, supabase) -> None:
        prop = home_to_property(supabase, home_row(5, images=[], description=None), pending=True)
        assert prop.image == PLACEHOLDER_IMAGE
        assert prop.description == "No description available"
        assert prop.is_pending is True
        assert prop.rating == 0

    def test_full_urls_are_kept(self, supabase) -> None:
        prop = home_to_property(supabase, home_row(1, images=["https://cdn.example.com/a.jpg"]))
        assert prop.image == "https://cdn.example.com/a.jpg"

    def test_property_to_home_splits_address_and_prepends_type(self) -> None:
        row = property_to_home(PropertyCreate(
            name="Riverside Plot",
            address="Kanpur, Uttar Pradesh, India",
            price="2500000",
            type="Plot",
            facilities=["Corner"],
            image="https://cdn.example.com/p.jpg",
            sold=True,
        ), OWNER_ID)
        assert (row["city"], row["state"], row["country"]) == ("Kanpur", "Uttar Pradesh", "India")
        assert row["categories"] == ["Plot", "Corner"]
        assert row["images"] == ["https://cdn.example.com/p.jpg"]
        assert row["archived_at"] is not None


class TestListingService:
    def test_sold_listings_are_hidden_by_default(self, supabase) -> None:
        supabase.tables["homes"][0]["archived_at"] = "2025-03-10T00:00:00+00:00"
        service = ListingService(supabase)
        assert [p.id for p in service.get_properties()] == ["2"]
        assert {p.id for p in service.get_properties(include_sold=True)} == {"1", "2"}

    def test_newest_first_and_category_filter(self, supabase) -> None:
        service = ListingService(supabase)
        assert [p.id for p in service.get_properties()] == ["2", "1"]
        assert [p.id for p in service.get_properties(filter="Villa")] == ["1"]
        assert len(service.get_properties(filter="All")) == 2

    def test_unusual_price_text_does_not_break_browsing(self, supabase) -> None:
        supabase.tables["homes"][0]["price"] = "1" * 30
        supabase.tables["homes"][1]["price"] = "45 Lakh"
        prices = {p.id: p.formatted_price for p in ListingService(supabase).get_properties()}
        assert prices["1"] == "₹1," + "11," * 13 + "111"
        assert prices["2"] == "₹45"

    def test_search_matches_name_address_and_type(self, supabase) -> None:
        service = ListingService(supabase)
        assert [p.id for p in service.get_properties(search="lake")] == ["2"]
        assert [p.id for p in service.get_properties(search="apartment")] == ["2"]
        assert len(service.get_properties(search="kanpur")) == 2

    def test_property_by_id_includes_reviews_and_rating(self, supabase) -> None:
        supabase.tables["property_reviews"] = [
            {"id": 1, "property_id": 1, "user_id": USER_ID, "rating": 4, "comment": "Nice",
             "helpful_count": 0, "created_at": "2025-03-05T00:00:00+00:00"},
            {"id": 2, "property_id": 1, "user_id": "ghost-user", "rating": 2, "comment": "Noisy",
             "helpful_count": 1, "created_at": "2025-03-06T00:00:00+00:00"},
        ]
        prop = ListingService(supabase).get_property_by_id("1")
        assert prop.rating == 3
        assert [r.id for r in prop.reviews] == ["2", "1"]
        assert prop.reviews[1].user.name == "Asha"
        assert prop.reviews[0].user.name == "User ghost-us"

    def test_falls_back_to_pending_homes(self, supabase) -> None:
        supabase.tables["pending_homes"] = [home_row(9, status="pending")]
        prop = ListingService(supabase).get_property_by_id("9")
        assert prop.is_pending is True

    def test_missing_and_invalid_ids_are_404(self, supabase) -> None:
        service = ListingService(supabase)
        for property_id in ("404", "not-a-number"):
            with pytest.raises(HTTPException) as exc:
                service.get_property_by_id(property_id)
            assert exc.value.status_code == 404

    def test_mark_sold_and_unsold(self, supabase) -> None:
        service = ListingService(supabase)
        service.mark_sold("1")
        assert supabase.tables["homes"][0]["archived_at"] is not None
        service.mark_unsold("1")
        assert supabase.tables["homes"][0]["archived_at"] is None

    def test_mark_sold_unknown_home(self, supabase) -> None:
        with pytest.raises(HTTPException) as exc:
            ListingService(supabase).mark_sold("99")
        assert exc.value.status_code == 404

    def test_share_message(self, supabase) -> None:
        share = ListingService(supabase).share_message("2")
        assert share.message.startswith("Check out this property: Lake View Flat\n\nKanpur")
        assert "Price: 4500000" in share.message

    def test_database_errors_become_500(self, supabase) -> None:
        supabase.fail("homes")
        with pytest.raises(HTTPException) as exc:
            ListingService(supabase).get_latest_properties()
        assert exc.value.status_code == 500


class TestPropertyRoutes:
    def test_list_is_public(self, client) -> None:
        response = client.get("/api/v1/properties")
        assert response.status_code == 200
        assert len(response.json()) == 2

    def test_latest(self, client, supabase) -> None:
        supabase.tables["homes"].extend(home_row(i) for i in (3, 4, 5))
        response = client.get("/api/v1/properties/latest")
        assert [p["id"] for p in response.json()] == ["5", "4", "3"]

    def test_create_requires_admin(self, client, user_headers, admin_headers) -> None:
        body = {"name": "New Plot", "address": "Kanpur", "price": "100000", "type": "Plot"}
        assert client.post("/api/v1/properties", json=body, headers=user_headers).status_code == 403

        response = client.post("/api/v1/properties", json=body, headers=admin_headers)
        assert response.status_code == 201
        assert response.json()["type"] == "Plot"

    def test_only_owner_or_admin_can_mark_sold(self, client, user_headers, owner_headers) -> None:
        assert client.post("/api/v1/properties/1/sold", headers=user_headers).status_code == 403
        assert client.post("/api/v1/properties/1/sold", headers=owner_headers).status_code == 200

    def test_delete_as_admin(self, client, supabase, admin_headers) -> None:
        response = client.delete("/api/v1/properties/2", headers=admin_headers)
        assert response.status_code == 204
        assert [h["id"] for h in supabase.tables["homes"]] == [1]

    def test_requires_token(self, client) -> None:
        assert client.delete("/api/v1/properties/2").status_code in (401, 403)
