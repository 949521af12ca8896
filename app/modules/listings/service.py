from supabase import Client
from app.modules.listings.schemas import Property, PropertyCreate, AgentInfo, GalleryItem, ShareMessage
from app.modules.storage.service import resolve_image_url
from app.modules.reviews.service import ReviewService
from app.core.formatters import format_price_inr, parse_timestamp, parse_home_id, utc_now_iso
from typing import List, Optional, Dict, Any, Union
from fastapi import HTTPException
import re
import logging

logger = logging.getLogger(__name__)

PLACEHOLDER_IMAGE = "https://via.placeholder.com/400x300?text=No+Image"


def require_home_id(value: Union[str, int, None]) -> int:
    home_id = parse_home_id(value)
    if home_id is None:
        raise HTTPException(status_code=400, detail="Invalid property ID")
    return home_id


def build_address(row: Dict[str, Any]) -> str:
    parts = [row.get("city"), row.get("state"), row.get("country")]
    parts = [p for p in parts if p]
    return ", ".join(parts) if parts else "Address not specified"


def parse_area(sqft: Any) -> int:
    if not sqft:
        return 0
    digits = re.sub(r"[^0-9]", "", str(sqft))
    return int(digits) if digits else 0


def split_categories(categories: Optional[List[str]]):
    """First category is the property type, the rest are facilities"""
    categories = categories or []
    property_type = categories[0] if categories else "Property"
    if len(categories) > 1:
        facilities = categories[1:]
    elif len(categories) == 1 and categories[0] != property_type:
        facilities = list(categories)
    else:
        facilities = []
    return property_type, facilities


def home_to_property(supabase: Client, row: Dict[str, Any], pending: bool = False) -> Property:
    """Map a homes (or pending_homes) row to the client's Property shape"""
    images = row.get("images") or []
    property_type, facilities = split_categories(row.get("categories"))

    if images:
        image = resolve_image_url(supabase, images[0])
    else:
        image = PLACEHOLDER_IMAGE if pending else ""

    price = str(row.get("price") or "0")
    description = row.get("description") or ("No description available" if pending else "")

    return Property(
        id=str(row["id"]),
        name=row.get("title") or "Untitled Property",
        address=build_address(row),
        price=price,
        formatted_price=format_price_inr(price),
        rating=0 if pending else None,
        type=property_type,
        bedrooms=row.get("bedrooms") or 0,
        bathrooms=row.get("bathrooms") or 0,
        area=parse_area(row.get("sqft")),
        image=image,
        agent=AgentInfo(email="agent@example.com", avatar="") if pending else AgentInfo(),
        facilities=facilities,
        description=description,
        gallery=[
            GalleryItem(id=str(idx + 1), image=resolve_image_url(supabase, img))
            for idx, img in enumerate(images)
        ],
        created_at=parse_timestamp(row.get("created_at")),
        sold=False if pending else row.get("archived_at") is not None,
        owner_id=row.get("user_id"),
        is_pending=pending
    )


def property_to_home(property_data: PropertyCreate, owner_id: Optional[str]) -> Dict[str, Any]:
    """Map a client Property to a homes row for insert"""
    address_parts = [part.strip() for part in property_data.address.split(",")]
    city = address_parts[0] or None
    state = address_parts[1] if len(address_parts) > 1 else None
    country = address_parts[2] if len(address_parts) > 2 else None

    if property_data.gallery:
        images = list(property_data.gallery)
    elif property_data.image:
        images = [property_data.image]
    else:
        images = []

    categories = list(property_data.facilities)
    if property_data.type and property_data.type not in categories:
        categories.insert(0, property_data.type)

    return {
        "title": property_data.name,
        "country": country,
        "state": state,
        "city": city,
        "price": property_data.price,
        "description": property_data.description,
        "categories": categories,
        "images": images,
        "sqft": str(property_data.area) if property_data.area else None,
        "bedrooms": property_data.bedrooms,
        "bathrooms": property_data.bathrooms,
        "user_id": owner_id,
        "archived_at": utc_now_iso() if property_data.sold else None
    }


class ListingService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_properties(
        self,
        filter: Optional[str] = None,
        search: Optional[str] = None,
        limit: Optional[int] = None,
        include_sold: bool = False
    ) -> List[Property]:
        """Published listings, newest first, with optional category filter and search"""
        try:
            query = self.supabase.table("homes")\
                .select("*")\
                .order("created_at", desc=True)

            if filter and filter != "All":
                query = query.contains("categories", [filter])

            if not include_sold:
                query = query.is_("archived_at", "null")

            # Search runs in memory over the mapped fields, so the limit only applies without it
            if not search and limit:
                query = query.limit(limit)

            result = query.execute()
            properties = [home_to_property(self.supabase, row) for row in result.data or []]

            if search:
                term = search.lower()
                properties = [
                    p for p in properties
                    if term in p.name.lower() or term in p.address.lower() or term in p.type.lower()
                ]

            logger.info(f"Returning {len(properties)} properties (filter={filter}, search={search})")
            return properties
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error getting properties: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_home_row(self, home_id: int) -> Optional[Dict[str, Any]]:
        result = self.supabase.table("homes")\
            .select("*")\
            .eq("id", home_id)\
            .maybe_single()\
            .execute()
        if not result or not result.data:
            return None
        return result.data

    def get_property_by_id(self, property_id: str) -> Property:
        """Look in homes first (with reviews), then pending_homes"""
        home_id = parse_home_id(property_id)
        if home_id is None:
            raise HTTPException(status_code=404, detail="Property not found")

        try:
            row = self.get_home_row(home_id)
            if row:
                prop = home_to_property(self.supabase, row)
                reviews = ReviewService(self.supabase).get_property_reviews(str(home_id))
                prop.reviews = reviews
                if reviews:
                    prop.rating = ReviewService.average_rating(reviews)
                return prop

            logger.info(f"Property {home_id} not found in homes, checking pending_homes")
            pending = self.supabase.table("pending_homes")\
                .select("*")\
                .eq("id", home_id)\
                .maybe_single()\
                .execute()
            if not pending or not pending.data:
                raise HTTPException(status_code=404, detail="Property not found")
            return home_to_property(self.supabase, pending.data, pending=True)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error getting property {property_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_latest_properties(self) -> List[Property]:
        """Three newest unsold listings"""
        try:
            result = self.supabase.table("homes")\
                .select("*")\
                .is_("archived_at", "null")\
                .order("created_at", desc=True)\
                .limit(3)\
                .execute()
            return [home_to_property(self.supabase, row) for row in result.data or []]
        except Exception as e:
            logger.error(f"Error getting latest properties: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def add_property(self, property_data: PropertyCreate, owner_id: Optional[str]) -> Property:
        """Insert directly into homes (admin path; owners go through pending_homes)"""
        try:
            result = self.supabase.table("homes")\
                .insert(property_to_home(property_data, owner_id))\
                .execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create property")
            logger.info(f"Created home {result.data[0]['id']}")
            return home_to_property(self.supabase, result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error adding property: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def delete_property(self, property_id: str) -> None:
        home_id = require_home_id(property_id)
        try:
            self.supabase.table("homes").delete().eq("id", home_id).execute()
            logger.info(f"Deleted home {home_id}")
        except Exception as e:
            logger.error(f"Error deleting property {home_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def _set_archived(self, property_id: str, archived_at: Optional[str]) -> None:
        home_id = require_home_id(property_id)
        try:
            result = self.supabase.table("homes")\
                .update({"archived_at": archived_at})\
                .eq("id", home_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Property not found")
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating archived_at for {home_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def mark_sold(self, property_id: str) -> None:
        self._set_archived(property_id, utc_now_iso())

    def mark_unsold(self, property_id: str) -> None:
        self._set_archived(property_id, None)

    def share_message(self, property_id: str) -> ShareMessage:
        prop = self.get_property_by_id(property_id)
        message = (
            f"Check out this property: {prop.name}\n\n"
            f"{prop.address}\n"
            f"Price: {prop.price}\n\n"
            "I thought you might be interested in this property!"
        )
        return ShareMessage(property_id=prop.id, title=prop.name, message=message)
