"""Listing service - Business logic for listing operations"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import LISTING_FORMATS, Listing, Profile
from ...shared.clock import utcnow
from ...shared.validators import normalize_tags, parse_iso_date, validate_http_url
from .availability import generate_slots
from .repository import ListingRepository
from .schemas import ListingCreate, ListingUpdate

logger = logging.getLogger(__name__)


def validate_listing_fields(fields: dict) -> Optional[str]:
    """
    Check a full set of listing fields; return the first problem as a
    user-facing message, or None when the listing is valid.
    """
    if not (fields.get("title") or "").strip():
        return "Title is required"

    if not (fields.get("description") or "").strip():
        return "Description is required"

    price = fields.get("price_cents")
    if price is None or isinstance(price, bool) or price < 0:
        return "Please enter a valid price"

    duration = fields.get("duration")
    if not duration or duration <= 0:
        return "Please enter a valid duration"

    listing_format = fields.get("format")
    if listing_format not in LISTING_FORMATS:
        return "Format must be one of: virtual, in-person, both"

    if listing_format in ("in-person", "both") and not (fields.get("location") or "").strip():
        return "Location is required for in-person meetings"

    if listing_format in ("virtual", "both"):
        link = (fields.get("meeting_link") or "").strip()
        if not link:
            return "Meeting link is required for virtual meetings"
        if not validate_http_url(link):
            return "Please enter a valid URL including http:// or https://"

    if not fields.get("topics"):
        return "Please add at least one topic"

    availability = fields.get("availability")
    if not availability:
        return "Please add at least one availability slot"
    for day in availability:
        try:
            parse_iso_date(day)
        except ValueError:
            return f"Invalid availability date: {day}"

    return None


def _clean_optional(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


class ListingService:
    """Service layer for listing business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ListingRepository()

    def get_listing_or_404(self, listing_id: int) -> Listing:
        listing = self.repo.get_listing_by_id(self.db, listing_id)
        if not listing:
            raise HTTPException(status_code=404, detail="Listing not found")
        return listing

    def get_listing(self, listing_id: int, viewer: Optional[Profile]) -> Listing:
        """Get a listing; inactive listings are only visible to their host"""
        listing = self.get_listing_or_404(listing_id)
        if not listing.is_active and (viewer is None or viewer.id != listing.host_id):
            raise HTTPException(status_code=404, detail="Listing not found")
        return listing

    def list_host_listings(self, host: Profile) -> list[Listing]:
        return self.repo.get_host_listings(self.db, host.id)

    def create_listing(self, data: ListingCreate, host: Profile) -> Listing:
        """Create a new listing with validation"""
        logger.info(f"📥 Creating listing for profile_id: {host.id}")

        fields = {
            "title": data.title.strip(),
            "description": data.description.strip(),
            "price_cents": data.priceCents,
            "duration": data.duration,
            "format": data.format,
            "location": _clean_optional(data.location),
            "meeting_link": _clean_optional(data.meetingLink),
            "topics": normalize_tags(data.topics),
            "availability": normalize_tags(data.availability),
            "is_active": data.isActive,
        }

        error = validate_listing_fields(fields)
        if error:
            logger.warning(f"⚠️ Listing rejected for profile {host.id}: {error}")
            raise HTTPException(status_code=400, detail=error)

        try:
            return self.repo.create_listing(self.db, host.id, **fields)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to create listing: {str(e)}")
            raise HTTPException(status_code=500, detail="Failed to create listing") from e

    def update_listing(self, listing_id: int, data: ListingUpdate, actor: Profile) -> Listing:
        """Update a listing; only its host may edit it"""
        listing = self.get_listing_or_404(listing_id)
        if listing.host_id != actor.id:
            logger.warning(f"🚫 Profile {actor.id} tried to edit listing {listing_id}")
            raise HTTPException(status_code=403, detail="Only the host can edit this listing")

        updates = {}
        if data.title is not None:
            updates["title"] = data.title.strip()
        if data.description is not None:
            updates["description"] = data.description.strip()
        if data.priceCents is not None:
            updates["price_cents"] = data.priceCents
        if data.duration is not None:
            updates["duration"] = data.duration
        if data.format is not None:
            updates["format"] = data.format
        if data.location is not None:
            updates["location"] = _clean_optional(data.location)
        if data.meetingLink is not None:
            updates["meeting_link"] = _clean_optional(data.meetingLink)
        if data.topics is not None:
            updates["topics"] = normalize_tags(data.topics)
        if data.availability is not None:
            updates["availability"] = normalize_tags(data.availability)
        if data.isActive is not None:
            updates["is_active"] = data.isActive

        merged = {
            "title": listing.title,
            "description": listing.description,
            "price_cents": listing.price_cents,
            "duration": listing.duration,
            "format": listing.format,
            "location": listing.location,
            "meeting_link": listing.meeting_link,
            "topics": listing.topics,
            "availability": listing.availability,
        }
        merged.update(updates)

        error = validate_listing_fields(merged)
        if error:
            raise HTTPException(status_code=400, detail=error)

        try:
            listing = self.repo.update_listing(self.db, listing, **updates)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to update listing {listing_id}: {str(e)}")
            raise HTTPException(status_code=500, detail="Failed to update listing") from e

        logger.info(f"✅ Listing {listing_id} updated")
        return listing

    def get_available_slots(
        self, listing_id: int, viewer: Optional[Profile], now: Optional[datetime] = None
    ) -> tuple[Listing, list[dict]]:
        listing = self.get_listing(listing_id, viewer)
        return listing, generate_slots(listing.availability or [], now or utcnow())
