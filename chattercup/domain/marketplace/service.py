"""Marketplace service - Browsing listings and the member dashboard"""

import logging
from datetime import datetime
from typing import Iterable, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import BOOKING_CONFIRMED, BOOKING_PENDING, Booking, Listing, Profile
from ...shared.clock import utcnow
from ...shared.validators import normalize_tags
from ..bookings.repository import BookingRepository
from ..bookings.rules import is_past
from ..listings.repository import ListingRepository

logger = logging.getLogger(__name__)

DASHBOARD_TABS = ("upcoming", "past", "all")


def collect_tags(listings: Iterable[Listing]) -> list[str]:
    """Unique topics across listings, sorted"""
    tags = set()
    for listing in listings:
        tags.update(normalize_tags(listing.topics))
    return sorted(tags)


def matches_any_tag(listing: Listing, tags: list[str]) -> bool:
    if not tags:
        return True
    return bool(set(listing.topics or []) & set(tags))


def is_upcoming(booking: Booking, now: datetime) -> bool:
    return booking.status in (BOOKING_PENDING, BOOKING_CONFIRMED) and not is_past(booking, now)


def filter_tab(bookings: list[Booking], tab: str, now: datetime) -> list[Booking]:
    if tab == "upcoming":
        return [b for b in bookings if is_upcoming(b, now)]
    if tab == "past":
        return [b for b in bookings if not is_upcoming(b, now)]
    return list(bookings)


class MarketplaceService:
    """Service layer for the marketplace and dashboard"""

    def __init__(self, db: Session):
        self.db = db
        self.listings = ListingRepository()
        self.bookings = BookingRepository()

    def browse(
        self, search: Optional[str] = None, tags: Optional[list[str]] = None
    ) -> tuple[list[Listing], list[str]]:
        """
        Active listings for the marketplace, newest first.

        Returns the listings matching the search text and any of the selected
        tags, plus the sorted tags available across all active listings.
        """
        search = (search or "").strip() or None
        selected = normalize_tags(tags)

        active = self.listings.search_active_listings(self.db)
        available_tags = collect_tags(active)
        listings = self.listings.search_active_listings(self.db, search) if search else active

        results = [listing for listing in listings if matches_any_tag(listing, selected)]
        logger.info(
            f"🔍 Marketplace browse: search={search!r} tags={selected} -> {len(results)} listings"
        )
        return results, available_tags

    def dashboard(self, user: Profile, tab: str = "upcoming", now: Optional[datetime] = None) -> dict:
        """Bookings the user hosts and attends, their listings and summary counts"""
        if tab not in DASHBOARD_TABS:
            raise HTTPException(
                status_code=400, detail=f"Invalid tab. Must be one of: {', '.join(DASHBOARD_TABS)}"
            )
        now = now or utcnow()

        hosting = self.bookings.get_host_bookings(self.db, user.id)
        attending = self.bookings.get_guest_bookings(self.db, user.id)
        listings = self.listings.get_host_listings(self.db, user.id)

        upcoming = sum(1 for b in hosting + attending if is_upcoming(b, now))

        return {
            "hosting": filter_tab(hosting, tab, now),
            "attending": filter_tab(attending, tab, now),
            "listings": listings,
            "counts": {
                "hosting": len(hosting),
                "attending": len(attending),
                "listings": len(listings),
                "upcoming": upcoming,
            },
            "now": now,
        }
