"""Listing router - FastAPI endpoints for listing operations"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user, get_optional_user
from ...database import get_db
from ...models import Profile
from .schemas import (
    DaySlots,
    ListingCreate,
    ListingResponse,
    ListingSlotsResponse,
    ListingUpdate,
)
from .service import ListingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/listings", tags=["Listings"])


def get_listing_service(db: Session = Depends(get_db)) -> ListingService:
    """Dependency injection for ListingService"""
    return ListingService(db)


@router.post("", response_model=ListingResponse, status_code=201)
async def create_listing(
    data: ListingCreate,
    current_user: Profile = Depends(get_current_user),
    service: ListingService = Depends(get_listing_service),
):
    """Create a new listing owned by the current user"""
    listing = service.create_listing(data, current_user)
    return ListingResponse.from_listing(listing, current_user.id)


@router.get("/mine", response_model=list[ListingResponse])
async def get_my_listings(
    current_user: Profile = Depends(get_current_user),
    service: ListingService = Depends(get_listing_service),
):
    """Get all listings hosted by the current user, including inactive ones"""
    listings = service.list_host_listings(current_user)
    return [ListingResponse.from_listing(listing, current_user.id) for listing in listings]


@router.get("/{listing_id}", response_model=ListingResponse)
async def get_listing(
    listing_id: int,
    viewer: Optional[Profile] = Depends(get_optional_user),
    service: ListingService = Depends(get_listing_service),
):
    """Get a listing with its host"""
    listing = service.get_listing(listing_id, viewer)
    return ListingResponse.from_listing(listing, viewer.id if viewer else None)


@router.patch("/{listing_id}", response_model=ListingResponse)
async def update_listing(
    listing_id: int,
    data: ListingUpdate,
    current_user: Profile = Depends(get_current_user),
    service: ListingService = Depends(get_listing_service),
):
    """Update a listing (host only)"""
    listing = service.update_listing(listing_id, data, current_user)
    return ListingResponse.from_listing(listing, current_user.id)


@router.get("/{listing_id}/slots", response_model=ListingSlotsResponse)
async def get_listing_slots(
    listing_id: int,
    viewer: Optional[Profile] = Depends(get_optional_user),
    service: ListingService = Depends(get_listing_service),
):
    """Get the bookable time slots for each availability date"""
    listing, slots = service.get_available_slots(listing_id, viewer)
    return ListingSlotsResponse(
        listingId=listing.id,
        duration=listing.duration,
        slots=[DaySlots(**day) for day in slots],
    )
