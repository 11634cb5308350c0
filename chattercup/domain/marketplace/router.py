"""Marketplace router - Browse listings and the member dashboard"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user, get_optional_user
from ...database import get_db
from ...models import Profile
from ..bookings.rules import available_actions, viewer_role
from ..bookings.schemas import BookingResponse
from ..listings.schemas import ListingResponse
from ..profiles.schemas import ProfileResponse
from .schemas import DashboardCounts, DashboardResponse, MarketplaceResponse
from .service import MarketplaceService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Marketplace"])


def get_marketplace_service(db: Session = Depends(get_db)) -> MarketplaceService:
    """Dependency injection for MarketplaceService"""
    return MarketplaceService(db)


@router.get("/marketplace", response_model=MarketplaceResponse)
async def browse_marketplace(
    search: Optional[str] = Query(None, description="Match title, description or host name"),
    tags: Optional[list[str]] = Query(None, description="Keep listings with any of these topics"),
    current_user: Optional[Profile] = Depends(get_optional_user),
    service: MarketplaceService = Depends(get_marketplace_service),
):
    """Browse active listings"""
    listings, available_tags = service.browse(search, tags)
    viewer_id = current_user.id if current_user else None
    return MarketplaceResponse(
        listings=[ListingResponse.from_listing(listing, viewer_id) for listing in listings],
        availableTags=available_tags,
        total=len(listings),
    )


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    tab: str = Query("upcoming", description="upcoming, past or all"),
    current_user: Profile = Depends(get_current_user),
    service: MarketplaceService = Depends(get_marketplace_service),
):
    """Bookings, listings and counts for the signed-in user"""
    data = service.dashboard(current_user, tab)
    now = data["now"]

    def to_response(booking):
        return BookingResponse.from_booking(
            booking,
            viewer_role(booking, current_user.id),
            available_actions(booking, current_user.id, now),
        )

    return DashboardResponse(
        profile=ProfileResponse.from_profile(current_user),
        tab=tab,
        hosting=[to_response(b) for b in data["hosting"]],
        attending=[to_response(b) for b in data["attending"]],
        listings=[ListingResponse.from_listing(listing, current_user.id) for listing in data["listings"]],
        counts=DashboardCounts(**data["counts"]),
        generatedAt=now,
    )
