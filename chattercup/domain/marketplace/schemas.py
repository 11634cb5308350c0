"""Marketplace and dashboard schemas"""

from datetime import datetime

from pydantic import BaseModel

from ..bookings.schemas import BookingResponse
from ..listings.schemas import ListingResponse
from ..profiles.schemas import ProfileResponse


class MarketplaceResponse(BaseModel):
    listings: list[ListingResponse]
    availableTags: list[str]
    total: int


class DashboardCounts(BaseModel):
    hosting: int
    attending: int
    listings: int
    upcoming: int


class DashboardResponse(BaseModel):
    profile: ProfileResponse
    tab: str
    hosting: list[BookingResponse]
    attending: list[BookingResponse]
    listings: list[ListingResponse]
    counts: DashboardCounts
    generatedAt: datetime
