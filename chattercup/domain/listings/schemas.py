"""Listing domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...config import DEFAULT_LISTING_DURATION
from ...models import Listing
from ...schemas import ProfileSummary
from ...shared.validators import format_price


class ListingCreate(BaseModel):
    """Schema for creating a new listing"""

    title: str = ""
    description: str = ""
    priceCents: Optional[int] = None
    duration: int = DEFAULT_LISTING_DURATION
    format: str = "virtual"
    location: Optional[str] = None
    meetingLink: Optional[str] = None
    topics: list[str] = []
    availability: list[str] = []
    isActive: bool = True

    @field_validator("format")
    @classmethod
    def normalize_format(cls, v: str) -> str:
        return (v or "").strip().lower()


class ListingUpdate(BaseModel):
    """Schema for updating an existing listing"""

    title: Optional[str] = None
    description: Optional[str] = None
    priceCents: Optional[int] = None
    duration: Optional[int] = None
    format: Optional[str] = None
    location: Optional[str] = None
    meetingLink: Optional[str] = None
    topics: Optional[list[str]] = None
    availability: Optional[list[str]] = None
    isActive: Optional[bool] = None

    @field_validator("format")
    @classmethod
    def normalize_format(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return v.strip().lower()


class ListingResponse(BaseModel):
    """Schema for listing response"""

    id: int
    hostId: int
    title: str
    description: str
    priceCents: int
    priceDisplay: str
    duration: int
    format: str
    location: Optional[str] = None
    meetingLink: Optional[str] = None
    topics: list[str]
    availability: list[str]
    isActive: bool
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
    host: Optional[ProfileSummary] = None

    @classmethod
    def from_listing(cls, listing: Listing, viewer_id: Optional[int] = None) -> "ListingResponse":
        is_owner = viewer_id is not None and viewer_id == listing.host_id
        return cls(
            id=listing.id,
            hostId=listing.host_id,
            title=listing.title,
            description=listing.description,
            priceCents=listing.price_cents,
            priceDisplay=format_price(listing.price_cents),
            duration=listing.duration,
            format=listing.format,
            location=listing.location,
            # The listing's own call link is only for its host
            meetingLink=listing.meeting_link if is_owner else None,
            topics=listing.topics or [],
            availability=listing.availability or [],
            isActive=listing.is_active,
            createdAt=listing.created_at,
            updatedAt=listing.updated_at,
            host=ProfileSummary.from_profile(listing.host),
        )


class DaySlots(BaseModel):
    date: str
    times: list[str]


class ListingSlotsResponse(BaseModel):
    listingId: int
    duration: int
    slots: list[DaySlots]
