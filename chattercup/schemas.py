from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from .models import Listing, Profile
from .shared.validators import format_price


class ProfileSummary(BaseModel):
    """Host/guest card shown next to listings and bookings"""

    id: int
    fullName: Optional[str] = None
    headline: Optional[str] = None
    profilePhotoUrl: Optional[str] = None

    @classmethod
    def from_profile(cls, profile: Optional[Profile]) -> Optional["ProfileSummary"]:
        if profile is None:
            return None
        return cls(
            id=profile.id,
            fullName=profile.full_name,
            headline=profile.headline,
            profilePhotoUrl=profile.profile_photo_url,
        )


class ListingSummary(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    priceCents: int
    priceDisplay: str
    duration: int
    topics: list[str] = []

    @classmethod
    def from_listing(cls, listing: Optional[Listing]) -> Optional["ListingSummary"]:
        if listing is None:
            return None
        return cls(
            id=listing.id,
            title=listing.title,
            description=listing.description,
            priceCents=listing.price_cents,
            priceDisplay=format_price(listing.price_cents),
            duration=listing.duration,
            topics=listing.topics or [],
        )


class SessionResponse(BaseModel):
    authenticated: bool
    profile: Optional[ProfileSummary] = None
    email: Optional[str] = None
    offersChats: bool = False
    requestsChats: bool = False
    checkedAt: datetime
