"""Profile domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from ...models import Profile
from ...schemas import ListingSummary


class ProfileUpdate(BaseModel):
    """Partial profile update; omitted fields are left unchanged"""

    fullName: Optional[str] = None
    headline: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    linkedin: Optional[str] = None
    twitter: Optional[str] = None
    industry: Optional[str] = None
    sector: Optional[str] = None
    company: Optional[str] = None
    interests: Optional[list[str]] = None
    topics: Optional[list[str]] = None
    favoriteCoffeeShops: Optional[list[str]] = None
    offersChats: Optional[bool] = None
    requestsChats: Optional[bool] = None


class ProfileResponse(BaseModel):
    """Schema for the signed-in user's own profile"""

    id: int
    email: str
    fullName: Optional[str] = None
    headline: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    linkedin: Optional[str] = None
    twitter: Optional[str] = None
    industry: Optional[str] = None
    sector: Optional[str] = None
    company: Optional[str] = None
    interests: list[str] = []
    topics: list[str] = []
    favoriteCoffeeShops: list[str] = []
    offersChats: bool = False
    requestsChats: bool = False
    profilePhotoUrl: Optional[str] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    @classmethod
    def from_profile(cls, profile: Profile) -> "ProfileResponse":
        return cls(
            id=profile.id,
            email=profile.email,
            fullName=profile.full_name,
            headline=profile.headline,
            bio=profile.bio,
            location=profile.location,
            website=profile.website,
            linkedin=profile.linkedin,
            twitter=profile.twitter,
            industry=profile.industry,
            sector=profile.sector,
            company=profile.company,
            interests=profile.interests or [],
            topics=profile.topics or [],
            favoriteCoffeeShops=profile.favorite_coffee_shops or [],
            offersChats=bool(profile.offers_chats),
            requestsChats=bool(profile.requests_chats),
            profilePhotoUrl=profile.profile_photo_url,
            createdAt=profile.created_at,
            updatedAt=profile.updated_at,
        )


class PublicProfileResponse(BaseModel):
    """What other members see; no email"""

    id: int
    fullName: Optional[str] = None
    headline: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    linkedin: Optional[str] = None
    twitter: Optional[str] = None
    industry: Optional[str] = None
    company: Optional[str] = None
    topics: list[str] = []
    favoriteCoffeeShops: list[str] = []
    offersChats: bool = False
    profilePhotoUrl: Optional[str] = None
    listings: list[ListingSummary] = []

    @classmethod
    def from_profile(cls, profile: Profile, listings) -> "PublicProfileResponse":
        return cls(
            id=profile.id,
            fullName=profile.full_name,
            headline=profile.headline,
            bio=profile.bio,
            location=profile.location,
            website=profile.website,
            linkedin=profile.linkedin,
            twitter=profile.twitter,
            industry=profile.industry,
            company=profile.company,
            topics=profile.topics or [],
            favoriteCoffeeShops=profile.favorite_coffee_shops or [],
            offersChats=bool(profile.offers_chats),
            profilePhotoUrl=profile.profile_photo_url,
            listings=[ListingSummary.from_listing(listing) for listing in listings],
        )


class PhotoUploadResponse(BaseModel):
    url: str
    key: str
