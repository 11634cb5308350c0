"""Booking domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...models import Booking
from ...schemas import ListingSummary, ProfileSummary
from ...shared.validators import format_price


class BookingCreate(BaseModel):
    """Booking request from a guest; date is YYYY-MM-DD and time HH:MM, both UTC"""

    date: Optional[str] = None
    time: Optional[str] = None
    message: Optional[str] = None


class ScheduleCallRequest(BaseModel):
    date: Optional[str] = None
    time: Optional[str] = None


class BookingStatusUpdate(BaseModel):
    status: str

    @field_validator("status")
    @classmethod
    def normalize_status(cls, v: str) -> str:
        return v.strip().lower()


class MeetingLinkUpdate(BaseModel):
    meetingLink: Optional[str] = None


class BookingResponse(BaseModel):
    """Schema for booking response"""

    id: int
    listingId: int
    hostId: int
    guestId: int
    scheduledAt: datetime
    status: str
    priceCents: int
    priceDisplay: str
    duration: int
    message: Optional[str] = None
    meetingLink: Optional[str] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
    listing: Optional[ListingSummary] = None
    host: Optional[ProfileSummary] = None
    guest: Optional[ProfileSummary] = None
    viewerRole: Optional[str] = None
    actions: list[str] = []

    @classmethod
    def from_booking(
        cls,
        booking: Booking,
        viewer_role: Optional[str] = None,
        actions: Optional[list[str]] = None,
    ) -> "BookingResponse":
        return cls(
            id=booking.id,
            listingId=booking.listing_id,
            hostId=booking.host_id,
            guestId=booking.guest_id,
            scheduledAt=booking.scheduled_at,
            status=booking.status,
            priceCents=booking.price_cents,
            priceDisplay=format_price(booking.price_cents),
            duration=booking.duration,
            message=booking.message,
            meetingLink=booking.meeting_link,
            createdAt=booking.created_at,
            updatedAt=booking.updated_at,
            listing=ListingSummary.from_listing(booking.listing),
            host=ProfileSummary.from_profile(booking.host),
            guest=ProfileSummary.from_profile(booking.guest),
            viewerRole=viewer_role,
            actions=actions or [],
        )
