"""Booking service - Business logic for the booking workflow"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import BOOKING_PENDING, Booking, Profile
from ...shared.clock import utcnow
from ...shared.validators import parse_iso_date, parse_slot_time, validate_http_url
from ..listings.availability import resolve_offered_slot
from ..listings.repository import ListingRepository
from .repository import BookingRepository
from .rules import TERMINAL_STATUSES, available_actions, check_status_change, viewer_role
from .schemas import BookingCreate, MeetingLinkUpdate, ScheduleCallRequest

logger = logging.getLogger(__name__)


class BookingService:
    """Service layer for booking business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = BookingRepository()
        self.listings = ListingRepository()

    def _save(self, booking: Booking, failure_message: str, **updates) -> Booking:
        try:
            return self.repo.update_booking(self.db, booking, **updates)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to update booking {booking.id}: {str(e)}")
            raise HTTPException(status_code=500, detail=failure_message) from e

    def get_booking_or_404(self, booking_id: int) -> Booking:
        booking = self.repo.get_booking_by_id(self.db, booking_id)
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")
        return booking

    def get_booking(self, booking_id: int, viewer: Profile) -> Booking:
        """Get a booking; only its host and guest may see it"""
        booking = self.get_booking_or_404(booking_id)
        if viewer.id not in (booking.host_id, booking.guest_id):
            logger.warning(f"🚫 Profile {viewer.id} tried to view booking {booking_id}")
            raise HTTPException(
                status_code=403, detail="You don't have permission to view this booking"
            )
        return booking

    def describe(self, booking: Booking, viewer: Profile, now: Optional[datetime] = None) -> dict:
        """Viewer role and available actions for a booking"""
        return {
            "viewer_role": viewer_role(booking, viewer.id),
            "actions": available_actions(booking, viewer.id, now or utcnow()),
        }

    def create_booking(
        self, listing_id: int, data: BookingCreate, guest: Profile, now: Optional[datetime] = None
    ) -> Booking:
        """Request a session on a listing; host, price and duration come from the listing"""
        now = now or utcnow()

        if not data.date or not data.time:
            raise HTTPException(
                status_code=400, detail="Please select both date and time for your booking"
            )
        try:
            scheduled_at = datetime.combine(parse_iso_date(data.date), parse_slot_time(data.time))
        except ValueError as e:
            raise HTTPException(status_code=400, detail="Invalid date or time selected") from e

        if scheduled_at <= now:
            raise HTTPException(status_code=400, detail="Please select a future date and time")

        listing = self.listings.get_listing_by_id(self.db, listing_id)
        if not listing or not listing.is_active:
            raise HTTPException(status_code=404, detail="Listing not found")

        if listing.host_id == guest.id:
            raise HTTPException(status_code=400, detail="You cannot book your own listing")

        logger.info(f"📥 Booking request: guest {guest.id} -> listing {listing.id} at {scheduled_at}")
        try:
            booking = self.repo.create_booking(
                self.db,
                listing_id=listing.id,
                host_id=listing.host_id,
                guest_id=guest.id,
                scheduled_at=scheduled_at,
                status=BOOKING_PENDING,
                price_cents=listing.price_cents,
                duration=listing.duration,
                message=(data.message or "").strip() or None,
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to create booking: {str(e)}")
            raise HTTPException(
                status_code=500, detail="Failed to create booking. Please try again."
            ) from e

        return self.get_booking_or_404(booking.id)

    def update_status(
        self, booking_id: int, new_status: str, actor: Profile, now: Optional[datetime] = None
    ) -> Booking:
        """Confirm, decline/cancel or complete a booking"""
        booking = self.get_booking_or_404(booking_id)
        check_status_change(booking, new_status, actor.id, now or utcnow())

        previous = booking.status
        booking = self._save(booking, "Failed to update booking status", status=new_status)
        logger.info(f"✅ Booking {booking_id}: {previous} -> {new_status} by profile {actor.id}")
        return booking

    def set_meeting_link(self, booking_id: int, data: MeetingLinkUpdate, actor: Profile) -> Booking:
        """Attach the call link to a booking (host only)"""
        booking = self.get_booking_or_404(booking_id)
        if actor.id != booking.host_id:
            logger.warning(f"🚫 Profile {actor.id} tried to set meeting link on booking {booking_id}")
            raise HTTPException(status_code=403, detail="Only the host can add a meeting link")

        if booking.status in TERMINAL_STATUSES:
            raise HTTPException(
                status_code=409,
                detail=f"Cannot add a meeting link to a {booking.status} booking",
            )

        link = (data.meetingLink or "").strip()
        if not link:
            raise HTTPException(status_code=400, detail="Please provide a meeting link")
        if not validate_http_url(link):
            raise HTTPException(
                status_code=400, detail="Please enter a valid URL including http:// or https://"
            )

        booking = self._save(booking, "Failed to update meeting link", meeting_link=link)
        logger.info(f"🔗 Meeting link set on booking {booking_id}")
        return booking

    def schedule_call(
        self,
        listing_id: int,
        data: ScheduleCallRequest,
        guest: Profile,
        now: Optional[datetime] = None,
    ) -> Booking:
        """Move a guest's confirmed booking to one of the listing's offered slots"""
        now = now or utcnow()

        listing = self.listings.get_listing_by_id(self.db, listing_id)
        if not listing:
            raise HTTPException(status_code=404, detail="Listing not found")

        booking = self.repo.get_confirmed_guest_booking(self.db, listing.id, guest.id)
        if not booking:
            raise HTTPException(
                status_code=403,
                detail="You need a confirmed booking for this listing before scheduling a call",
            )

        scheduled_at = resolve_offered_slot(listing.availability or [], data.date, data.time, now)
        if scheduled_at is None:
            raise HTTPException(status_code=400, detail="Please select a date and time")

        booking = self._save(booking, "Failed to schedule call", scheduled_at=scheduled_at)
        logger.info(f"📅 Booking {booking.id} scheduled for {scheduled_at}")
        return self.get_booking_or_404(booking.id)
