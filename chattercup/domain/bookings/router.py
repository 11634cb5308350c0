"""Booking router - FastAPI endpoints for the booking workflow"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import Profile
from .schemas import (
    BookingCreate,
    BookingResponse,
    BookingStatusUpdate,
    MeetingLinkUpdate,
    ScheduleCallRequest,
)
from .service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Bookings"])


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db)


def _respond(service: BookingService, booking, viewer: Profile) -> BookingResponse:
    state = service.describe(booking, viewer)
    return BookingResponse.from_booking(booking, state["viewer_role"], state["actions"])


@router.post("/listings/{listing_id}/bookings", response_model=BookingResponse, status_code=201)
async def create_booking(
    listing_id: int,
    data: BookingCreate,
    current_user: Profile = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """Request a booking on a listing; it starts as pending"""
    booking = service.create_booking(listing_id, data, current_user)
    return _respond(service, booking, current_user)


@router.post("/listings/{listing_id}/schedule", response_model=BookingResponse)
async def schedule_call(
    listing_id: int,
    data: ScheduleCallRequest,
    current_user: Profile = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """Pick the call time for a confirmed booking"""
    booking = service.schedule_call(listing_id, data, current_user)
    return _respond(service, booking, current_user)


@router.get("/bookings/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: int,
    current_user: Profile = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """Get booking details for its host or guest"""
    booking = service.get_booking(booking_id, current_user)
    return _respond(service, booking, current_user)


@router.post("/bookings/{booking_id}/status", response_model=BookingResponse)
async def update_booking_status(
    booking_id: int,
    data: BookingStatusUpdate,
    current_user: Profile = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """Confirm, decline, cancel or complete a booking"""
    booking = service.update_status(booking_id, data.status, current_user)
    return _respond(service, booking, current_user)


@router.put("/bookings/{booking_id}/meeting-link", response_model=BookingResponse)
async def update_meeting_link(
    booking_id: int,
    data: MeetingLinkUpdate,
    current_user: Profile = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """Set the meeting link for a booking (host only)"""
    booking = service.set_meeting_link(booking_id, data, current_user)
    return _respond(service, booking, current_user)
