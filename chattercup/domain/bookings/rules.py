"""
Booking status rules.

    pending   -> confirmed | canceled
    confirmed -> canceled  | completed

completed and canceled are terminal. The host confirms, declines and
completes; either party may cancel while the session is still ahead.
"""

from datetime import datetime
from typing import Optional

from fastapi import HTTPException

from ...models import (
    BOOKING_CANCELED,
    BOOKING_COMPLETED,
    BOOKING_CONFIRMED,
    BOOKING_PENDING,
    Booking,
)

TRANSITIONS = {
    BOOKING_PENDING: {BOOKING_CONFIRMED, BOOKING_CANCELED},
    BOOKING_CONFIRMED: {BOOKING_CANCELED, BOOKING_COMPLETED},
    BOOKING_COMPLETED: set(),
    BOOKING_CANCELED: set(),
}

TERMINAL_STATUSES = (BOOKING_COMPLETED, BOOKING_CANCELED)
SETTABLE_STATUSES = (BOOKING_CONFIRMED, BOOKING_CANCELED, BOOKING_COMPLETED)


def viewer_role(booking: Booking, viewer_id: Optional[int]) -> Optional[str]:
    if viewer_id is None:
        return None
    if viewer_id == booking.host_id:
        return "host"
    if viewer_id == booking.guest_id:
        return "guest"
    return None


def is_past(booking: Booking, now: datetime) -> bool:
    return booking.scheduled_at < now


def available_actions(booking: Booking, viewer_id: Optional[int], now: datetime) -> list[str]:
    """Actions the viewer may take on the booking right now"""
    is_host = viewer_id is not None and viewer_id == booking.host_id
    is_guest = viewer_id is not None and viewer_id == booking.guest_id
    past = is_past(booking, now)
    status = booking.status

    actions = []
    if is_host and status == BOOKING_PENDING:
        actions += ["confirm", "decline"]

    if is_host and status == BOOKING_CONFIRMED:
        if past:
            actions.append("complete")
        else:
            if not booking.meeting_link:
                actions.append("add_meeting_link")
            actions.append("cancel")

    if is_guest and status in (BOOKING_PENDING, BOOKING_CONFIRMED) and not past:
        actions.append("cancel")

    if (is_host or is_guest) and status == BOOKING_CONFIRMED and booking.meeting_link and not past:
        actions.append("join")

    return actions


def check_status_change(booking: Booking, new_status: str, actor_id: int, now: datetime) -> None:
    """
    Raise HTTPException unless actor may move booking to new_status now.
    Role checks run before transition and time checks.
    """
    if new_status not in SETTABLE_STATUSES:
        raise HTTPException(status_code=400, detail=f"Invalid booking status: {new_status}")

    is_host = actor_id == booking.host_id
    is_guest = actor_id == booking.guest_id

    if new_status == BOOKING_CONFIRMED and not is_host:
        raise HTTPException(status_code=403, detail="Only the host can confirm bookings")
    if new_status == BOOKING_COMPLETED and not is_host:
        raise HTTPException(status_code=403, detail="Only the host can complete bookings")
    if new_status == BOOKING_CANCELED and not (is_host or is_guest):
        raise HTTPException(status_code=403, detail="Only the host or guest can cancel bookings")

    if new_status not in TRANSITIONS.get(booking.status, set()):
        raise HTTPException(
            status_code=409,
            detail=f"Cannot change a {booking.status} booking to {new_status}",
        )

    past = is_past(booking, now)
    if new_status == BOOKING_CANCELED and past:
        # A host may still decline a stale pending request
        if is_guest or booking.status == BOOKING_CONFIRMED:
            raise HTTPException(status_code=409, detail="This booking can no longer be canceled")
    if new_status == BOOKING_COMPLETED and not past:
        raise HTTPException(
            status_code=409,
            detail="A booking can only be completed after its scheduled time",
        )
