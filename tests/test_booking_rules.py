from datetime import datetime, timedelta

import pytest
from fastapi import HTTPException

from chattercup.domain.bookings.rules import available_actions, check_status_change, viewer_role
from chattercup.models import Booking

HOST, GUEST, STRANGER = 1, 2, 3
NOW = datetime(2030, 3, 10, 12, 0)
FUTURE = NOW + timedelta(days=1)
PAST = NOW - timedelta(days=1)


def make_booking(status="pending", scheduled_at=FUTURE, meeting_link=None):
    return Booking(
        host_id=HOST,
        guest_id=GUEST,
        status=status,
        scheduled_at=scheduled_at,
        meeting_link=meeting_link,
    )


def test_viewer_role():
    booking = make_booking()
    assert viewer_role(booking, HOST) == "host"
    assert viewer_role(booking, GUEST) == "guest"
    assert viewer_role(booking, STRANGER) is None
    assert viewer_role(booking, None) is None


@pytest.mark.parametrize(
    "status,scheduled_at,link,viewer,expected",
    [
        ("pending", FUTURE, None, HOST, ["confirm", "decline"]),
        ("pending", FUTURE, None, GUEST, ["cancel"]),
        ("pending", PAST, None, HOST, ["confirm", "decline"]),
        ("pending", PAST, None, GUEST, []),
        ("confirmed", FUTURE, None, HOST, ["add_meeting_link", "cancel"]),
        ("confirmed", FUTURE, "https://meet.example.com/x", HOST, ["cancel", "join"]),
        ("confirmed", FUTURE, "https://meet.example.com/x", GUEST, ["cancel", "join"]),
        ("confirmed", PAST, "https://meet.example.com/x", HOST, ["complete"]),
        ("confirmed", PAST, None, GUEST, []),
        ("completed", PAST, None, HOST, []),
        ("canceled", FUTURE, None, GUEST, []),
        ("confirmed", FUTURE, "https://meet.example.com/x", STRANGER, []),
    ],
)
def test_available_actions(status, scheduled_at, link, viewer, expected):
    booking = make_booking(status, scheduled_at, link)
    assert available_actions(booking, viewer, NOW) == expected


@pytest.mark.parametrize(
    "status,new_status,actor,scheduled_at",
    [
        ("pending", "confirmed", HOST, FUTURE),
        ("pending", "canceled", HOST, FUTURE),
        ("pending", "canceled", GUEST, FUTURE),
        ("pending", "canceled", HOST, PAST),
        ("confirmed", "canceled", GUEST, FUTURE),
        ("confirmed", "canceled", HOST, FUTURE),
        ("confirmed", "completed", HOST, PAST),
    ],
)
def test_allowed_status_changes(status, new_status, actor, scheduled_at):
    check_status_change(make_booking(status, scheduled_at), new_status, actor, NOW)


@pytest.mark.parametrize(
    "status,new_status,actor,scheduled_at,code,detail",
    [
        ("pending", "archived", HOST, FUTURE, 400, "Invalid booking status: archived"),
        ("pending", "pending", HOST, FUTURE, 400, "Invalid booking status: pending"),
        ("pending", "confirmed", GUEST, FUTURE, 403, "Only the host can confirm bookings"),
        ("confirmed", "completed", GUEST, PAST, 403, "Only the host can complete bookings"),
        ("pending", "canceled", STRANGER, FUTURE, 403, "Only the host or guest can cancel bookings"),
        ("pending", "completed", HOST, PAST, 409, "Cannot change a pending booking to completed"),
        ("canceled", "confirmed", HOST, FUTURE, 409, "Cannot change a canceled booking to confirmed"),
        ("completed", "canceled", GUEST, PAST, 409, "Cannot change a completed booking to canceled"),
        ("pending", "canceled", GUEST, PAST, 409, "This booking can no longer be canceled"),
        ("confirmed", "canceled", HOST, PAST, 409, "This booking can no longer be canceled"),
        (
            "confirmed",
            "completed",
            HOST,
            FUTURE,
            409,
            "A booking can only be completed after its scheduled time",
        ),
    ],
)
def test_rejected_status_changes(status, new_status, actor, scheduled_at, code, detail):
    with pytest.raises(HTTPException) as exc_info:
        check_status_change(make_booking(status, scheduled_at), new_status, actor, NOW)
    assert exc_info.value.status_code == code
    assert exc_info.value.detail == detail
