from datetime import date, datetime

from chattercup.domain.listings.availability import (
    day_slots,
    generate_slots,
    resolve_offered_slot,
)

NOW = datetime(2030, 3, 10, 12, 15)


def test_day_slots_cover_business_hours_in_half_hours():
    slots = day_slots(date(2030, 3, 11))
    assert len(slots) == 16
    assert slots[0] == datetime(2030, 3, 11, 9, 0)
    assert slots[-1] == datetime(2030, 3, 11, 16, 30)


def test_day_slots_skip_times_already_gone():
    slots = day_slots(date(2030, 3, 10), NOW)
    assert slots[0] == datetime(2030, 3, 10, 12, 30)


def test_generate_slots_keeps_host_order_and_drops_bad_dates():
    availability = ["2030-03-12", "not-a-date", "2030-03-09", "2030-03-11", "2030-03-12"]
    slots = generate_slots(availability, NOW)

    assert [day["date"] for day in slots] == ["2030-03-12", "2030-03-11"]
    assert slots[0]["times"][:3] == ["09:00", "09:30", "10:00"]


def test_generate_slots_today_only_offers_remaining_times():
    slots = generate_slots(["2030-03-10"], NOW)
    assert slots == [
        {
            "date": "2030-03-10",
            "times": ["12:30", "13:00", "13:30", "14:00", "14:30", "15:00", "15:30", "16:00", "16:30"],
        }
    ]


def test_generate_slots_omits_a_day_with_nothing_left():
    late = datetime(2030, 3, 10, 17, 5)
    assert generate_slots(["2030-03-10"], late) == []


def test_resolve_offered_slot():
    availability = ["2030-03-12"]
    assert resolve_offered_slot(availability, "2030-03-12", "10:30", NOW) == datetime(
        2030, 3, 12, 10, 30
    )
    # Not on the half hour
    assert resolve_offered_slot(availability, "2030-03-12", "10:15", NOW) is None
    # Outside the day
    assert resolve_offered_slot(availability, "2030-03-12", "17:00", NOW) is None
    # Date not offered
    assert resolve_offered_slot(availability, "2030-03-13", "10:00", NOW) is None
    assert resolve_offered_slot(availability, None, "10:00", NOW) is None
    assert resolve_offered_slot(availability, "2030-03-12", "noon", NOW) is None
