from datetime import date, timedelta

import pytest


def future_date(days: int) -> str:
    return (date.today() + timedelta(days=days)).isoformat()


def test_create_listing(client, auth_headers, listing_payload):
    response = client.post(
        "/listings",
        json=listing_payload(topics=[" Product ", "Careers", "Product"]),
        headers=auth_headers("host"),
    )
    assert response.status_code == 201
    body = response.json()
    assert body["title"] == "Breaking into product management"
    assert body["priceCents"] == 2500
    assert body["priceDisplay"] == "$25.00"
    assert body["topics"] == ["Product", "Careers"]
    assert body["isActive"] is True
    assert body["meetingLink"] == "https://meet.example.com/pm-chat"
    assert body["host"]["fullName"] == "Host"


@pytest.mark.parametrize(
    "overrides,detail",
    [
        ({"title": "   "}, "Title is required"),
        ({"description": ""}, "Description is required"),
        ({"priceCents": None}, "Please enter a valid price"),
        ({"priceCents": -100}, "Please enter a valid price"),
        ({"format": "in-person", "location": ""}, "Location is required for in-person meetings"),
        ({"format": "both", "location": None}, "Location is required for in-person meetings"),
        ({"meetingLink": ""}, "Meeting link is required for virtual meetings"),
        ({"meetingLink": "zoom.us/j/123"}, "Please enter a valid URL including http:// or https://"),
        ({"topics": []}, "Please add at least one topic"),
        ({"topics": ["  "]}, "Please add at least one topic"),
        ({"availability": []}, "Please add at least one availability slot"),
        ({"availability": ["next tuesday"]}, "Invalid availability date: next tuesday"),
        ({"format": "phone"}, "Format must be one of: virtual, in-person, both"),
        ({"duration": 0}, "Please enter a valid duration"),
    ],
)
def test_create_listing_validation(client, auth_headers, listing_payload, overrides, detail):
    response = client.post("/listings", json=listing_payload(**overrides), headers=auth_headers("host"))
    assert response.status_code == 400
    assert response.json()["detail"] == detail


def test_validation_reports_first_problem(client, auth_headers, listing_payload):
    response = client.post(
        "/listings",
        json=listing_payload(title="", description="", topics=[]),
        headers=auth_headers("host"),
    )
    assert response.json()["detail"] == "Title is required"


def test_in_person_listing_needs_no_meeting_link(client, auth_headers, listing_payload):
    response = client.post(
        "/listings",
        json=listing_payload(format="in-person", location="Blue Bottle, Hayes Valley", meetingLink=None),
        headers=auth_headers("host"),
    )
    assert response.status_code == 201
    assert response.json()["location"] == "Blue Bottle, Hayes Valley"


def test_create_listing_requires_auth(client, listing_payload):
    response = client.post("/listings", json=listing_payload())
    assert response.status_code in (401, 403)


def test_meeting_link_hidden_from_other_viewers(client, auth_headers, create_listing):
    listing = create_listing()

    anonymous = client.get(f"/listings/{listing['id']}").json()
    assert anonymous["meetingLink"] is None

    other = client.get(f"/listings/{listing['id']}", headers=auth_headers("guest")).json()
    assert other["meetingLink"] is None

    owner = client.get(f"/listings/{listing['id']}", headers=auth_headers("host")).json()
    assert owner["meetingLink"] == "https://meet.example.com/pm-chat"


def test_get_missing_listing(client):
    response = client.get("/listings/9999")
    assert response.status_code == 404
    assert response.json()["detail"] == "Listing not found"


def test_update_listing(client, auth_headers, create_listing):
    listing = create_listing()
    response = client.patch(
        f"/listings/{listing['id']}",
        json={"title": "PM office hours", "priceCents": 1250},
        headers=auth_headers("host"),
    )
    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "PM office hours"
    assert body["priceDisplay"] == "$12.50"
    assert body["description"] == listing["description"]


def test_only_host_can_update_listing(client, auth_headers, create_listing):
    listing = create_listing()
    response = client.patch(
        f"/listings/{listing['id']}", json={"title": "Mine now"}, headers=auth_headers("guest")
    )
    assert response.status_code == 403
    assert response.json()["detail"] == "Only the host can edit this listing"


def test_update_validates_merged_listing(client, auth_headers, create_listing):
    listing = create_listing()
    response = client.patch(
        f"/listings/{listing['id']}", json={"format": "both"}, headers=auth_headers("host")
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Location is required for in-person meetings"


def test_inactive_listing_only_visible_to_host(client, auth_headers, create_listing):
    listing = create_listing()
    client.patch(f"/listings/{listing['id']}", json={"isActive": False}, headers=auth_headers("host"))

    assert client.get(f"/listings/{listing['id']}").status_code == 404
    assert client.get(f"/listings/{listing['id']}", headers=auth_headers("guest")).status_code == 404

    owner = client.get(f"/listings/{listing['id']}", headers=auth_headers("host"))
    assert owner.status_code == 200
    assert owner.json()["isActive"] is False


def test_my_listings_include_inactive(client, auth_headers, create_listing):
    first = create_listing()
    second = create_listing(title="Second chat")
    create_listing(host_uid="someone_else")
    client.patch(f"/listings/{first['id']}", json={"isActive": False}, headers=auth_headers("host"))

    response = client.get("/listings/mine", headers=auth_headers("host"))
    assert response.status_code == 200
    ids = [listing["id"] for listing in response.json()]
    assert sorted(ids) == sorted([first["id"], second["id"]])


def test_listing_slots(client, create_listing):
    listing = create_listing(availability=[future_date(9), "2001-01-01", future_date(9)])
    response = client.get(f"/listings/{listing['id']}/slots")
    assert response.status_code == 200
    body = response.json()
    assert body["listingId"] == listing["id"]
    assert body["duration"] == 30
    assert len(body["slots"]) == 1
    assert body["slots"][0]["date"] == future_date(9)
    assert body["slots"][0]["times"][0] == "09:00"
    assert len(body["slots"][0]["times"]) == 16
