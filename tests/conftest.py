import os

# Must be set before chattercup.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["FIREBASE_PROJECT_ID"] = "chattercup-test"
os.environ["R2_BUCKET_NAME"] = "profile-pictures"

from datetime import date, timedelta

import pytest
from botocore.exceptions import ClientError
from fastapi import HTTPException
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from chattercup import auth, config, storage
from chattercup.database import Base, engine, get_db
from chattercup.main import app

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def future_date(days: int = 7) -> str:
    return (date.today() + timedelta(days=days)).isoformat()


async def fake_verify_firebase_token(token: str) -> dict:
    """Tokens shaped test.<uid>.sig verify as <uid>"""
    prefix, uid, _ = token.split(".")
    if prefix != "test" or not uid:
        raise HTTPException(status_code=401, detail="Invalid token signature")
    return {
        "sub": uid,
        "email": f"{uid}@example.com",
        "name": uid.replace("_", " ").title(),
        "auth_time": 0,
    }


class FakeR2Client:
    def __init__(self):
        self.put_calls = []
        self.fail = False

    def put_object(self, **kwargs):
        if self.fail:
            raise ClientError({"Error": {"Code": "500", "Message": "R2 unavailable"}}, "PutObject")
        self.put_calls.append(kwargs)
        return {"ETag": '"fake"'}


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session, monkeypatch):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    monkeypatch.setattr(auth, "verify_firebase_token", fake_verify_firebase_token)

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _headers(uid: str) -> dict:
        return {"Authorization": f"Bearer test.{uid}.sig"}

    return _headers


@pytest.fixture
def fake_r2(monkeypatch):
    fake = FakeR2Client()
    monkeypatch.setattr(storage, "get_r2_client", lambda: fake)
    monkeypatch.setattr(config, "R2_PUBLIC_BASE_URL", "https://cdn.chattercup.test")
    return fake


@pytest.fixture
def listing_payload():
    def _payload(**overrides) -> dict:
        payload = {
            "title": "Breaking into product management",
            "description": "Coffee and a candid chat about PM interviews.",
            "priceCents": 2500,
            "duration": 30,
            "format": "virtual",
            "meetingLink": "https://meet.example.com/pm-chat",
            "topics": ["Product", "Careers"],
            "availability": [future_date(7), future_date(8)],
        }
        payload.update(overrides)
        return payload

    return _payload


@pytest.fixture
def create_listing(client, auth_headers, listing_payload):
    def _create(host_uid: str = "host", **overrides) -> dict:
        response = client.post(
            "/listings", json=listing_payload(**overrides), headers=auth_headers(host_uid)
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def create_booking(client, auth_headers):
    def _create(listing_id: int, guest_uid: str = "guest", day: str = None, at: str = "10:00"):
        response = client.post(
            f"/listings/{listing_id}/bookings",
            json={"date": day or future_date(7), "time": at, "message": "Hi!"},
            headers=auth_headers(guest_uid),
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create
