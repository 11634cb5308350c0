from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base

LISTING_FORMATS = ("virtual", "in-person", "both")

BOOKING_PENDING = "pending"
BOOKING_CONFIRMED = "confirmed"
BOOKING_COMPLETED = "completed"
BOOKING_CANCELED = "canceled"


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, index=True)
    firebase_uid = Column(String(255), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    full_name = Column(String(255), nullable=True)
    headline = Column(String(255), nullable=True)  # "title" on the profile page
    bio = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    website = Column(String(500), nullable=True)
    linkedin = Column(String(500), nullable=True)
    twitter = Column(String(500), nullable=True)
    industry = Column(String(255), nullable=True)
    sector = Column(String(255), nullable=True)
    company = Column(String(255), nullable=True)
    interests = Column(JSON, default=list, nullable=False)
    topics = Column(JSON, default=list, nullable=False)
    favorite_coffee_shops = Column(JSON, default=list, nullable=False)
    # Role flags
    offers_chats = Column(Boolean, default=False, nullable=False)
    requests_chats = Column(Boolean, default=False, nullable=False)
    profile_photo_url = Column(String(500), nullable=True)  # public R2 URL
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    listings = relationship("Listing", back_populates="host", cascade="all, delete-orphan")


class Listing(Base):
    __tablename__ = "listings"

    id = Column(Integer, primary_key=True, index=True)
    host_id = Column(Integer, ForeignKey("profiles.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    price_cents = Column(Integer, nullable=False, default=0)
    duration = Column(Integer, nullable=False, default=30)  # minutes
    format = Column(String(20), nullable=False, default="virtual")  # virtual, in-person, both
    location = Column(String(255), nullable=True)
    meeting_link = Column(String(500), nullable=True)
    topics = Column(JSON, default=list, nullable=False)
    availability = Column(JSON, default=list, nullable=False)  # ISO dates, YYYY-MM-DD
    is_active = Column(Boolean, default=True, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    host = relationship("Profile", back_populates="listings")
    bookings = relationship("Booking", back_populates="listing")


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    listing_id = Column(Integer, ForeignKey("listings.id"), nullable=False, index=True)
    host_id = Column(Integer, ForeignKey("profiles.id"), nullable=False, index=True)
    guest_id = Column(Integer, ForeignKey("profiles.id"), nullable=False, index=True)
    scheduled_at = Column(DateTime, nullable=False, index=True)  # naive UTC
    status = Column(String(20), default=BOOKING_PENDING, nullable=False)
    # Snapshot of the listing at booking time
    price_cents = Column(Integer, nullable=False, default=0)
    duration = Column(Integer, nullable=False, default=30)
    message = Column(Text, nullable=True)
    meeting_link = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    listing = relationship("Listing", back_populates="bookings")
    host = relationship("Profile", foreign_keys=[host_id])
    guest = relationship("Profile", foreign_keys=[guest_id])
