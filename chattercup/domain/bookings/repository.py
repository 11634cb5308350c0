"""Booking repository - Database operations for bookings"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import BOOKING_CONFIRMED, Booking


class BookingRepository:
    """Repository for booking database operations"""

    @staticmethod
    def _with_parties(query):
        return query.options(
            joinedload(Booking.listing),
            joinedload(Booking.host),
            joinedload(Booking.guest),
        )

    @staticmethod
    def get_booking_by_id(db: Session, booking_id: int) -> Optional[Booking]:
        """Get a booking with listing, host and guest loaded"""
        query = BookingRepository._with_parties(db.query(Booking))
        return query.filter(Booking.id == booking_id).first()

    @staticmethod
    def get_host_bookings(db: Session, host_id: int) -> list[Booking]:
        """Bookings where the profile is the host, soonest first"""
        query = BookingRepository._with_parties(db.query(Booking))
        return (
            query.filter(Booking.host_id == host_id)
            .order_by(Booking.scheduled_at.asc(), Booking.id.asc())
            .all()
        )

    @staticmethod
    def get_guest_bookings(db: Session, guest_id: int) -> list[Booking]:
        """Bookings where the profile is the guest, soonest first"""
        query = BookingRepository._with_parties(db.query(Booking))
        return (
            query.filter(Booking.guest_id == guest_id)
            .order_by(Booking.scheduled_at.asc(), Booking.id.asc())
            .all()
        )

    @staticmethod
    def get_confirmed_guest_booking(
        db: Session, listing_id: int, guest_id: int
    ) -> Optional[Booking]:
        """Latest confirmed booking a guest holds for a listing"""
        return (
            db.query(Booking)
            .filter(
                Booking.listing_id == listing_id,
                Booking.guest_id == guest_id,
                Booking.status == BOOKING_CONFIRMED,
            )
            .order_by(Booking.created_at.desc(), Booking.id.desc())
            .first()
        )

    @staticmethod
    def create_booking(db: Session, **booking_data) -> Booking:
        """Create a new booking"""
        booking = Booking(**booking_data)
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking

    @staticmethod
    def update_booking(db: Session, booking: Booking, **updates) -> Booking:
        """Update a booking with provided fields"""
        for key, value in updates.items():
            if hasattr(booking, key):
                setattr(booking, key, value)

        db.commit()
        db.refresh(booking)
        return booking
