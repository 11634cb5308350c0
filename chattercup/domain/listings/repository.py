"""Listing repository - Database operations for listings"""

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from ...models import Listing, Profile


class ListingRepository:
    """Repository for listing database operations"""

    @staticmethod
    def get_listing_by_id(db: Session, listing_id: int) -> Optional[Listing]:
        """Get a listing with its host loaded"""
        return (
            db.query(Listing)
            .options(joinedload(Listing.host))
            .filter(Listing.id == listing_id)
            .first()
        )

    @staticmethod
    def get_host_listings(db: Session, host_id: int, active_only: bool = False) -> list[Listing]:
        """Get all listings owned by a host, newest first"""
        query = db.query(Listing).filter(Listing.host_id == host_id)
        if active_only:
            query = query.filter(Listing.is_active.is_(True))
        return query.order_by(Listing.created_at.desc(), Listing.id.desc()).all()

    @staticmethod
    def search_active_listings(db: Session, search: Optional[str] = None) -> list[Listing]:
        """Active listings, newest first, optionally matching title, description or host name"""
        query = (
            db.query(Listing)
            .join(Profile, Listing.host_id == Profile.id)
            .options(joinedload(Listing.host))
            .filter(Listing.is_active.is_(True))
        )

        if search:
            term = search.strip().lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
            search_term = f"%{term}%"
            query = query.filter(
                or_(
                    Listing.title.ilike(search_term, escape="\\"),
                    Listing.description.ilike(search_term, escape="\\"),
                    Profile.full_name.ilike(search_term, escape="\\"),
                )
            )

        return query.order_by(Listing.created_at.desc(), Listing.id.desc()).all()

    @staticmethod
    def create_listing(db: Session, host_id: int, **listing_data) -> Listing:
        """Create a new listing"""
        listing = Listing(host_id=host_id, **listing_data)
        db.add(listing)
        db.commit()
        db.refresh(listing)
        return listing

    @staticmethod
    def update_listing(db: Session, listing: Listing, **updates) -> Listing:
        """Update a listing with provided fields"""
        for key, value in updates.items():
            if hasattr(listing, key):
                setattr(listing, key, value)

        db.commit()
        db.refresh(listing)
        return listing
