"""Profile service - Business logic for profile operations"""

import logging
import uuid
from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ... import storage
from ...config import MAX_PROFILE_PHOTO_BYTES
from ...models import Listing, Profile
from ...shared.validators import normalize_tags, validate_http_url
from ..listings.repository import ListingRepository
from .repository import ProfileRepository
from .schemas import ProfileUpdate

logger = logging.getLogger(__name__)

# Content type -> stored file extension
PHOTO_CONTENT_TYPES = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/webp": "webp",
    "image/gif": "gif",
}

UNSAFE_FILENAME_CHARS = ("..", "/", "\\", "<", ">", ":", '"', "|", "?", "*")

TEXT_FIELDS = {
    "fullName": "full_name",
    "headline": "headline",
    "bio": "bio",
    "location": "location",
    "industry": "industry",
    "sector": "sector",
    "company": "company",
}
URL_FIELDS = {"website": "website", "linkedin": "linkedin", "twitter": "twitter"}
TAG_FIELDS = {
    "interests": "interests",
    "topics": "topics",
    "favoriteCoffeeShops": "favorite_coffee_shops",
}
FLAG_FIELDS = {"offersChats": "offers_chats", "requestsChats": "requests_chats"}


class ProfileService:
    """Service layer for profile business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ProfileRepository()
        self.listings = ListingRepository()

    def _save(self, profile: Profile, **updates) -> Profile:
        try:
            return self.repo.update_profile(self.db, profile, **updates)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to update profile {profile.id}: {str(e)}")
            raise HTTPException(status_code=500, detail="Failed to update profile") from e

    def update_profile(self, data: ProfileUpdate, user: Profile) -> Profile:
        """Apply a partial update to the current user's profile"""
        payload = data.model_dump(exclude_unset=True)
        updates = {}

        for field, column in TEXT_FIELDS.items():
            if field in payload:
                updates[column] = (payload[field] or "").strip() or None

        for field, column in URL_FIELDS.items():
            if field not in payload:
                continue
            value = (payload[field] or "").strip() or None
            if value and not validate_http_url(value):
                logger.warning(f"⚠️ Invalid {field} URL for profile {user.id}")
                raise HTTPException(
                    status_code=400,
                    detail=f"Please enter a valid {field} URL including http:// or https://",
                )
            updates[column] = value

        for field, column in TAG_FIELDS.items():
            if field in payload:
                updates[column] = normalize_tags(payload[field])

        for field, column in FLAG_FIELDS.items():
            if payload.get(field) is not None:
                updates[column] = payload[field]

        if not updates:
            return user

        logger.info(f"📝 Updating profile {user.id}: {', '.join(sorted(updates))}")
        return self._save(user, **updates)

    def upload_photo(
        self, user: Profile, contents: bytes, filename: Optional[str], content_type: Optional[str]
    ) -> tuple[Profile, str]:
        """Store a profile photo in R2 and point the profile at its public URL"""
        logger.info(f"📤 Uploading profile photo for profile {user.id}")

        ext = PHOTO_CONTENT_TYPES.get(content_type or "")
        if not ext:
            raise HTTPException(
                status_code=400,
                detail="Invalid file type. Only PNG, JPEG, WebP and GIF images are allowed.",
            )

        if filename:
            if len(filename) > 255:
                raise HTTPException(status_code=400, detail="Filename too long - maximum 255 characters")
            for char in UNSAFE_FILENAME_CHARS:
                if char in filename:
                    logger.warning(f"❌ Dangerous character '{char}' detected in filename: '{filename}'")
                    raise HTTPException(status_code=400, detail="Invalid filename")

        if not contents:
            raise HTTPException(status_code=400, detail="Please choose an image to upload")

        if len(contents) > MAX_PROFILE_PHOTO_BYTES:
            raise HTTPException(status_code=400, detail="Image size should be less than 2MB")

        key = f"profile-photos/{user.firebase_uid}/{uuid.uuid4()}.{ext}"
        try:
            url = storage.upload_public_object(key, contents, content_type)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"❌ Profile photo upload failed for profile {user.id}: {str(e)}")
            raise HTTPException(status_code=500, detail="Error uploading image") from e

        return self._save(user, profile_photo_url=url), key

    def get_public_profile(self, profile_id: int) -> tuple[Profile, list[Listing]]:
        """A member's public profile and the listings they are currently offering"""
        profile = self.repo.get_profile_by_id(self.db, profile_id)
        if not profile:
            raise HTTPException(status_code=404, detail="Profile not found")
        listings = self.listings.get_host_listings(self.db, profile.id, active_only=True)
        return profile, listings
