"""Profile router - FastAPI endpoints for profile operations"""

import logging

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import Profile
from .schemas import PhotoUploadResponse, ProfileResponse, ProfileUpdate, PublicProfileResponse
from .service import ProfileService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profiles", tags=["Profiles"])


def get_profile_service(db: Session = Depends(get_db)) -> ProfileService:
    """Dependency injection for ProfileService"""
    return ProfileService(db)


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(current_user: Profile = Depends(get_current_user)):
    """Get the signed-in user's profile"""
    return ProfileResponse.from_profile(current_user)


@router.patch("/me", response_model=ProfileResponse)
async def update_my_profile(
    data: ProfileUpdate,
    current_user: Profile = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
):
    """Update the signed-in user's profile"""
    profile = service.update_profile(data, current_user)
    return ProfileResponse.from_profile(profile)


@router.post("/me/photo", response_model=PhotoUploadResponse)
async def upload_profile_photo(
    file: UploadFile = File(...),
    current_user: Profile = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
):
    """Upload a profile photo to R2 (public)"""
    contents = await file.read()
    profile, key = service.upload_photo(current_user, contents, file.filename, file.content_type)
    return PhotoUploadResponse(url=profile.profile_photo_url, key=key)


@router.get("/{profile_id}", response_model=PublicProfileResponse)
async def get_public_profile(
    profile_id: int,
    service: ProfileService = Depends(get_profile_service),
):
    """Public profile with the member's active listings"""
    profile, listings = service.get_public_profile(profile_id)
    return PublicProfileResponse.from_profile(profile, listings)
