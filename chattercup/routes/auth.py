import logging
from typing import Optional

from fastapi import APIRouter, Depends

from ..auth import get_optional_user
from ..models import Profile
from ..schemas import ProfileSummary, SessionResponse
from ..shared.clock import utcnow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.get("/session", response_model=SessionResponse)
async def get_session(current_user: Optional[Profile] = Depends(get_optional_user)):
    """Session state for the navigation bar; anonymous visitors are not an error"""
    if current_user is None:
        return SessionResponse(authenticated=False, checkedAt=utcnow())

    return SessionResponse(
        authenticated=True,
        profile=ProfileSummary.from_profile(current_user),
        email=current_user.email,
        offersChats=bool(current_user.offers_chats),
        requestsChats=bool(current_user.requests_chats),
        checkedAt=utcnow(),
    )
