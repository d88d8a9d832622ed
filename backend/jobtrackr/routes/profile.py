from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobtrackr.core.database import commit_or_fail, get_db
from jobtrackr.dependencies.auth import get_current_user
from jobtrackr.models.profile import Profile
from jobtrackr.models.user import User
from jobtrackr.schemas.profile import ProfileOut, ProfileUpdate
from jobtrackr.services.ownership import get_owned_or_404

router = APIRouter(prefix="/profile", tags=["profile"], dependencies=[Depends(get_current_user)])


@router.get("", response_model=ProfileOut)
def get_profile(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return get_owned_or_404(db, Profile, user.id, user.id, detail="Profile not found")


@router.put("", response_model=ProfileOut)
def update_profile(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    profile = get_owned_or_404(db, Profile, user.id, user.id, detail="Profile not found")

    profile.full_name = payload.full_name.strip()
    profile.theme = payload.theme
    profile.custom_columns = list(payload.custom_columns)

    commit_or_fail(db, message="Failed to update profile")
    db.refresh(profile)
    return profile
