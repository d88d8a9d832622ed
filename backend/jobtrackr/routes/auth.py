# jobtrackr/routes/auth.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from jobtrackr.core.config import settings
from jobtrackr.core.database import commit_or_fail, get_db
from jobtrackr.core.security import create_access_token, verify_password
from jobtrackr.schemas.auth import LoginIn, MessageOut, RegisterIn, TokenOut
from jobtrackr.services.users import get_user_by_email, provision_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=MessageOut)
def register(payload: RegisterIn, db: Session = Depends(get_db)):
    email = payload.email.strip().lower()

    if len(payload.password) < settings.PASSWORD_MIN_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters",
        )

    if get_user_by_email(db, email):
        raise HTTPException(status_code=409, detail="Email already registered")

    provision_user(db, email, payload.password, full_name=payload.full_name)
    commit_or_fail(db, message="Failed to create account")

    return {"message": "Registration successful"}


@router.post("/login", response_model=TokenOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    user = get_user_by_email(db, payload.email)
    if not user or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid email or password")
    if not user.is_active:
        raise HTTPException(status_code=403, detail="User is inactive")

    return {"access_token": create_access_token(user.id), "token_type": "bearer", "user_id": user.id}
