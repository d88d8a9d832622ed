# jobtrackr/services/users.py
"""
User management helpers.

Responsibilities:
- Provisioning local identities (the profile row follows via the User insert hook)
- User lookup by id or email
"""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.orm import Session

from jobtrackr.core.security import hash_password
from jobtrackr.models.user import User

logger = logging.getLogger(__name__)


def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Look up a user by email address."""
    return db.query(User).filter(User.email == email.strip().lower()).first()


def provision_user(
    db: Session,
    email: str,
    password: str,
    *,
    full_name: str | None = None,
) -> User:
    """
    Create a new identity. Flushes but does not commit; the caller owns the
    transaction.

    Raises:
        ValueError: If email or password is empty
    """
    if not email:
        raise ValueError("email is required")
    if not password:
        raise ValueError("password is required")

    normalized_email = email.strip().lower()
    user = User(
        email=normalized_email,
        password_hash=hash_password(password),
        user_metadata={"full_name": (full_name or "").strip()},
        is_active=True,
    )
    db.add(user)
    db.flush()

    logger.info("Provisioned new user: id=%s, email=%s", user.id, normalized_email)
    return user
