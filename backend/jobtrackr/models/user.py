# jobtrackr/models/user.py
import logging

from sqlalchemy import Boolean, Column, DateTime, Integer, String, event, func
from sqlalchemy.orm import relationship
from sqlalchemy.types import JSON

from jobtrackr.core.base import Base
from jobtrackr.models.profile import Profile

logger = logging.getLogger(__name__)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)

    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    # Sign-up metadata from the identity provider (e.g. {"full_name": "..."}).
    user_metadata = Column(JSON, nullable=True)

    is_active = Column(Boolean, nullable=False, server_default="true", default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    profile = relationship(
        "Profile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )

    job_applications = relationship(
        "JobApplication",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    stories = relationship("Story", back_populates="user", cascade="all, delete-orphan")
    notes = relationship("Note", back_populates="user", cascade="all, delete-orphan")

    prep_folders = relationship(
        "PrepFolder",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    prep_items = relationship(
        "PrepItem",
        back_populates="user",
        cascade="all, delete-orphan",
    )


@event.listens_for(User, "after_insert")
def provision_profile(mapper, connection, target: User) -> None:
    """Every new identity gets exactly one profile whose id equals the user id."""
    meta = target.user_metadata or {}
    full_name = meta.get("full_name") if isinstance(meta, dict) else None
    connection.execute(
        Profile.__table__.insert().values(
            id=target.id,
            email=target.email,
            full_name=str(full_name or "").strip()[:100],
            theme="light",
            custom_columns=[],
        )
    )
    logger.info("Provisioned profile for user id=%s", target.id)
