from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from sqlalchemy.types import JSON

from jobtrackr.core.base import Base


class Profile(Base):
    __tablename__ = "profiles"

    # The profile id IS the owning user's id (one profile per user).
    __owner_column__ = "id"

    id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )

    email = Column(String(255), nullable=False)
    full_name = Column(String(100), nullable=False, default="", server_default="")
    # light | dark
    theme = Column(String(20), nullable=False, default="light", server_default="light")
    # User-defined columns for the jobs table, e.g. [{"key": "salary", "label": "Salary"}]
    custom_columns = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    user = relationship("User", back_populates="profile")
