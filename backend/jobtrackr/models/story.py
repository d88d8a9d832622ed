from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from sqlalchemy.types import JSON

from jobtrackr.core.base import Base


class Story(Base):
    """Legacy flat STAR story. Superseded by PrepItem(type="story")."""

    __tablename__ = "stories"

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title = Column(String(255), nullable=False)
    situation = Column(Text, nullable=False, default="", server_default="")
    task = Column(Text, nullable=False, default="", server_default="")
    action = Column(Text, nullable=False, default="", server_default="")
    result = Column(Text, nullable=False, default="", server_default="")
    tags = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    user = relationship("User", back_populates="stories")
