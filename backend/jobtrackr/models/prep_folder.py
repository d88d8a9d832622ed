from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from jobtrackr.core.base import Base


class PrepFolder(Base):
    __tablename__ = "prep_folders"

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name = Column(String(255), nullable=False)

    # NULL = root. Multiple roots per user are allowed.
    parent_id = Column(
        Integer,
        ForeignKey("prep_folders.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    user = relationship("User", back_populates="prep_folders")

    parent = relationship("PrepFolder", remote_side=[id], back_populates="children")

    # Deleting a folder deletes its whole subtree.
    children = relationship(
        "PrepFolder",
        back_populates="parent",
        cascade="all",
    )

    items = relationship(
        "PrepItem",
        back_populates="folder",
        cascade="all, delete-orphan",
        order_by="desc(PrepItem.updated_at)",
    )
