from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from jobtrackr.core.base import Base


class PrepItemTag(Base):
    __tablename__ = "prep_item_tags"

    id = Column(Integer, primary_key=True, index=True)

    item_id = Column(
        Integer,
        ForeignKey("prep_items.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    tag = Column(String(64), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    item = relationship("PrepItem", back_populates="tag_rows")

    __table_args__ = (
        UniqueConstraint("item_id", "tag", name="uq_prep_item_tags_item_id_tag"),
        Index("ix_prep_item_tags_item_id_tag", "item_id", "tag"),
    )
