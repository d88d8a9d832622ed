from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from jobtrackr.core.base import Base

ITEM_TYPE_STORY = "story"
ITEM_TYPE_NOTE = "note"
ITEM_TYPES = (ITEM_TYPE_STORY, ITEM_TYPE_NOTE)


class PrepItem(Base):
    """
    A story or a note inside a prep folder.

    Both kinds share one row shape: STAR columns are only meaningful for stories,
    `content` only for notes. The API exposes them as two separate payload shapes
    (see jobtrackr.schemas.prep_item).
    """

    __tablename__ = "prep_items"

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    folder_id = Column(
        Integer,
        ForeignKey("prep_folders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # story | note; fixed at creation
    type = Column(String(16), nullable=False, index=True)

    title = Column(String(255), nullable=False)

    situation = Column(Text, nullable=False, default="", server_default="")
    task = Column(Text, nullable=False, default="", server_default="")
    action = Column(Text, nullable=False, default="", server_default="")
    result = Column(Text, nullable=False, default="", server_default="")

    content = Column(Text, nullable=False, default="", server_default="")

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    user = relationship("User", back_populates="prep_items")
    folder = relationship("PrepFolder", back_populates="items")

    tag_rows = relationship(
        "PrepItemTag",
        back_populates="item",
        cascade="all, delete-orphan",
        order_by="asc(PrepItemTag.id)",
        lazy="selectin",
    )

    __table_args__ = (
        CheckConstraint("type IN ('story', 'note')", name="ck_prep_items_type"),
    )

    @property
    def tags(self) -> list[str]:
        rows = getattr(self, "tag_rows", None) or []
        out: list[str] = []
        for r in rows:
            t = getattr(r, "tag", None)
            if isinstance(t, str) and t:
                out.append(t)
        return out
