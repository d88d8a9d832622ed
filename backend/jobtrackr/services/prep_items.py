from __future__ import annotations

from typing import Union

from fastapi import HTTPException
from sqlalchemy.orm import Session

from jobtrackr.models.prep_item import ITEM_TYPE_STORY, PrepItem
from jobtrackr.schemas.prep_item import NoteIn, NoteOut, StoryIn, StoryOut
from jobtrackr.services.ownership import owned_query
from jobtrackr.services.tags import normalize_tags, set_item_tags
from jobtrackr.services.validation import require_title

STAR_FIELDS = ("situation", "task", "action", "result")


def serialize_item(item: PrepItem) -> Union[StoryOut, NoteOut]:
    if item.type == ITEM_TYPE_STORY:
        return StoryOut.model_validate(item)
    return NoteOut.model_validate(item)


def apply_item_payload(item: PrepItem, payload: Union[StoryIn, NoteIn]) -> PrepItem:
    """
    Replace every user-editable field of `item` from `payload`.

    The columns belonging to the other kind are left blank so a row never
    carries stale data for fields its kind does not use.
    """
    title = require_title(payload.title)
    if item.type is not None and item.type != payload.type:
        raise HTTPException(status_code=400, detail="Item type cannot be changed")

    item.type = payload.type
    item.title = title

    if isinstance(payload, StoryIn):
        for name in STAR_FIELDS:
            setattr(item, name, getattr(payload, name) or "")
        item.content = ""
    else:
        for name in STAR_FIELDS:
            setattr(item, name, "")
        item.content = payload.content or ""

    set_item_tags(item, normalize_tags(payload.tags))
    return item


def items_in_folder(db: Session, folder_id: int, user_id: int) -> list[PrepItem]:
    """Items directly inside `folder_id`. Subfolder contents are not included."""
    return (
        owned_query(db, PrepItem, user_id)
        .filter(PrepItem.folder_id == folder_id)
        .order_by(PrepItem.updated_at.desc(), PrepItem.id.desc())
        .all()
    )
