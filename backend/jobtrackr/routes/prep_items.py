from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy import or_
from sqlalchemy.orm import Session

from jobtrackr.core.database import commit_or_fail, get_db
from jobtrackr.dependencies.auth import get_current_user
from jobtrackr.dependencies.confirm import require_delete_confirmation
from jobtrackr.models.prep_item import PrepItem
from jobtrackr.models.prep_item_tag import PrepItemTag
from jobtrackr.models.user import User
from jobtrackr.schemas.auth import MessageOut
from jobtrackr.schemas.prep_item import PrepItemIn, PrepItemOut, TagIn
from jobtrackr.services.ownership import get_owned_or_404, owned_query
from jobtrackr.services.prep_items import apply_item_payload, serialize_item
from jobtrackr.services.tags import add_tag, remove_tag, set_item_tags
from jobtrackr.services.validation import require_title

router = APIRouter(prefix="/prep/items", tags=["prep"], dependencies=[Depends(get_current_user)])

NOT_FOUND = "Item not found"


@router.get("/", response_model=list[PrepItemOut])
def list_items(
    type: str | None = None,
    tag: list[str] | None = Query(default=None),
    q: str | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    qry = owned_query(db, PrepItem, user.id)

    if type:
        qry = qry.filter(PrepItem.type == type.strip().lower())

    # Tags filter (item must carry every requested tag)
    if tag:
        for t in [str(t).strip() for t in tag if t and str(t).strip()]:
            qry = qry.filter(
                PrepItem.id.in_(db.query(PrepItemTag.item_id).filter(PrepItemTag.tag == t))
            )

    # Substring search (title/body/tags)
    if q:
        term = str(q).strip()
        if term:
            like = f"%{term}%"
            qry = qry.filter(
                or_(
                    PrepItem.title.ilike(like),
                    PrepItem.content.ilike(like),
                    PrepItem.situation.ilike(like),
                    PrepItem.task.ilike(like),
                    PrepItem.action.ilike(like),
                    PrepItem.result.ilike(like),
                    PrepItem.id.in_(db.query(PrepItemTag.item_id).filter(PrepItemTag.tag.ilike(like))),
                )
            )

    rows = qry.order_by(PrepItem.updated_at.desc(), PrepItem.id.desc()).all()
    return [serialize_item(i) for i in rows]


@router.get("/{item_id}", response_model=PrepItemOut)
def get_item(item_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return serialize_item(get_owned_or_404(db, PrepItem, item_id, user.id, detail=NOT_FOUND))


@router.put("/{item_id}", response_model=PrepItemOut)
def update_item(
    item_id: int,
    payload: PrepItemIn,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    require_title(payload.title)
    item = get_owned_or_404(db, PrepItem, item_id, user.id, detail=NOT_FOUND)

    apply_item_payload(item, payload)

    commit_or_fail(db, message="Failed to save item")
    db.refresh(item)
    return serialize_item(item)


@router.delete("/{item_id}", response_model=MessageOut, dependencies=[Depends(require_delete_confirmation)])
def delete_item(item_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    item = get_owned_or_404(db, PrepItem, item_id, user.id, detail=NOT_FOUND)
    db.delete(item)
    commit_or_fail(db, message="Failed to delete item")
    return {"message": "Item deleted"}


@router.post("/{item_id}/tags", response_model=PrepItemOut)
def add_item_tag(
    item_id: int,
    payload: TagIn,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    item = get_owned_or_404(db, PrepItem, item_id, user.id, detail=NOT_FOUND)

    tags = add_tag(item.tags, payload.tag)
    if tags != item.tags:
        set_item_tags(item, tags)
        commit_or_fail(db, message="Failed to save item")
        db.refresh(item)
    return serialize_item(item)


@router.delete("/{item_id}/tags/{tag}", response_model=PrepItemOut)
def remove_item_tag(
    item_id: int,
    tag: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    item = get_owned_or_404(db, PrepItem, item_id, user.id, detail=NOT_FOUND)

    tags = remove_tag(item.tags, tag)
    if tags != item.tags:
        set_item_tags(item, tags)
        commit_or_fail(db, message="Failed to save item")
        db.refresh(item)
    return serialize_item(item)
