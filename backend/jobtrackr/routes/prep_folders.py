from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from jobtrackr.core.database import commit_or_fail, get_db
from jobtrackr.dependencies.auth import get_current_user
from jobtrackr.dependencies.confirm import require_delete_confirmation
from jobtrackr.models.prep_folder import PrepFolder
from jobtrackr.models.prep_item import PrepItem
from jobtrackr.models.user import User
from jobtrackr.schemas.auth import MessageOut
from jobtrackr.schemas.prep_folder import FolderIn, FolderOut, FolderTreeNodeOut
from jobtrackr.schemas.prep_item import PrepItemIn, PrepItemOut
from jobtrackr.services.folder_tree import build_folder_tree, subtree_ids, would_create_cycle
from jobtrackr.services.ownership import get_owned_or_404, owned_query
from jobtrackr.services.prep_items import apply_item_payload, items_in_folder, serialize_item
from jobtrackr.services.validation import require_text, require_title

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/prep/folders", tags=["prep"], dependencies=[Depends(get_current_user)])

NOT_FOUND = "Folder not found"


def _user_folders(db: Session, user_id: int) -> list[PrepFolder]:
    return owned_query(db, PrepFolder, user_id).order_by(PrepFolder.name, PrepFolder.id).all()


def _resolve_parent(db: Session, parent_id: int | None, user_id: int) -> int | None:
    if parent_id is None:
        return None
    # Parent must belong to the caller, same as the folder itself.
    get_owned_or_404(db, PrepFolder, parent_id, user_id, detail="Parent folder not found")
    return parent_id


@router.get("/", response_model=list[FolderOut])
def list_folders(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return _user_folders(db, user.id)


@router.get("/tree", response_model=list[FolderTreeNodeOut])
def folder_tree(
    expanded: list[int] | None = Query(default=None),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return build_folder_tree(_user_folders(db, user.id), expanded_ids=expanded or ())


@router.post("/", response_model=FolderOut, status_code=status.HTTP_201_CREATED)
def create_folder(
    payload: FolderIn,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    name = require_text(payload.name, "Folder name is required")
    parent_id = _resolve_parent(db, payload.parent_id, user.id)

    folder = PrepFolder(user_id=user.id, name=name, parent_id=parent_id)
    db.add(folder)
    commit_or_fail(db, message="Failed to save folder")
    db.refresh(folder)
    return folder


@router.get("/{folder_id}", response_model=FolderOut)
def get_folder(folder_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return get_owned_or_404(db, PrepFolder, folder_id, user.id, detail=NOT_FOUND)


@router.put("/{folder_id}", response_model=FolderOut)
def update_folder(
    folder_id: int,
    payload: FolderIn,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    name = require_text(payload.name, "Folder name is required")
    folder = get_owned_or_404(db, PrepFolder, folder_id, user.id, detail=NOT_FOUND)

    if payload.parent_id != folder.parent_id:
        parent_id = _resolve_parent(db, payload.parent_id, user.id)
        if would_create_cycle(_user_folders(db, user.id), folder.id, parent_id):
            raise HTTPException(status_code=400, detail="A folder cannot be moved into itself or its subfolders")
        logger.info("Moving folder id=%s from parent=%s to parent=%s", folder.id, folder.parent_id, parent_id)
        folder.parent_id = parent_id

    folder.name = name

    commit_or_fail(db, message="Failed to save folder")
    db.refresh(folder)
    return folder


@router.delete("/{folder_id}", response_model=MessageOut, dependencies=[Depends(require_delete_confirmation)])
def delete_folder(folder_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    folder = get_owned_or_404(db, PrepFolder, folder_id, user.id, detail=NOT_FOUND)

    doomed = subtree_ids(_user_folders(db, user.id), folder.id)
    item_count = owned_query(db, PrepItem, user.id).filter(PrepItem.folder_id.in_(doomed)).count()

    # Subfolders and their items go with it (ORM cascade + ON DELETE CASCADE).
    db.delete(folder)
    commit_or_fail(db, message="Failed to delete folder")

    logger.info("Deleted folder id=%s with %d folders and %d items", folder_id, len(doomed), item_count)
    return {"message": "Folder deleted"}


@router.get("/{folder_id}/items", response_model=list[PrepItemOut])
def list_folder_items(folder_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    folder = get_owned_or_404(db, PrepFolder, folder_id, user.id, detail=NOT_FOUND)
    return [serialize_item(i) for i in items_in_folder(db, folder.id, user.id)]


@router.post("/{folder_id}/items", response_model=PrepItemOut, status_code=status.HTTP_201_CREATED)
def create_folder_item(
    folder_id: int,
    payload: PrepItemIn,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    require_title(payload.title)
    folder = get_owned_or_404(db, PrepFolder, folder_id, user.id, detail=NOT_FOUND)

    item = PrepItem(user_id=user.id, folder_id=folder.id)
    apply_item_payload(item, payload)

    db.add(item)
    commit_or_fail(db, message="Failed to save item")
    db.refresh(item)
    return serialize_item(item)
