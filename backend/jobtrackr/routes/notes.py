from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import desc
from sqlalchemy.orm import Session

from jobtrackr.core.database import commit_or_fail, get_db
from jobtrackr.dependencies.auth import get_current_user
from jobtrackr.dependencies.confirm import require_delete_confirmation
from jobtrackr.models.note import Note
from jobtrackr.models.user import User
from jobtrackr.schemas.auth import MessageOut
from jobtrackr.schemas.note import NoteIn, NoteOut
from jobtrackr.services.ownership import get_owned_or_404, owned_query
from jobtrackr.services.tags import normalize_tags, tags_match
from jobtrackr.services.validation import require_title

router = APIRouter(prefix="/notes", tags=["notes"], dependencies=[Depends(get_current_user)])

NOT_FOUND = "Note not found"


def _apply(note: Note, payload: NoteIn) -> Note:
    note.title = require_title(payload.title)
    note.content = payload.content
    note.tags = normalize_tags(payload.tags)
    return note


@router.get("/", response_model=list[NoteOut])
def list_notes(
    q: str | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    rows = owned_query(db, Note, user.id).order_by(desc(Note.updated_at), desc(Note.id)).all()

    term = (q or "").strip().lower()
    if not term:
        return rows
    return [
        n
        for n in rows
        if term in (n.title or "").lower() or term in (n.content or "").lower() or tags_match(n.tags, term)
    ]


@router.post("/", response_model=NoteOut)
def create_note(
    payload: NoteIn,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    note = _apply(Note(user_id=user.id), payload)
    db.add(note)
    commit_or_fail(db, message="Failed to save note")
    db.refresh(note)
    return note


@router.get("/{note_id}", response_model=NoteOut)
def get_note(note_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return get_owned_or_404(db, Note, note_id, user.id, detail=NOT_FOUND)


@router.put("/{note_id}", response_model=NoteOut)
def update_note(
    note_id: int,
    payload: NoteIn,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    require_title(payload.title)
    note = get_owned_or_404(db, Note, note_id, user.id, detail=NOT_FOUND)
    _apply(note, payload)
    commit_or_fail(db, message="Failed to save note")
    db.refresh(note)
    return note


@router.delete("/{note_id}", response_model=MessageOut, dependencies=[Depends(require_delete_confirmation)])
def delete_note(note_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    note = get_owned_or_404(db, Note, note_id, user.id, detail=NOT_FOUND)
    db.delete(note)
    commit_or_fail(db, message="Failed to delete note")
    return {"message": "Note deleted"}
