from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import desc
from sqlalchemy.orm import Session

from jobtrackr.core.database import commit_or_fail, get_db
from jobtrackr.dependencies.auth import get_current_user
from jobtrackr.dependencies.confirm import require_delete_confirmation
from jobtrackr.models.story import Story
from jobtrackr.models.user import User
from jobtrackr.schemas.auth import MessageOut
from jobtrackr.schemas.story import StoryIn, StoryOut
from jobtrackr.services.ownership import get_owned_or_404, owned_query
from jobtrackr.services.tags import normalize_tags, tags_match
from jobtrackr.services.validation import require_title

router = APIRouter(prefix="/stories", tags=["stories"], dependencies=[Depends(get_current_user)])

NOT_FOUND = "Story not found"


def _apply(story: Story, payload: StoryIn) -> Story:
    story.title = require_title(payload.title)
    story.situation = payload.situation
    story.task = payload.task
    story.action = payload.action
    story.result = payload.result
    story.tags = normalize_tags(payload.tags)
    return story


@router.get("/", response_model=list[StoryOut])
def list_stories(
    q: str | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    rows = owned_query(db, Story, user.id).order_by(desc(Story.created_at), desc(Story.id)).all()

    term = (q or "").strip().lower()
    if not term:
        return rows
    return [s for s in rows if term in (s.title or "").lower() or tags_match(s.tags, term)]


@router.post("/", response_model=StoryOut)
def create_story(
    payload: StoryIn,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    story = _apply(Story(user_id=user.id), payload)
    db.add(story)
    commit_or_fail(db, message="Failed to save story")
    db.refresh(story)
    return story


@router.get("/{story_id}", response_model=StoryOut)
def get_story(story_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return get_owned_or_404(db, Story, story_id, user.id, detail=NOT_FOUND)


@router.put("/{story_id}", response_model=StoryOut)
def update_story(
    story_id: int,
    payload: StoryIn,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    require_title(payload.title)
    story = get_owned_or_404(db, Story, story_id, user.id, detail=NOT_FOUND)
    _apply(story, payload)
    commit_or_fail(db, message="Failed to save story")
    db.refresh(story)
    return story


@router.delete("/{story_id}", response_model=MessageOut, dependencies=[Depends(require_delete_confirmation)])
def delete_story(story_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    story = get_owned_or_404(db, Story, story_id, user.id, detail=NOT_FOUND)
    db.delete(story)
    commit_or_fail(db, message="Failed to delete story")
    return {"message": "Story deleted"}
