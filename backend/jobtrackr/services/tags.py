from __future__ import annotations

from fastapi import HTTPException

from jobtrackr.core.config import settings
from jobtrackr.models.prep_item import PrepItem
from jobtrackr.models.prep_item_tag import PrepItemTag


def clean_tag(raw) -> str:
    if raw is None:
        return ""
    s = str(raw).strip()
    if len(s) > settings.MAX_TAG_LENGTH:
        s = s[: settings.MAX_TAG_LENGTH]
    return s


def normalize_tags(raw) -> list[str]:
    if raw is None:
        return []
    if not isinstance(raw, (list, tuple)):
        return []
    cleaned: list[str] = []
    for t in raw:
        s = clean_tag(t)
        if not s:
            continue
        cleaned.append(s)
    # de-dupe while preserving order
    seen = set()
    out: list[str] = []
    for t in cleaned:
        if t in seen:
            continue
        seen.add(t)
        out.append(t)
    return out[: settings.MAX_TAGS_PER_ITEM]


def add_tag(tags: list[str], tag) -> list[str]:
    """
    Return a new tag list with `tag` appended. Existing or blank tags are a no-op.

    Raises a 400 when a new tag would go past MAX_TAGS_PER_ITEM.
    """
    t = clean_tag(tag)
    current = list(tags or [])
    if not t or t in current:
        return current
    if len(current) >= settings.MAX_TAGS_PER_ITEM:
        raise HTTPException(
            status_code=400,
            detail=f"Too many tags (max {settings.MAX_TAGS_PER_ITEM} per item)",
        )
    return normalize_tags(current + [t])


def remove_tag(tags: list[str], tag) -> list[str]:
    """Return a new tag list without `tag`. Removing a missing tag is a no-op."""
    t = clean_tag(tag)
    return [x for x in (tags or []) if x != t]


def tags_match(tags: list[str], needle: str) -> bool:
    n = needle.strip().lower()
    return any(n in str(t).lower() for t in (tags or []))


def set_item_tags(item: PrepItem, tags: list[str]) -> None:
    """
    Replace semantics: delete missing, add new.
    """
    desired = set(tags)
    existing_rows = list(getattr(item, "tag_rows", []) or [])
    existing = set([r.tag for r in existing_rows if r and r.tag])

    to_delete = existing - desired
    to_add = [t for t in tags if t not in existing]

    for r in existing_rows:
        if r.tag in to_delete:
            item.tag_rows.remove(r)

    for t in to_add:
        item.tag_rows.append(PrepItemTag(tag=t))
