from __future__ import annotations

from fastapi import HTTPException


def require_text(value: str | None, detail: str) -> str:
    """Trimmed `value`, or a 400 before anything reaches storage."""
    clean = (value or "").strip()
    if not clean:
        raise HTTPException(status_code=400, detail=detail)
    return clean


def require_title(title: str | None) -> str:
    return require_text(title, "Title is required")
