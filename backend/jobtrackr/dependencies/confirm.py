from __future__ import annotations

from fastapi import HTTPException, Query


def require_delete_confirmation(confirm: bool = Query(False)) -> None:
    """Destructive routes only run once the caller passes confirm=true."""
    if not confirm:
        raise HTTPException(status_code=400, detail="Deletion must be confirmed (confirm=true)")
