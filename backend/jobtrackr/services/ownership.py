"""
Row ownership.

Every entity collection is scoped to its owner through one predicate: the
owner column (``user_id`` unless the model names another column via
``__owner_column__``) must equal the caller's user id. Routes never filter
by owner themselves; they go through ``owned_query`` / ``get_owned_or_404``.
"""
from __future__ import annotations

from typing import Any, Type, TypeVar

from fastapi import HTTPException
from sqlalchemy.orm import Query, Session

from jobtrackr.core.base import Base

ModelT = TypeVar("ModelT", bound=Base)


def owner_column(model: Type[Base]) -> Any:
    name = getattr(model, "__owner_column__", "user_id")
    return getattr(model, name)


def owned_query(db: Session, model: Type[ModelT], user_id: int) -> Query:
    return db.query(model).filter(owner_column(model) == user_id)


def get_owned(db: Session, model: Type[ModelT], obj_id: int, user_id: int) -> ModelT | None:
    return owned_query(db, model, user_id).filter(model.id == obj_id).first()


def get_owned_or_404(
    db: Session,
    model: Type[ModelT],
    obj_id: int,
    user_id: int,
    *,
    detail: str = "Not found",
) -> ModelT:
    # Another user's row is indistinguishable from a missing one.
    obj = get_owned(db, model, obj_id, user_id)
    if obj is None:
        raise HTTPException(status_code=404, detail=detail)
    return obj
