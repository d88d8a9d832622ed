from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FolderIn(BaseModel):
    """Full record; used for create and for rename/move."""

    name: str = Field(default="", max_length=255)
    parent_id: Optional[int] = None


class FolderOut(BaseModel):
    id: int
    name: str
    parent_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class FolderTreeNodeOut(BaseModel):
    id: int
    name: str
    parent_id: Optional[int] = None
    is_expanded: bool = False
    children: List[FolderTreeNodeOut] = []

    model_config = ConfigDict(from_attributes=True)


FolderTreeNodeOut.model_rebuild()
