from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class NoteIn(BaseModel):
    title: str = Field(default="", max_length=255)
    content: str = ""
    tags: List[str] = Field(default_factory=list)


class NoteOut(BaseModel):
    id: int
    title: str
    content: str
    tags: List[str] = []
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
