from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class StoryIn(BaseModel):
    title: str = Field(default="", max_length=255)
    situation: str = ""
    task: str = ""
    action: str = ""
    result: str = ""
    tags: List[str] = Field(default_factory=list)


class StoryOut(BaseModel):
    id: int
    title: str
    situation: str
    task: str
    action: str
    result: str
    tags: List[str] = []
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
