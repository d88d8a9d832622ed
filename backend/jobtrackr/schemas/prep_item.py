"""
Prep item payloads.

Stories and notes share one table but not one shape: each kind gets its own
request/response model and the two are joined in a union discriminated by
``type``. Fields that make no sense for a kind are simply absent.
"""
from __future__ import annotations

from datetime import datetime
from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class _ItemInBase(BaseModel):
    title: str = Field(default="", max_length=255)
    tags: List[str] = Field(default_factory=list)


class StoryIn(_ItemInBase):
    type: Literal["story"] = "story"
    situation: str = ""
    task: str = ""
    action: str = ""
    result: str = ""


class NoteIn(_ItemInBase):
    type: Literal["note"] = "note"
    content: str = ""


PrepItemIn = Annotated[Union[StoryIn, NoteIn], Field(discriminator="type")]


class _ItemOutBase(BaseModel):
    id: int
    folder_id: int
    title: str
    tags: List[str] = []
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class StoryOut(_ItemOutBase):
    type: Literal["story"] = "story"
    situation: str
    task: str
    action: str
    result: str


class NoteOut(_ItemOutBase):
    type: Literal["note"] = "note"
    content: str


PrepItemOut = Annotated[Union[StoryOut, NoteOut], Field(discriminator="type")]


class TagIn(BaseModel):
    tag: str = Field(min_length=1, max_length=64)
