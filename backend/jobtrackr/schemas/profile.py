from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field


class ProfileOut(BaseModel):
    id: int
    email: str
    full_name: str
    theme: str
    custom_columns: List[Dict[str, Any]] = []
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProfileUpdate(BaseModel):
    full_name: str = Field(default="", max_length=100)
    theme: Literal["light", "dark"] = "light"
    custom_columns: List[Dict[str, Any]] = Field(default_factory=list)
