from datetime import date, datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from jobtrackr.models.job_application import DEFAULT_JOB_STATUS


class JobApplicationIn(BaseModel):
    """Full record; used for both create and replace-on-save."""

    role: str = Field(default="", max_length=255)
    company: str = Field(default="", max_length=255)
    status: str = Field(default=DEFAULT_JOB_STATUS, max_length=50)
    applied_date: Optional[date] = Field(default_factory=date.today)
    job_link: str = Field(default="", max_length=500)
    notes: str = ""
    custom_data: Dict[str, Any] = Field(default_factory=dict)


class JobApplicationOut(BaseModel):
    id: int
    role: str
    company: str
    status: str
    applied_date: Optional[date]
    job_link: str
    notes: str
    custom_data: Dict[str, Any] = {}
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class JobStatsOut(BaseModel):
    total: int
    by_status: Dict[str, int]
