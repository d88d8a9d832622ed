from __future__ import annotations

from fastapi import HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session

from jobtrackr.models.job_application import JOB_STATUSES, DEFAULT_JOB_STATUS, JobApplication
from jobtrackr.schemas.job_application import JobApplicationIn
from jobtrackr.services.ownership import owned_query


def clean_job_payload(payload: JobApplicationIn) -> dict:
    """
    Trim and validate a job record before it touches storage.
    Role and company are required; status falls back to the default.
    """
    data = payload.model_dump()
    for k, v in list(data.items()):
        if isinstance(v, str):
            data[k] = v.strip()

    if not data["role"] or not data["company"]:
        raise HTTPException(status_code=400, detail="Role and Company are required")

    if not data["status"]:
        data["status"] = DEFAULT_JOB_STATUS
    if data.get("custom_data") is None:
        data["custom_data"] = {}
    return data


def apply_job_payload(job: JobApplication, data: dict) -> JobApplication:
    # replace-on-save: every field is overwritten
    for k, v in data.items():
        setattr(job, k, v)
    return job


def job_status_counts(db: Session, user_id: int) -> dict[str, int]:
    rows = (
        owned_query(db, JobApplication, user_id)
        .with_entities(JobApplication.status, func.count(JobApplication.id))
        .group_by(JobApplication.status)
        .all()
    )
    counts = {s: 0 for s in JOB_STATUSES}
    for status, n in rows:
        counts[status] = int(n)
    return counts
