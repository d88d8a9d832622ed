from fastapi import APIRouter, Depends, Query
from sqlalchemy import desc, or_
from sqlalchemy.orm import Session

from jobtrackr.core.database import commit_or_fail, get_db
from jobtrackr.dependencies.auth import get_current_user
from jobtrackr.dependencies.confirm import require_delete_confirmation
from jobtrackr.models.job_application import JobApplication
from jobtrackr.models.user import User
from jobtrackr.schemas.auth import MessageOut
from jobtrackr.schemas.job_application import JobApplicationIn, JobApplicationOut, JobStatsOut
from jobtrackr.services.jobs import apply_job_payload, clean_job_payload, job_status_counts
from jobtrackr.services.ownership import get_owned_or_404, owned_query

router = APIRouter(prefix="/jobs", tags=["jobs"], dependencies=[Depends(get_current_user)])

NOT_FOUND = "Job application not found"


@router.post("/", response_model=JobApplicationOut)
def create_job(
    payload: JobApplicationIn,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    data = clean_job_payload(payload)

    job = JobApplication(user_id=user.id)
    apply_job_payload(job, data)

    db.add(job)
    commit_or_fail(db, message="Failed to save job application")
    db.refresh(job)
    return job


@router.get("/", response_model=list[JobApplicationOut])
def list_jobs(
    q: str | None = None,
    status: list[str] | None = Query(default=None),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    qry = owned_query(db, JobApplication, user.id)

    # Text search (role/company)
    if q:
        term = str(q).strip()
        if term:
            like = f"%{term}%"
            qry = qry.filter(
                or_(
                    JobApplication.role.ilike(like),
                    JobApplication.company.ilike(like),
                )
            )

    # Status filter (any-of, exact)
    if status:
        statuses = [str(s).strip() for s in status if s and str(s).strip() and str(s).strip() != "all"]
        if statuses:
            qry = qry.filter(JobApplication.status.in_(statuses))

    return qry.order_by(desc(JobApplication.applied_date), desc(JobApplication.created_at), desc(JobApplication.id)).all()


@router.get("/stats", response_model=JobStatsOut)
def job_stats(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    counts = job_status_counts(db, user.id)
    return {"total": sum(counts.values()), "by_status": counts}


@router.get("/{job_id}", response_model=JobApplicationOut)
def get_job(
    job_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return get_owned_or_404(db, JobApplication, job_id, user.id, detail=NOT_FOUND)


@router.put("/{job_id}", response_model=JobApplicationOut)
def update_job(
    job_id: int,
    payload: JobApplicationIn,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    data = clean_job_payload(payload)
    job = get_owned_or_404(db, JobApplication, job_id, user.id, detail=NOT_FOUND)

    apply_job_payload(job, data)

    commit_or_fail(db, message="Failed to save job application")
    db.refresh(job)
    return job


@router.delete("/{job_id}", response_model=MessageOut, dependencies=[Depends(require_delete_confirmation)])
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    job = get_owned_or_404(db, JobApplication, job_id, user.id, detail=NOT_FOUND)
    db.delete(job)
    commit_or_fail(db, message="Failed to delete job application")
    return {"message": "Job application deleted"}
