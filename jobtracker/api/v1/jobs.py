"""
Jobs API endpoints.

Every route requires a bearer token; the caller's id is handed to the
service layer, which scopes queries and checks ownership.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobtracker.api.v1.auth import get_current_user
from jobtracker.db.session import get_db
from jobtracker.models import User
from jobtracker.schemas.job import (
    JobEnvelope,
    JobListResponse,
    JobPayload,
    JobResponse,
    MessageResponse,
    MonthlyApplication,
    StatsResponse,
    StatusCounts,
    UpdatedJobEnvelope,
)
from jobtracker.services import jobs as job_service
from jobtracker.services.jobs import DEFAULT_LIMIT, DEFAULT_PAGE, JobQuery
from jobtracker.services.stats import show_stats

router = APIRouter()


@router.post("", response_model=JobEnvelope, status_code=status.HTTP_201_CREATED)
async def create_job(
    payload: JobPayload,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Create a job owned by the current user."""
    job = job_service.create_job(
        db,
        current_user.id,
        company=payload.company,
        position=payload.position,
        status=payload.status,
        job_type=payload.job_type,
        job_location=payload.job_location,
    )
    return JobEnvelope(job=JobResponse.model_validate(job))


@router.get("", response_model=JobListResponse)
async def get_all_jobs(
    status_filter: Optional[str] = Query(None, alias="status"),
    job_type: Optional[str] = Query(None, alias="jobType"),
    sort: str = "latest",
    search: Optional[str] = None,
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_LIMIT,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    List the current user's jobs.

    Optional filters:
    - status / jobType: exact match, "all" disables the filter
    - search: case-insensitive substring of the position
    - sort: latest | oldest | a-z | z-a
    - page / limit: pagination
    """
    params = JobQuery(
        status=status_filter,
        job_type=job_type,
        search=search,
        sort=sort,
        page=page,
        limit=limit,
    )
    result = job_service.list_jobs(db, current_user.id, params)

    return JobListResponse(
        jobs=[JobResponse.model_validate(job) for job in result.jobs],
        total_jobs=result.total_jobs,
        num_of_pages=result.num_of_pages,
    )


@router.get("/stats", response_model=StatsResponse)
async def get_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Job counts per status and per month for the current user."""
    stats = show_stats(db, current_user.id)

    return StatsResponse(
        default_stats=StatusCounts(**stats.default_stats),
        monthly_applications=[
            MonthlyApplication(date=entry.date, count=entry.count)
            for entry in stats.monthly_applications
        ],
    )


@router.get("/{job_id}", response_model=JobEnvelope)
async def get_job(
    job_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    job = job_service.get_job(db, job_id, current_user.id)
    return JobEnvelope(job=JobResponse.model_validate(job))


@router.patch("/{job_id}", response_model=UpdatedJobEnvelope)
async def update_job(
    job_id: int,
    payload: JobPayload,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update a job. Company and position are required."""
    job = job_service.update_job(
        db,
        job_id,
        current_user.id,
        company=payload.company,
        position=payload.position,
        status=payload.status,
        job_type=payload.job_type,
        job_location=payload.job_location,
    )
    return UpdatedJobEnvelope(updated_job=JobResponse.model_validate(job))


@router.delete("/{job_id}", response_model=MessageResponse)
async def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    job_service.delete_job(db, job_id, current_user.id)
    return MessageResponse(msg="Success! Job Removed")
