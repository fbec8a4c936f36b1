"""
Job service.

CRUD for job applications plus the list query: a typed ``JobQuery`` is
translated into a SQLAlchemy query scoped to the owner, then paginated.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from jobtracker.core.exceptions import NotFoundError, ValidationError
from jobtracker.models import JOB_STATUSES, JOB_TYPES, Job
from jobtracker.services.permissions import check_permissions
from jobtracker.services.validation import (
    MAX_DB_INTEGER,
    check_choice,
    check_length,
    is_blank,
    require_values,
)

logger = logging.getLogger("jobs")

ALL = "all"
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

SORT_ORDERS = {
    "latest": (Job.created_at.desc(), Job.id.desc()),
    "oldest": (Job.created_at.asc(), Job.id.asc()),
    "a-z": (Job.position.asc(), Job.id.asc()),
    "z-a": (Job.position.desc(), Job.id.desc()),
}


@dataclass
class JobQuery:
    """Filter, sort and pagination options for listing a user's jobs."""

    status: Optional[str] = None
    job_type: Optional[str] = None
    search: Optional[str] = None
    sort: str = "latest"
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    def __post_init__(self):
        if is_blank(self.status):
            self.status = None
        if is_blank(self.job_type):
            self.job_type = None
        if is_blank(self.sort):
            self.sort = "latest"

    def validate(self) -> None:
        if self.status != ALL:
            check_choice(self.status, JOB_STATUSES, "status")
        if self.job_type != ALL:
            check_choice(self.job_type, JOB_TYPES, "jobType")
        check_choice(self.sort, SORT_ORDERS, "sort")
        if self.page < 1:
            raise ValidationError("page must be a positive integer")
        if self.limit < 1:
            raise ValidationError("limit must be a positive integer")
        if self.limit > MAX_DB_INTEGER:
            raise ValidationError("limit is too large")
        if self.offset > MAX_DB_INTEGER:
            raise ValidationError("page is too large")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class JobPage:
    jobs: list[Job]
    total_jobs: int
    num_of_pages: int


def _filter_enabled(value: Optional[str]) -> bool:
    return not is_blank(value) and value != ALL


def build_job_query(db: Session, owner_id: int, params: JobQuery) -> Query:
    """Translate ``params`` into an ordered, unpaginated query for one owner."""
    query = db.query(Job).filter(Job.created_by == owner_id)

    if _filter_enabled(params.status):
        query = query.filter(Job.status == params.status)

    if _filter_enabled(params.job_type):
        query = query.filter(Job.job_type == params.job_type)

    if not is_blank(params.search):
        query = query.filter(
            func.lower(Job.position).contains(params.search.strip().lower(), autoescape=True)
        )

    return query.order_by(*SORT_ORDERS[params.sort])


def list_jobs(db: Session, owner_id: int, params: Optional[JobQuery] = None) -> JobPage:
    """
    Return one page of the owner's jobs.

    ``total_jobs`` counts every match regardless of pagination and
    ``num_of_pages`` is ``ceil(total_jobs / limit)``.
    """
    if params is None:
        params = JobQuery()
    params.validate()

    query = build_job_query(db, owner_id, params)
    total_jobs = query.order_by(None).count()
    jobs = query.offset(params.offset).limit(params.limit).all()

    return JobPage(
        jobs=jobs,
        total_jobs=total_jobs,
        num_of_pages=math.ceil(total_jobs / params.limit),
    )


def _validate_job_fields(
    company: Optional[str],
    position: Optional[str],
    status: Optional[str],
    job_type: Optional[str],
) -> None:
    require_values(company, position)
    check_length(company, "Company", max_length=50)
    check_length(position, "Position", max_length=100)
    check_choice(status, JOB_STATUSES, "status")
    check_choice(job_type, JOB_TYPES, "jobType")


def _get_owned_job(db: Session, job_id: int, owner_id: int) -> Job:
    job = None
    if -MAX_DB_INTEGER - 1 <= job_id <= MAX_DB_INTEGER:
        job = db.query(Job).filter(Job.id == job_id).first()
    if not job:
        raise NotFoundError(f"No job with id: {job_id}")

    check_permissions(owner_id, job.created_by)
    return job


def create_job(
    db: Session,
    owner_id: int,
    *,
    company: Optional[str],
    position: Optional[str],
    status: Optional[str] = None,
    job_type: Optional[str] = None,
    job_location: Optional[str] = None,
) -> Job:
    """Create a job owned by ``owner_id``."""
    _validate_job_fields(company, position, status, job_type)

    job = Job(
        company=company.strip(),
        position=position.strip(),
        created_by=owner_id,
    )
    if status:
        job.status = status
    if job_type:
        job.job_type = job_type
    if not is_blank(job_location):
        job.job_location = job_location.strip()

    db.add(job)
    db.commit()
    db.refresh(job)

    logger.info(f"User {owner_id} created job {job.id}")
    return job


def get_job(db: Session, job_id: int, owner_id: int) -> Job:
    return _get_owned_job(db, job_id, owner_id)


def update_job(
    db: Session,
    job_id: int,
    owner_id: int,
    *,
    company: Optional[str],
    position: Optional[str],
    status: Optional[str] = None,
    job_type: Optional[str] = None,
    job_location: Optional[str] = None,
) -> Job:
    """
    Update a job the caller owns.

    Company and position are always required; the other fields only change
    when supplied.
    """
    _validate_job_fields(company, position, status, job_type)
    job = _get_owned_job(db, job_id, owner_id)

    job.company = company.strip()
    job.position = position.strip()
    if status:
        job.status = status
    if job_type:
        job.job_type = job_type
    if not is_blank(job_location):
        job.job_location = job_location.strip()

    db.commit()
    db.refresh(job)

    logger.info(f"User {owner_id} updated job {job.id}")
    return job


def delete_job(db: Session, job_id: int, owner_id: int) -> None:
    job = _get_owned_job(db, job_id, owner_id)

    db.delete(job)
    db.commit()

    logger.info(f"User {owner_id} deleted job {job_id}")
