"""
Statistics for the stats page.

Both summaries are computed by the database with GROUP BY queries scoped to
the owner; Python only reshapes the rows.
"""

from dataclasses import dataclass, field
from datetime import date

from sqlalchemy import extract, func
from sqlalchemy.orm import Session

from jobtracker.models import JOB_STATUSES, Job

MONTHS_SHOWN = 6


@dataclass
class MonthlyCount:
    date: str
    count: int


@dataclass
class JobStats:
    default_stats: dict[str, int]
    monthly_applications: list[MonthlyCount] = field(default_factory=list)


def count_by_status(db: Session, owner_id: int) -> dict[str, int]:
    """Count the owner's jobs per status, with every known status present."""
    rows = (
        db.query(Job.status, func.count(Job.id))
        .filter(Job.created_by == owner_id)
        .group_by(Job.status)
        .all()
    )
    counts = {job_status: count for job_status, count in rows}

    return {job_status: counts.get(job_status, 0) for job_status in JOB_STATUSES}


def format_month(year: int, month: int) -> str:
    """Render a month as e.g. ``Aug 2023``."""
    return date(year, month, 1).strftime("%b %Y")


def monthly_applications(db: Session, owner_id: int, months: int = MONTHS_SHOWN) -> list[MonthlyCount]:
    """
    Count the owner's jobs per creation month.

    Only the ``months`` most recent months that have any jobs are returned,
    oldest first.
    """
    year = extract("year", Job.created_at)
    month = extract("month", Job.created_at)

    rows = (
        db.query(year.label("year"), month.label("month"), func.count(Job.id).label("total"))
        .filter(Job.created_by == owner_id)
        .group_by(year, month)
        .order_by(year.desc(), month.desc())
        .limit(months)
        .all()
    )

    return [
        MonthlyCount(date=format_month(int(row.year), int(row.month)), count=row.total)
        for row in reversed(rows)
    ]


def show_stats(db: Session, owner_id: int) -> JobStats:
    return JobStats(
        default_stats=count_by_status(db, owner_id),
        monthly_applications=monthly_applications(db, owner_id),
    )
