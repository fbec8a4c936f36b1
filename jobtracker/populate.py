"""
Jobify Database Populator

Loads mock job applications from a JSON array into one user's account so the
jobs list and stats pages have something to show.

Usage:
    python -m jobtracker.populate mock-data.json --email test@example.com
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from sqlalchemy.orm import Session

from jobtracker.db.base import Base
from jobtracker.db.session import SessionLocal, engine
from jobtracker.models import JOB_STATUSES, JOB_TYPES, Job
from jobtracker.services.accounts import get_user_by_email

logger = logging.getLogger("populate")

# mock files use the API's camelCase names; snake_case is accepted as well
FIELD_ALIASES = {
    "jobType": "job_type",
    "jobLocation": "job_location",
    "createdAt": "created_at",
}


class PopulateError(Exception):
    pass


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO timestamp, accepting a trailing ``Z``."""
    if not value:
        return None
    if not isinstance(value, str):
        raise PopulateError(f"Timestamp must be an ISO string: {value!r}")
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).replace(tzinfo=None)
    except (TypeError, ValueError):
        raise PopulateError(f"Invalid timestamp: {value!r}")


def job_from_record(record: dict[str, Any], owner_id: int) -> Job:
    """Build a Job from one mock record, applying the model defaults."""
    if not isinstance(record, dict):
        raise PopulateError(f"Each job must be a JSON object: {record!r}")

    data = {FIELD_ALIASES.get(key, key): value for key, value in record.items()}

    if not data.get("company") or not data.get("position"):
        raise PopulateError(f"Record is missing company or position: {record}")
    if data.get("status") and data["status"] not in JOB_STATUSES:
        raise PopulateError(f"Unknown status {data['status']!r}")
    if data.get("job_type") and data["job_type"] not in JOB_TYPES:
        raise PopulateError(f"Unknown jobType {data['job_type']!r}")

    job = Job(
        company=data["company"],
        position=data["position"],
        created_by=owner_id,
    )
    if data.get("status"):
        job.status = data["status"]
    if data.get("job_type"):
        job.job_type = data["job_type"]
    if data.get("job_location"):
        job.job_location = data["job_location"]

    created_at = parse_timestamp(data.get("created_at"))
    if created_at is not None:
        job.created_at = created_at
        job.updated_at = created_at

    return job


def load_records(path: Path) -> list[dict[str, Any]]:
    try:
        records = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise PopulateError(f"Could not read {path}: {e}")

    if not isinstance(records, list):
        raise PopulateError(f"{path} must contain a JSON array of jobs")
    return records


def populate(db: Session, records: list[dict[str, Any]], email: str, keep_existing: bool = False) -> int:
    """
    Insert ``records`` as jobs owned by the user with ``email``.

    Existing jobs for that user are removed first unless ``keep_existing``.
    Returns the number of jobs created.
    """
    user = get_user_by_email(db, email)
    if user is None:
        raise PopulateError(f"No user registered with email {email}")

    jobs = [job_from_record(record, user.id) for record in records]

    if not keep_existing:
        removed = db.query(Job).filter(Job.created_by == user.id).delete(synchronize_session=False)
        logger.info(f"Removed {removed} existing jobs for user {user.id}")

    db.add_all(jobs)
    db.commit()

    logger.info(f"Created {len(jobs)} jobs for user {user.id}")
    return len(jobs)


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Load mock jobs into a user's account")
    parser.add_argument("path", type=Path, help="Path to a JSON array of jobs")
    parser.add_argument("--email", required=True, help="Email of the user who will own the jobs")
    parser.add_argument("--keep", action="store_true", help="Keep the user's existing jobs")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        records = load_records(args.path)
        populate(db, records, args.email, keep_existing=args.keep)
    except PopulateError as e:
        db.rollback()
        logger.error(str(e))
        return 1
    finally:
        db.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
