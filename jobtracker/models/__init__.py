from jobtracker.models.user import User
from jobtracker.models.job import Job, JOB_STATUSES, JOB_TYPES

__all__ = ["User", "Job", "JOB_STATUSES", "JOB_TYPES"]
