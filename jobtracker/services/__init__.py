from jobtracker.services.permissions import check_permissions
from jobtracker.services.jobs import (
    JobQuery,
    JobPage,
    build_job_query,
    list_jobs,
    create_job,
    get_job,
    update_job,
    delete_job,
)
from jobtracker.services.stats import show_stats, count_by_status, monthly_applications

__all__ = [
    "check_permissions",
    "JobQuery",
    "JobPage",
    "build_job_query",
    "list_jobs",
    "create_job",
    "get_job",
    "update_job",
    "delete_job",
    "show_stats",
    "count_by_status",
    "monthly_applications",
]
