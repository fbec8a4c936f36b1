from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class JobPayload(BaseModel):
    """Body for creating or updating a job. Missing values are reported by the service."""

    company: Optional[str] = None
    position: Optional[str] = None
    status: Optional[str] = None
    job_type: Optional[str] = Field(default=None, alias="jobType")
    job_location: Optional[str] = Field(default=None, alias="jobLocation")

    class Config:
        populate_by_name = True


class JobResponse(BaseModel):
    id: int
    company: str
    position: str
    status: str
    job_type: str = Field(alias="jobType")
    job_location: str = Field(alias="jobLocation")
    created_by: int = Field(alias="createdBy")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    class Config:
        from_attributes = True
        populate_by_name = True


class JobEnvelope(BaseModel):
    job: JobResponse


class UpdatedJobEnvelope(BaseModel):
    updated_job: JobResponse = Field(alias="updatedJob")

    class Config:
        populate_by_name = True


class JobListResponse(BaseModel):
    jobs: list[JobResponse]
    total_jobs: int = Field(alias="totalJobs")
    num_of_pages: int = Field(alias="numOfPages")

    class Config:
        populate_by_name = True


class StatusCounts(BaseModel):
    pending: int = 0
    interview: int = 0
    declined: int = 0


class MonthlyApplication(BaseModel):
    date: str
    count: int


class StatsResponse(BaseModel):
    default_stats: StatusCounts = Field(alias="defaultStats")
    monthly_applications: list[MonthlyApplication] = Field(alias="monthlyApplications")

    class Config:
        populate_by_name = True


class MessageResponse(BaseModel):
    msg: str
