from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from jobtracker.db.base import Base

JOB_STATUSES = ("pending", "interview", "declined")
JOB_TYPES = ("full-time", "part-time", "remote", "internship")


class Job(Base):
    """A single job application tracked by its owner."""

    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    company = Column(String(50), nullable=False)
    position = Column(String(100), nullable=False)
    status = Column(String, default="pending", nullable=False)  # JOB_STATUSES
    job_type = Column(String, default="full-time", nullable=False)  # JOB_TYPES
    job_location = Column(String, default="my city", nullable=False)

    created_by = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, index=True, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    owner = relationship("User", back_populates="jobs")
