from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from jobtracker.db.base import Base


class User(Base):
    """Account that owns job applications."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(20), nullable=False)
    last_name = Column(String(20), default="lastName")
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    location = Column(String(20), default="my city")

    # Relationships
    jobs = relationship("Job", back_populates="owner", cascade="all, delete-orphan")
