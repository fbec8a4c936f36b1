import re
from typing import Optional

from pydantic import BaseModel, Field, field_validator

EMAIL_PATTERN = r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$"


class EmailMixin(BaseModel):
    email: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        """Validate email format when one is supplied."""
        if v is None or v.strip() == "":
            return None
        v = v.strip()
        if not re.match(EMAIL_PATTERN, v):
            raise ValueError("Please provide a valid email")
        return v.lower()


class UserRegister(EmailMixin):
    """Schema for user registration. Missing values are reported by the service."""

    name: Optional[str] = None
    password: Optional[str] = None


class UserLogin(EmailMixin):
    password: Optional[str] = None


class UserUpdate(EmailMixin):
    name: Optional[str] = None
    last_name: Optional[str] = Field(default=None, alias="lastName")
    location: Optional[str] = None

    class Config:
        populate_by_name = True


class UserResponse(BaseModel):
    """Public user fields; never carries the password hash."""

    id: int
    name: str
    last_name: Optional[str] = Field(default=None, alias="lastName")
    email: str
    location: Optional[str] = None

    class Config:
        from_attributes = True
        populate_by_name = True


class AuthResponse(BaseModel):
    user: UserResponse
    token: str
    location: Optional[str] = None
