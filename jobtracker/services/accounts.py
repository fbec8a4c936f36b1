"""
Account service.

Registration, credential checks, and profile updates. Every function takes
the database session and the caller's identity explicitly and returns ORM
objects; token creation is left to ``issue_token`` so callers decide when a
fresh token is due.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobtracker.core.exceptions import AuthError, ConflictError, NotFoundError
from jobtracker.core.security import (
    create_access_token,
    get_password_hash,
    verify_password,
)
from jobtracker.models import User
from jobtracker.services.validation import check_length, require_values

logger = logging.getLogger("auth")

EMAIL_IN_USE_MESSAGE = "Email already in use"
INVALID_CREDENTIALS_MESSAGE = "Invalid Credentials"


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Get a user by email address."""
    return db.query(User).filter(User.email == email.lower()).first()


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def issue_token(user: User) -> str:
    return create_access_token(user.id)


def register_user(
    db: Session,
    *,
    name: Optional[str],
    email: Optional[str],
    password: Optional[str],
) -> User:
    """
    Create a new account.

    Raises:
        ValidationError: a field is missing or the name has a bad length
        ConflictError: the email is already registered
    """
    require_values(name, email, password)
    check_length(name, "Name", max_length=20, min_length=3)

    if get_user_by_email(db, email):
        raise ConflictError(EMAIL_IN_USE_MESSAGE)

    user = User(
        name=name.strip(),
        email=email.lower(),
        hashed_password=get_password_hash(password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Another request registered the same email between check and insert
        db.rollback()
        raise ConflictError(EMAIL_IN_USE_MESSAGE)
    db.refresh(user)

    logger.info(f"Registered user {user.id}")
    return user


def authenticate_user(
    db: Session,
    *,
    email: Optional[str],
    password: Optional[str],
) -> User:
    """
    Check an email/password pair.

    Unknown email and wrong password produce the same AuthError so the
    response does not reveal which accounts exist.
    """
    require_values(email, password)

    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.hashed_password):
        logger.warning("Failed login attempt")
        raise AuthError(INVALID_CREDENTIALS_MESSAGE)

    logger.info(f"User {user.id} logged in")
    return user


def update_user(
    db: Session,
    user_id: int,
    *,
    email: Optional[str],
    name: Optional[str],
    last_name: Optional[str],
    location: Optional[str],
) -> User:
    """Replace the caller's profile fields."""
    require_values(email, name, last_name, location)
    check_length(name, "Name", max_length=20, min_length=3)
    check_length(last_name, "Last name", max_length=20)
    check_length(location, "Location", max_length=20)

    user = get_user(db, user_id)
    if user is None:
        raise NotFoundError(f"No user with id: {user_id}")

    email = email.lower()
    existing = get_user_by_email(db, email)
    if existing is not None and existing.id != user.id:
        raise ConflictError(EMAIL_IN_USE_MESSAGE)

    user.email = email
    user.name = name.strip()
    user.last_name = last_name.strip()
    user.location = location.strip()
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(EMAIL_IN_USE_MESSAGE)
    db.refresh(user)

    logger.info(f"Updated profile for user {user.id}")
    return user
