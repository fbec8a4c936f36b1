"""
Explicit input checks shared by the service layer.

Each helper raises ``ValidationError`` before anything touches the database.
"""

from typing import Any, Iterable, Optional

from jobtracker.core.exceptions import ValidationError

MISSING_VALUES_MESSAGE = "Please provide all values"

# Largest value a 64-bit signed INTEGER column (SQLite, Postgres BIGINT) can hold
MAX_DB_INTEGER = 2**63 - 1


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def require_values(*values: Any, message: str = MISSING_VALUES_MESSAGE) -> None:
    """Raise if any value is missing or an empty string."""
    if any(is_blank(value) for value in values):
        raise ValidationError(message)


def check_choice(value: Optional[str], choices: Iterable[str], field: str) -> None:
    """Raise if ``value`` is set but not one of ``choices``."""
    choices = tuple(choices)
    if value is not None and value not in choices:
        raise ValidationError(
            f"Invalid {field} '{value}'. Must be one of: {', '.join(choices)}"
        )


def check_length(
    value: Optional[str],
    field: str,
    max_length: int,
    min_length: int = 1,
) -> None:
    if value is None:
        return
    length = len(value.strip())
    if length < min_length:
        raise ValidationError(f"{field} must be at least {min_length} characters")
    if length > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters")
