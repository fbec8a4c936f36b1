import logging

from jobtracker.core.exceptions import ForbiddenError

logger = logging.getLogger("permissions")


def check_permissions(acting_user_id: int, resource_owner_id: int) -> None:
    """Raise ForbiddenError unless the acting user owns the resource."""
    if acting_user_id == resource_owner_id:
        return

    logger.warning(
        f"User {acting_user_id} denied access to resource owned by {resource_owner_id}"
    )
    raise ForbiddenError("Not authorized to access this route")
