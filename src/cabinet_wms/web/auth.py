"""Bearer-token authentication and permission checks for API routes."""

import logging
from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, Header, HTTPException

from cabinet_wms.domain.entities import User
from cabinet_wms.web.dependencies import UserRepositoryDep

logger = logging.getLogger(__name__)

VIEW_PERMISSION = "cabinet_calc.view"
EDIT_PERMISSION = "cabinet_calc.edit"


def get_current_user(
    users: UserRepositoryDep,
    authorization: Annotated[str | None, Header()] = None,
) -> User:
    """Resolve the caller from an ``Authorization: Bearer <token>`` header.

    Raises:
        HTTPException: 401 when no token is sent, 403 when it is unknown.
    """
    parts = authorization.split() if authorization else []
    if len(parts) < 2:
        raise HTTPException(status_code=401, detail="Access token required")

    user = users.get_by_token(parts[1])
    if user is None:
        raise HTTPException(status_code=403, detail="Invalid or expired token")
    return user


CurrentUserDep = Annotated[User, Depends(get_current_user)]


def require_permission(permission: str) -> Callable[[User], User]:
    """Build a dependency that admits users holding ``permission``."""

    def checker(user: CurrentUserDep) -> User:
        if not user.has_permission(permission):
            logger.info("User %s denied %s", user.username, permission)
            raise HTTPException(status_code=403, detail="Insufficient permissions")
        return user

    return checker


ViewerDep = Annotated[User, Depends(require_permission(VIEW_PERMISSION))]
EditorDep = Annotated[User, Depends(require_permission(EDIT_PERMISSION))]
