"""Domain entities outside the nesting core."""

from __future__ import annotations

from dataclasses import dataclass, field

# Role that is granted every permission
ADMIN_ROLE = "admin"

# Permission entry that grants every permission
ALL_PERMISSIONS = "*"


@dataclass(frozen=True)
class User:
    """An authenticated API caller.

    Attributes:
        id: User identifier.
        username: Login name.
        email: Contact address, if known.
        role: Role name; "admin" is granted everything.
        permissions: Permission strings such as "cabinet_calc.view",
            "cabinet_calc.*" or "*".
    """

    id: int | str
    username: str
    email: str | None = None
    role: str = "user"
    permissions: tuple[str, ...] = field(default_factory=tuple)

    def has_permission(self, permission: str) -> bool:
        """Check a permission string against this user's grants.

        Admins and holders of "*" have every permission. "prefix.*" grants
        any permission that starts with "prefix".

        Examples:
            >>> User(id=1, username="m", permissions=("cabinet_calc.*",)).has_permission("cabinet_calc.view")
            True
        """
        if self.role == ADMIN_ROLE or ALL_PERMISSIONS in self.permissions:
            return True
        if permission in self.permissions:
            return True
        return any(
            grant.endswith(".*") and permission.startswith(grant[:-2])
            for grant in self.permissions
        )
