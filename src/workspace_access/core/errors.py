"""Error taxonomy for role mutations.

Only mutating operations raise. Permission reads degrade to the
least-privileged answer instead.
"""

from __future__ import annotations


class AccessError(Exception):
    """Base class for workspace access errors."""


class NotFoundError(AccessError, LookupError):
    """Raised when an explicitly referenced record does not exist."""


class RoleNotFoundError(NotFoundError):
    """Raised when a custom role id is absent from the tenant's role list."""

    def __init__(self, role_id: str) -> None:
        super().__init__(f"Role '{role_id}' not found")
        self.role_id = role_id


class TenantNotFoundError(NotFoundError):
    def __init__(self, tenant_id: str) -> None:
        super().__init__(f"Tenant '{tenant_id}' not found")
        self.tenant_id = tenant_id


class ProjectNotFoundError(NotFoundError):
    def __init__(self, project_id: str) -> None:
        super().__init__(f"Project '{project_id}' not found")
        self.project_id = project_id


class UnauthenticatedError(AccessError):
    """Raised when a mutating role operation has no acting user."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class RoleValidationError(AccessError, ValueError):
    """Raised when a custom role payload is invalid."""


__all__ = [
    "AccessError",
    "NotFoundError",
    "ProjectNotFoundError",
    "RoleNotFoundError",
    "RoleValidationError",
    "TenantNotFoundError",
    "UnauthenticatedError",
]
