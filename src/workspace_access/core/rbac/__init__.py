"""Authorization resolution engine.

The pure functions here are usable headless; the scope gates under
``workspace_access.features`` wrap them for request-scoped use.
"""

from .membership import (
    FlatMembership,
    StructuredMembership,
    decode_members,
    get_workspace_role,
    migrate_members_to_roles,
    normalize_workspace_role,
    resolve_default_role,
)
from .resolver import (
    capabilities_from_permissions,
    check_capability,
    check_permission,
    get_user_role,
    resolve_capabilities,
    resolve_permissions,
    role_display_info,
)
from .schemas import CustomRole, ProjectMember, ProjectSnapshot, WorkspaceMember
from .types import (
    Capability,
    CapabilitySet,
    CustomRoleRef,
    LegacyRole,
    LegacyRoleValue,
    WorkspaceCapability,
    WorkspaceCapabilitySet,
    WorkspaceRole,
    classify_role_value,
)

__all__ = [
    "Capability",
    "CapabilitySet",
    "CustomRole",
    "CustomRoleRef",
    "FlatMembership",
    "LegacyRole",
    "LegacyRoleValue",
    "ProjectMember",
    "ProjectSnapshot",
    "StructuredMembership",
    "WorkspaceCapability",
    "WorkspaceCapabilitySet",
    "WorkspaceMember",
    "WorkspaceRole",
    "capabilities_from_permissions",
    "check_capability",
    "check_permission",
    "classify_role_value",
    "decode_members",
    "get_user_role",
    "get_workspace_role",
    "migrate_members_to_roles",
    "normalize_workspace_role",
    "resolve_capabilities",
    "resolve_default_role",
    "resolve_permissions",
    "role_display_info",
]
