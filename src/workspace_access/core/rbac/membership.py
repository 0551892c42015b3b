"""Membership normalization between flat member-id lists and structured records.

Projects created before structured membership stored ``members`` as a bare
list of user ids. Those are decoded here, at the storage boundary, into the
same ``ProjectMember`` records newer projects store, so nothing downstream
has to ask whether an entry is a string or a record.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from workspace_access.common.logging import log_context
from workspace_access.common.time import utc_now

from .registry import WORKSPACE_ROLE_ALIASES
from .schemas import CustomRole, ProjectMember, WorkspaceMember
from .types import LegacyRole, WorkspaceRole

logger = logging.getLogger(__name__)

# Role given to members that predate structured membership.
LEGACY_MEMBER_ROLE = LegacyRole.EDITOR

# Ownership is never granted by invitation.
INVITABLE_LEGACY_ROLES: frozenset[str] = frozenset(
    {LegacyRole.EDITOR.value, LegacyRole.VIEWER.value}
)


@dataclass(frozen=True)
class FlatMembership:
    """Pre-migration membership: user ids only."""

    user_ids: tuple[str, ...]


@dataclass(frozen=True)
class StructuredMembership:
    members: tuple[ProjectMember, ...]


Membership = FlatMembership | StructuredMembership

RawMembers = Sequence[str | Mapping[str, Any] | ProjectMember]


def build_member(
    user_id: str,
    role: str | LegacyRole,
    *,
    invited_by: str | None,
    now: datetime | None = None,
) -> ProjectMember:
    """Return a structured membership record for a newly added member."""

    value = role.value if isinstance(role, LegacyRole) else role
    return ProjectMember(
        user_id=user_id,
        role=value,
        joined_at=now or utc_now(),
        invited_by=invited_by,
    )


def _upgrade_legacy_entry(user_id: str, owner_id: str, now: datetime | None) -> ProjectMember:
    # Historical join time is unrecoverable; "now" is the accepted approximation.
    return build_member(user_id, LEGACY_MEMBER_ROLE, invited_by=owner_id, now=now)


def decode_members(
    raw: RawMembers | None,
    owner_id: str,
    *,
    now: datetime | None = None,
) -> Membership:
    """Decode a stored ``members`` field into a flat or structured membership.

    A list of strings is flat. Anything containing records is structured;
    string entries inside such a mixed list are upgraded the same way
    :func:`migrate_members_to_roles` upgrades a flat list. Malformed records
    are dropped with a warning rather than failing the read.
    """

    if not raw:
        return StructuredMembership(members=())

    if all(isinstance(entry, str) for entry in raw):
        return FlatMembership(user_ids=tuple(raw))  # type: ignore[arg-type]

    members: list[ProjectMember] = []
    for entry in raw:
        if isinstance(entry, str):
            if entry != owner_id:
                members.append(_upgrade_legacy_entry(entry, owner_id, now))
            continue
        if isinstance(entry, ProjectMember):
            members.append(entry)
            continue
        try:
            members.append(ProjectMember.model_validate(entry))
        except ValidationError:
            logger.warning(
                "membership.decode.invalid_entry",
                extra=log_context(owner_id=owner_id, entry=repr(entry)),
            )
    return StructuredMembership(members=tuple(members))


def migrate_members_to_roles(
    members: Membership | RawMembers | None,
    owner_id: str,
    *,
    now: datetime | None = None,
) -> list[ProjectMember]:
    """Return structured membership records for ``members``.

    Structured input comes back unchanged. Flat input drops ``owner_id`` and
    maps every other id to an ``Editor`` record invited by the owner. Nothing
    is persisted here; callers write the result back explicitly when they
    mean to migrate.
    """

    if members is None:
        return []
    if not isinstance(members, (FlatMembership, StructuredMembership)):
        members = decode_members(members, owner_id, now=now)

    if isinstance(members, StructuredMembership):
        return list(members.members)

    return [
        _upgrade_legacy_entry(user_id, owner_id, now)
        for user_id in members.user_ids
        if user_id != owner_id
    ]


def is_flat(raw: RawMembers | None) -> bool:
    """Return ``True`` when ``raw`` still holds any pre-migration string entries."""

    return bool(raw) and any(isinstance(entry, str) for entry in raw)  # type: ignore[union-attr]


# ---------------------------------------------------------------------------
# Workspace scope
# ---------------------------------------------------------------------------

_WORKSPACE_ROLES_BY_VALUE = {role.value: role for role in WorkspaceRole}


def normalize_workspace_role(value: str | WorkspaceRole | None) -> WorkspaceRole | None:
    """Map a stored workspace role to its canonical value.

    ``Editor`` and ``Viewer`` are read as ``Member`` and ``Guest``. Unknown
    values resolve to ``None``.
    """

    if value is None:
        return None
    if isinstance(value, WorkspaceRole):
        return value
    canonical = _WORKSPACE_ROLES_BY_VALUE.get(value)
    if canonical is not None:
        return canonical
    return WORKSPACE_ROLE_ALIASES.get(value)


def get_workspace_role(
    members: Iterable[WorkspaceMember],
    tenant_id: str | None,
    user_id: str | None,
) -> WorkspaceRole | None:
    """Resolve ``user_id``'s role inside the workspace ``tenant_id``.

    A personal workspace shares its id with its creator, who always owns it.
    """

    if not user_id or not tenant_id:
        return None
    if user_id == tenant_id:
        return WorkspaceRole.OWNER
    for member in members:
        if member.user_id == user_id:
            return normalize_workspace_role(member.role)
    return None


# ---------------------------------------------------------------------------
# Default role for new members
# ---------------------------------------------------------------------------


def resolve_default_role(
    custom_roles: Sequence[CustomRole] | None,
    default_role_id: str | None,
) -> str:
    """Return the role value assigned to a newly invited project member.

    Preference order: the tenant's configured default role id (if the role
    still exists, or is the ``Editor``/``Viewer`` literal), the custom role
    flagged ``is_default``, then ``Editor``.
    """

    roles = custom_roles or ()
    known = {role.id for role in roles} | INVITABLE_LEGACY_ROLES
    if default_role_id and default_role_id in known:
        return default_role_id
    for role in roles:
        if role.is_default:
            return role.id
    return LEGACY_MEMBER_ROLE.value


__all__ = [
    "FlatMembership",
    "INVITABLE_LEGACY_ROLES",
    "LEGACY_MEMBER_ROLE",
    "Membership",
    "RawMembers",
    "StructuredMembership",
    "build_member",
    "decode_members",
    "get_workspace_role",
    "is_flat",
    "migrate_members_to_roles",
    "normalize_workspace_role",
    "resolve_default_role",
]
