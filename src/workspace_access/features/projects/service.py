"""Explicit persistence of migrated project membership."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from workspace_access.common.logging import log_context
from workspace_access.core.errors import ProjectNotFoundError
from workspace_access.core.rbac.membership import is_flat, migrate_members_to_roles
from workspace_access.core.rbac.schemas import ProjectMember
from workspace_access.core.store import AccessStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MigrationResult:
    project_id: str
    migrated: bool
    members: tuple[ProjectMember, ...]


class ProjectMembershipService:
    """Rewrite pre-migration ``members`` lists as structured records."""

    def __init__(self, store: AccessStore) -> None:
        self._store = store

    async def migrate_project_members(
        self,
        project_id: str,
        *,
        dry_run: bool = False,
    ) -> MigrationResult:
        """Persist structured membership for ``project_id`` if it is still flat.

        Already-structured projects are left untouched. With ``dry_run`` the
        result is computed but nothing is written.
        """

        project = await self._store.get_project(project_id)
        raw = await self._store.get_stored_members(project_id)
        if project is None or raw is None:
            raise ProjectNotFoundError(project_id)

        if not is_flat(raw):
            logger.debug(
                "projects.members.migrate.skipped",
                extra=log_context(project_id=project_id, reason="already_structured"),
            )
            return MigrationResult(project_id=project_id, migrated=False, members=tuple(project.members))

        members = migrate_members_to_roles(raw, project.owner_id)
        if not dry_run:
            await self._store.write_project_members(project_id, members)

        logger.info(
            "projects.members.migrate.success",
            extra=log_context(
                project_id=project_id,
                tenant_id=project.tenant_id,
                member_count=len(members),
                dry_run=dry_run,
            ),
        )
        return MigrationResult(project_id=project_id, migrated=not dry_run, members=tuple(members))


__all__ = ["MigrationResult", "ProjectMembershipService"]
