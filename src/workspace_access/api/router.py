"""Aggregate API router."""

from __future__ import annotations

from fastapi import APIRouter

from workspace_access.features.projects.router import router as projects_router
from workspace_access.features.roles.router import router as roles_router
from workspace_access.features.workspaces.router import router as workspaces_router

API_PREFIX = "/api/v1"

api_router = APIRouter(prefix=API_PREFIX)
api_router.include_router(roles_router)
api_router.include_router(workspaces_router)
api_router.include_router(projects_router)

__all__ = ["API_PREFIX", "api_router"]
