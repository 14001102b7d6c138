"""Projects REST API repository implementation."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from ..api import ApiClient, ApiClientError
from ..models import Project, ProjectDraft, Stage, Team

logger = logging.getLogger(__name__)


class ApiRepository:
    """Repository backed by the dashboard's REST routes."""

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    async def close(self) -> None:
        await self._client.close()

    async def get_stages(self) -> list[Stage]:
        raw = await self._client.get_stages()
        try:
            return [Stage.model_validate(item) for item in raw]
        except ValidationError as e:
            raise ApiClientError(f"Invalid stage data: {e}") from e

    async def get_projects(self, team_id: str | None = None) -> dict[str, list[Project]]:
        """Fetch grouped projects.

        A flat (ungrouped) response is grouped locally by current_stage.
        """
        data = await self._client.get_projects(team_id=team_id, group_by_stage=True)
        projects = data.get("projects") or {}

        try:
            if data.get("grouped") and isinstance(projects, dict):
                for slug, items in projects.items():
                    if items is not None and not isinstance(items, list):
                        raise ApiClientError(f"Unexpected projects for stage {slug!r}")
                return {
                    slug: [Project.model_validate(p) for p in items or []]
                    for slug, items in projects.items()
                }
            if isinstance(projects, list):
                grouped: dict[str, list[Project]] = {}
                for item in projects:
                    project = Project.model_validate(item)
                    grouped.setdefault(project.current_stage, []).append(project)
                return grouped
        except ValidationError as e:
            raise ApiClientError(f"Invalid project data: {e}") from e

        logger.warning("Unexpected projects response shape: %s", type(projects).__name__)
        return {}

    async def get_teams(self) -> list[Team]:
        raw = await self._client.get_teams()
        try:
            return [Team.model_validate(item) for item in raw]
        except ValidationError as e:
            raise ApiClientError(f"Invalid team data: {e}") from e

    async def create_project(self, draft: ProjectDraft, stage: str) -> Project:
        """Create the project, then its milestones.

        Milestones go through their own endpoint once the project id is
        known. A failed milestone write does not undo the project.
        """
        payload: dict[str, Any] = draft.to_payload()
        milestones = payload.pop("milestones", [])
        payload["current_stage"] = stage
        raw = await self._client.create_project(payload)
        raw.setdefault("current_stage", stage)
        try:
            project = Project.model_validate(raw)
        except ValidationError as e:
            raise ApiClientError(f"Invalid project data: {e}") from e

        for name in milestones:
            try:
                await self._client.create_milestone(project.id, name, stage=stage)
            except ApiClientError as e:
                logger.warning("Milestone %r not created for %s: %s", name, project.id, e)
        return project

    async def update_stage(self, project_id: str, stage: str) -> None:
        await self._client.update_project_stage(project_id, stage)

    async def archive_project(self, project_id: str) -> None:
        await self._client.archive_project(project_id)

    async def suggest(self, prompt: str) -> str:
        return await self._client.suggest(prompt)
