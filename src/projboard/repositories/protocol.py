"""Repository protocol for project storage backends."""

from typing import Protocol

from ..models import Project, ProjectDraft, Stage, Team


class RepositoryProtocol(Protocol):
    """Interface for project storage backends.

    This protocol defines the contract that all repository implementations
    must follow. It supports:
    - The hosted projects REST API
    - A local YAML data file (offline and demo use)

    All methods are coroutines; every call is a suspension point for the
    board's event loop. Failures propagate as ApiClientError subclasses.
    """

    async def get_stages(self) -> list[Stage]:
        """Load the pipeline stage definitions.

        Returns:
            Stages as stored remotely (possibly empty, possibly unsorted).
        """
        ...

    async def get_projects(self, team_id: str | None = None) -> dict[str, list[Project]]:
        """Load active projects grouped by stage slug.

        Args:
            team_id: Optional team filter.
        """
        ...

    async def get_teams(self) -> list[Team]:
        """Load the teams available as board filters."""
        ...

    async def create_project(self, draft: ProjectDraft, stage: str) -> Project:
        """Create a project from a draft in the given stage.

        Returns:
            The created project as stored.
        """
        ...

    async def update_stage(self, project_id: str, stage: str) -> None:
        """Persist a project's move to another stage."""
        ...

    async def archive_project(self, project_id: str) -> None:
        """Mark a project as archived."""
        ...

    async def suggest(self, prompt: str) -> str:
        """Request project setup suggestions as raw text."""
        ...

    async def close(self) -> None:
        """Release any held resources."""
        ...
