"""Shared fixtures for projboard tests."""

from unittest.mock import AsyncMock

import pytest

from projboard.models import Project, Stage, default_stages


@pytest.fixture
def make_project():
    """Factory for projects with sensible defaults."""

    def _make(project_id: str, stage: str = "ideation", **kwargs) -> Project:
        kwargs.setdefault("name", project_id.replace("-", " ").title())
        return Project(id=project_id, current_stage=stage, **kwargs)

    return _make


@pytest.fixture
def two_stages() -> list[Stage]:
    """Minimal pipeline: ideation (default) then planning."""
    return [
        Stage(id="s1", name="Ideation", slug="ideation", sort_order=0, is_default=True),
        Stage(id="s2", name="Planning", slug="planning", sort_order=1),
    ]


@pytest.fixture
def repository():
    """Async repository double with an empty board and the built-in stages."""
    repo = AsyncMock()
    repo.get_stages.return_value = default_stages()
    repo.get_projects.return_value = {}
    repo.get_teams.return_value = []
    repo.update_stage.return_value = None
    repo.archive_project.return_value = None
    repo.suggest.return_value = ""
    return repo
