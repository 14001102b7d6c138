"""YAML-file repository for offline project storage."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ..api import ApiClientError, ApiNotFoundError, ApiValidationError
from ..models import Project, ProjectDraft, Stage, Team, default_stages
from ..utils import now_utc, slugify

logger = logging.getLogger(__name__)


class FileRepository:
    """
    Repository for projects stored in a single YAML file.

    The file holds three lists: stages, teams and projects. Errors are
    raised with the same exception types as the REST client so callers
    recover from both backends the same way.
    """

    def __init__(self, data_file: Path) -> None:
        """
        Initialize repository.

        Args:
            data_file: Path to the YAML data file (created on first write)
        """
        self.data_file = data_file

    async def close(self) -> None:
        pass

    # --- File access ---

    def _read(self) -> dict[str, Any]:
        if not self.data_file.exists():
            return {"stages": [], "teams": [], "projects": []}
        try:
            with self.data_file.open() as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ApiClientError(f"Invalid YAML in {self.data_file}: {e}") from e
        if not isinstance(data, dict):
            raise ApiClientError(f"{self.data_file} must contain a mapping")
        for key in ("stages", "teams", "projects"):
            if not isinstance(data.get(key), list):
                if data.get(key) is not None:
                    logger.warning("Ignoring non-list %r in %s", key, self.data_file)
                data[key] = []
        return data

    def _write(self, data: dict[str, Any]) -> None:
        self.data_file.parent.mkdir(parents=True, exist_ok=True)
        with self.data_file.open("w") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)

    def _load_projects(self, data: dict[str, Any]) -> list[Project]:
        try:
            return [Project.model_validate(item) for item in data["projects"]]
        except ValidationError as e:
            raise ApiClientError(f"Invalid project data in {self.data_file}: {e}") from e

    def _find_index(self, data: dict[str, Any], project_id: str) -> int:
        for index, item in enumerate(data["projects"]):
            if item.get("id") == project_id:
                return index
        raise ApiNotFoundError(f"Project not found: {project_id}")

    # --- Repository operations ---

    async def get_stages(self) -> list[Stage]:
        data = self._read()
        try:
            return [Stage.model_validate(item) for item in data["stages"]]
        except ValidationError as e:
            raise ApiClientError(f"Invalid stage data in {self.data_file}: {e}") from e

    async def get_projects(self, team_id: str | None = None) -> dict[str, list[Project]]:
        grouped: dict[str, list[Project]] = {}
        projects = sorted(self._load_projects(self._read()), key=lambda p: p.sort_order)
        for project in projects:
            if project.is_archived:
                continue
            if team_id and team_id not in project.all_team_ids:
                continue
            grouped.setdefault(project.current_stage, []).append(project)
        return grouped

    async def get_teams(self) -> list[Team]:
        data = self._read()
        try:
            return [Team.model_validate(item) for item in data["teams"]]
        except ValidationError as e:
            raise ApiClientError(f"Invalid team data in {self.data_file}: {e}") from e

    async def create_project(self, draft: ProjectDraft, stage: str) -> Project:
        if not draft.name.strip():
            raise ApiValidationError("Project name is required")

        data = self._read()
        existing = {item.get("id") for item in data["projects"]}
        base_id = slugify(draft.name) or "project"
        project_id = base_id
        counter = 1
        while project_id in existing:
            project_id = f"{base_id}-{counter}"
            counter += 1

        now = now_utc()
        payload = draft.to_payload()
        project = Project(
            id=project_id,
            name=payload["name"],
            description=draft.description or None,
            team_id=draft.team_id,
            team_ids=draft.team_ids,
            emoji=draft.emoji,
            color=draft.color,
            priority=draft.priority,
            current_stage=stage,
            start_date=draft.start_date,
            target_date=draft.target_date,
            sort_order=len(data["projects"]),
            created_at=now,
            updated_at=now,
        )
        data["projects"].append(project.model_dump(mode="json"))
        self._write(data)
        logger.info("Project created: %s (stage=%s)", project.id, stage)
        return project

    async def update_stage(self, project_id: str, stage: str) -> None:
        data = self._read()
        if data["stages"] and stage not in {s.get("slug") for s in data["stages"]}:
            raise ApiValidationError(f"Unknown stage: {stage}")
        index = self._find_index(data, project_id)
        data["projects"][index]["current_stage"] = stage
        data["projects"][index]["updated_at"] = now_utc().isoformat()
        self._write(data)

    async def archive_project(self, project_id: str) -> None:
        data = self._read()
        index = self._find_index(data, project_id)
        data["projects"][index]["is_archived"] = True
        data["projects"][index]["updated_at"] = now_utc().isoformat()
        self._write(data)

    async def suggest(self, prompt: str) -> str:
        # No completion service offline; an empty answer means "no suggestions"
        return ""


DEMO_TEAMS = [
    {"id": "marketing", "name": "Marketing", "emoji": "\U0001f4e3"},
    {"id": "engineering", "name": "Engineering", "emoji": "\U0001f6e0"},
]

DEMO_PROJECTS = [
    ("Spring newsletter", "marketing", "ideation", "medium"),
    ("Website refresh", "marketing", "planning", "high"),
    ("CRM data import", "engineering", "in_progress", "urgent"),
    ("Partner webinar", "marketing", "review", "low"),
    ("SSO rollout", "engineering", "complete", "high"),
]


def seed_demo_data(data_file: Path) -> bool:
    """Write sample stages, teams and projects unless the file already exists.

    Returns:
        True if the file was created.
    """
    if data_file.exists():
        return False

    now = now_utc().isoformat()
    data = {
        "stages": [stage.model_dump(mode="json") for stage in default_stages()],
        "teams": DEMO_TEAMS,
        "projects": [
            {
                "id": slugify(name),
                "name": name,
                "team_id": team_id,
                "current_stage": stage,
                "priority": priority,
                "tasks_total": 4,
                "tasks_completed": index,
                "sort_order": index,
                "created_at": now,
                "updated_at": now,
            }
            for index, (name, team_id, stage, priority) in enumerate(DEMO_PROJECTS)
        ],
    }
    data_file.parent.mkdir(parents=True, exist_ok=True)
    with data_file.open("w") as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
    logger.info("Seeded demo data: %s", data_file)
    return True
