"""Project domain models."""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from .enums import Priority, ProjectType

DEFAULT_EMOJI = "\U0001f4c1"  # 📁
DEFAULT_COLOR = "#6366f1"


class Project(BaseModel):
    """A project card on the board, as returned by the projects API."""

    id: str
    name: str
    description: str | None = None
    team_id: str | None = None
    team_ids: list[str] = Field(default_factory=list)
    emoji: str = DEFAULT_EMOJI
    color: str = DEFAULT_COLOR
    priority: Priority = Priority.MEDIUM
    current_stage: str
    start_date: date | None = None
    target_date: date | None = None
    progress_percent: int = 0
    tasks_total: int = 0
    tasks_completed: int = 0
    is_archived: bool = False
    sort_order: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"extra": "ignore"}

    @field_validator("start_date", "target_date", mode="before")
    @classmethod
    def parse_date(cls, v: Any) -> Any:
        """Accept full timestamps where a date is expected."""
        if isinstance(v, str) and "T" in v:
            return v.split("T", 1)[0]
        if v == "":
            return None
        return v

    @property
    def display_name(self) -> str:
        """Name prefixed with the project emoji."""
        if self.emoji:
            return f"{self.emoji} {self.name}"
        return self.name

    @property
    def task_progress(self) -> float:
        """Fraction of tasks completed (0 when the project has no tasks)."""
        if self.tasks_total <= 0:
            return 0.0
        return min(self.tasks_completed / self.tasks_total, 1.0)

    @property
    def all_team_ids(self) -> list[str]:
        """Primary team plus any additional owning teams, without duplicates."""
        ids = [self.team_id] if self.team_id else []
        ids.extend(t for t in self.team_ids if t not in ids)
        return ids


class ProjectDraft(BaseModel):
    """Accumulating record filled in by the creation wizard."""

    name: str = ""
    description: str = ""
    team_id: str | None = None
    team_ids: list[str] = Field(default_factory=list)
    emoji: str = DEFAULT_EMOJI
    color: str = DEFAULT_COLOR
    priority: Priority = Priority.MEDIUM
    start_date: date | None = None
    target_date: date | None = None
    type: ProjectType = ProjectType.GENERAL
    client_name: str | None = None
    tags: list[str] = Field(default_factory=list)
    budget: float | None = None
    location: str | None = None
    expected_participants: int | None = None
    milestones: list[str] = Field(default_factory=list)
    member_ids: list[str] = Field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        """Build the create-project request body, omitting unset optionals."""
        data = self.model_dump(mode="json")
        payload: dict[str, Any] = {"name": data.pop("name").strip()}
        for key, value in data.items():
            if value is None or value == "" or value == []:
                continue
            payload[key] = value
        return payload


def _parse_budget(value: Any) -> float | None:
    """Parse a budget that may arrive as "$12,500" or a bare number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    cleaned = re.sub(r"[^0-9.]", "", str(value))
    try:
        return float(cleaned)
    except ValueError:
        return None


class ProjectSuggestion(BaseModel):
    """Optional fields proposed by the suggestion service for a new project."""

    name: str | None = None
    description: str | None = None
    type: str | None = None
    milestones: list[str] = Field(default_factory=list)
    tasks: list[str] = Field(default_factory=list)
    budget: float | None = None
    deadline: date | None = None
    client_name: str | None = None

    model_config = {"extra": "ignore"}

    @field_validator("milestones", "tasks", mode="before")
    @classmethod
    def flatten_items(cls, v: Any) -> list[str]:
        """Accept plain strings or objects carrying a name/title."""
        if not v:
            return []
        if not isinstance(v, list):
            raise ValueError(f"expected a list, got {type(v).__name__}")
        items: list[str] = []
        for item in v:
            if isinstance(item, dict):
                label = item.get("name") or item.get("title")
                if label:
                    items.append(str(label))
            elif item:
                items.append(str(item))
        return items

    @field_validator("budget", mode="before")
    @classmethod
    def parse_budget(cls, v: Any) -> float | None:
        return _parse_budget(v)

    @field_validator("deadline", mode="before")
    @classmethod
    def parse_deadline(cls, v: Any) -> date | None:
        """Keep ISO dates; free-form deadlines like "Q2 2025" become None."""
        if isinstance(v, date):
            return v
        if not isinstance(v, str):
            return None
        v = v.strip()
        if "T" in v:
            v = v.split("T", 1)[0]
        try:
            return date.fromisoformat(v)
        except ValueError:
            return None

    @classmethod
    def from_text(cls, text: str) -> ProjectSuggestion:
        """Parse a suggestion from the raw completion text.

        The JSON object may be wrapped in a markdown code fence.

        Raises:
            ValueError: If the text is not a JSON object matching the model.
        """
        body = text.strip()
        fence = re.search(r"```(?:json)?\s*(.*?)```", body, re.DOTALL)
        if fence:
            body = fence.group(1).strip()
        # ValidationError subclasses ValueError
        return cls.model_validate_json(body)

    def apply_to(self, draft: ProjectDraft) -> ProjectDraft:
        """Return a copy of draft pre-filled with every field this suggestion carries."""
        updates: dict[str, Any] = {}
        if self.name:
            updates["name"] = self.name
        if self.description:
            updates["description"] = self.description
        if self.type and self.type.lower() in {t.value for t in ProjectType}:
            updates["type"] = ProjectType(self.type.lower())
        if self.milestones:
            updates["milestones"] = list(self.milestones)
        if self.budget is not None:
            updates["budget"] = self.budget
        if self.deadline is not None:
            updates["target_date"] = self.deadline
        if self.client_name:
            updates["client_name"] = self.client_name
        return draft.model_copy(update=updates)

    @property
    def is_empty(self) -> bool:
        """True when the suggestion carries nothing usable."""
        return not any(
            [
                self.name,
                self.description,
                self.type,
                self.milestones,
                self.tasks,
                self.budget is not None,
                self.deadline,
                self.client_name,
            ]
        )
