"""Data models."""

from .board import BoardState
from .enums import Priority, ProjectType
from .project import Project, ProjectDraft, ProjectSuggestion
from .projboard_config import ApiConfig, BoardViewConfig, ProjboardConfig
from .stage import (
    DEFAULT_COLUMNS,
    STAGE_COMPLETE,
    Stage,
    can_delete_stage,
    default_stage,
    default_stages,
    validate_stages,
)
from .team import Team

__all__ = [
    "DEFAULT_COLUMNS",
    "STAGE_COMPLETE",
    "ApiConfig",
    "BoardState",
    "BoardViewConfig",
    "Priority",
    "ProjboardConfig",
    "Project",
    "ProjectDraft",
    "ProjectSuggestion",
    "ProjectType",
    "Stage",
    "Team",
    "can_delete_stage",
    "default_stage",
    "default_stages",
    "validate_stages",
]
