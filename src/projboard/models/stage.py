"""Pipeline stage model and the built-in fallback columns."""

from pydantic import BaseModel, Field

STAGE_COMPLETE = "complete"

# Compiled-in column definitions, used whenever the remote stage list is unavailable
DEFAULT_COLUMNS: list[dict[str, str]] = [
    {
        "slug": "ideation",
        "name": "Ideation",
        "color": "#a855f7",
        "icon": "lightbulb",
        "description": "New ideas and concepts being explored",
    },
    {
        "slug": "planning",
        "name": "Planning",
        "color": "#3b82f6",
        "icon": "clipboard-list",
        "description": "Defining scope, requirements, and timeline",
    },
    {
        "slug": "in_progress",
        "name": "In Progress",
        "color": "#f59e0b",
        "icon": "play-circle",
        "description": "Actively being worked on",
    },
    {
        "slug": "review",
        "name": "Review",
        "color": "#10b981",
        "icon": "eye",
        "description": "Under review or testing",
    },
    {
        "slug": STAGE_COMPLETE,
        "name": "Complete",
        "color": "#22c55e",
        "icon": "check-circle",
        "description": "Successfully completed",
    },
]


class Stage(BaseModel):
    """A single column of the project pipeline."""

    id: str
    name: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1)
    color: str = "#6366f1"
    icon: str = "folder"
    description: str | None = None
    sort_order: int = 0
    is_default: bool = False
    is_complete: bool = False

    model_config = {"extra": "ignore"}


def default_stages() -> list[Stage]:
    """Build the fallback stage list from DEFAULT_COLUMNS.

    The first entry is the entry point for new projects and the entry
    named "complete" is marked as the success state.
    """
    return [
        Stage(
            id=column["slug"],
            name=column["name"],
            slug=column["slug"],
            color=column["color"],
            icon=column["icon"],
            description=column["description"],
            sort_order=index,
            is_default=index == 0,
            is_complete=column["slug"] == STAGE_COMPLETE,
        )
        for index, column in enumerate(DEFAULT_COLUMNS)
    ]


def validate_stages(stages: list[Stage]) -> list[Stage]:
    """Check that a stage list is usable as a board definition."""
    if not stages:
        raise ValueError("At least one stage is required")
    slugs = [stage.slug for stage in stages]
    if len(slugs) != len(set(slugs)):
        raise ValueError("Stage slugs must be unique")
    return stages


def default_stage(stages: list[Stage]) -> Stage:
    """Get the entry stage for new projects (first stage if none is flagged)."""
    for stage in stages:
        if stage.is_default:
            return stage
    return stages[0]


def can_delete_stage(stages: list[Stage], slug: str) -> bool:
    """Whether removing a stage would leave at least one stage behind.

    This is a local guard only. The backend is not assumed to enforce it.
    """
    return len(stages) > 1 and any(stage.slug == slug for stage in stages)
