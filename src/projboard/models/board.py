"""Board state model."""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from .project import Project
from .stage import Stage, default_stage

logger = logging.getLogger(__name__)


class BoardState(BaseModel):
    """Active projects grouped by stage slug, in stage display order.

    Each project appears in exactly one column.
    """

    columns: dict[str, list[Project]] = Field(default_factory=dict)

    @classmethod
    def empty(cls, stages: list[Stage]) -> BoardState:
        """Create a board with every known stage present and no projects."""
        return cls(columns={stage.slug: [] for stage in stages})

    @classmethod
    def from_grouped(
        cls, stages: list[Stage], grouped: dict[str, list[Project]]
    ) -> BoardState:
        """
        Create a board from projects grouped by stage slug.

        Projects under an unknown slug are placed in the default stage.
        Archived projects and repeated ids are dropped.
        """
        board = cls.empty(stages)
        fallback = default_stage(stages).slug
        seen: set[str] = set()

        for slug, projects in grouped.items():
            for project in projects:
                if project.is_archived or project.id in seen:
                    continue
                seen.add(project.id)
                target = slug if slug in board.columns else fallback
                if target != slug:
                    logger.debug(
                        "Project %s has unknown stage %r, placing in %s",
                        project.id,
                        slug,
                        target,
                    )
                if project.current_stage != target:
                    project = project.model_copy(update={"current_stage": target})
                board.columns[target].append(project)

        return board

    @property
    def project_count(self) -> int:
        """Total number of projects across all columns."""
        return sum(len(projects) for projects in self.columns.values())

    @property
    def stage_slugs(self) -> list[str]:
        return list(self.columns)

    def column(self, slug: str) -> list[Project]:
        """Get projects for a specific stage (empty if unknown)."""
        return self.columns.get(slug, [])

    def find_stage(self, project_id: str) -> str | None:
        """Find the stage slug currently holding a project."""
        for slug, projects in self.columns.items():
            if any(p.id == project_id for p in projects):
                return slug
        return None

    def get_project(self, project_id: str) -> Project | None:
        """Get a project by id from whichever column holds it."""
        for projects in self.columns.values():
            for project in projects:
                if project.id == project_id:
                    return project
        return None

    def project_ids(self) -> list[str]:
        """All project ids in column order (duplicates preserved)."""
        return [p.id for projects in self.columns.values() for p in projects]

    def copy_board(self) -> BoardState:
        """Shallow snapshot: new lists, same project objects."""
        return BoardState(
            columns={slug: list(projects) for slug, projects in self.columns.items()}
        )
