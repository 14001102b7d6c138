"""Client-side store for the board state."""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..api import ApiClientError
from ..models import BoardState, Project, Stage, Team
from ..repositories import RepositoryProtocol
from .stage_registry import StageRegistry

logger = logging.getLogger(__name__)

BoardListener = Callable[[BoardState], None]


class ProjectStore:
    """Single source of truth for what the board renders.

    Holds the stage list and the active projects grouped by stage. Every
    mutation notifies subscribers so views can re-render.
    """

    def __init__(
        self,
        repository: RepositoryProtocol,
        stage_registry: StageRegistry | None = None,
    ) -> None:
        self.repository = repository
        self.stage_registry = stage_registry or StageRegistry(repository)
        self._board = BoardState.empty(self.stage_registry.stages)
        self._listeners: list[BoardListener] = []
        self.team_filter: str | None = None
        self.teams: list[Team] = []
        self.last_error: str | None = None

    @property
    def board(self) -> BoardState:
        return self._board

    @property
    def stages(self) -> list[Stage]:
        return self.stage_registry.stages

    @property
    def project_count(self) -> int:
        return self._board.project_count

    def subscribe(self, listener: BoardListener) -> Callable[[], None]:
        """Register a change listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._board)

    async def load(self, team_id: str | None = None, *, keep_filter: bool = False) -> BoardState:
        """Fetch stages and projects and rebuild the board.

        Args:
            team_id: Team filter for this load.
            keep_filter: Reuse the current team filter instead of team_id.

        On failure the board is left with every known stage and no projects.
        """
        if not keep_filter:
            self.team_filter = team_id

        stages = await self.stage_registry.load_stages()
        try:
            grouped = await self.repository.get_projects(self.team_filter)
        except ApiClientError as e:
            logger.error("Failed to load projects: %s", e)
            self.last_error = str(e)
            self._board = BoardState.empty(stages)
        else:
            self.last_error = None
            self._board = BoardState.from_grouped(stages, grouped)
            logger.info(
                "Board loaded: %d projects in %d stages (team=%s)",
                self._board.project_count,
                len(stages),
                self.team_filter or "all",
            )

        self._notify()
        return self._board

    async def reload(self) -> BoardState:
        """Reload with the current team filter."""
        return await self.load(keep_filter=True)

    async def load_teams(self) -> list[Team]:
        """Fetch teams for the filter; failures leave the previous list."""
        try:
            teams = await self.repository.get_teams()
        except ApiClientError as e:
            logger.error("Failed to load teams: %s", e)
            return self.teams
        self.teams = [team for team in teams if not team.is_archived]
        return self.teams

    def find_project(self, project_id: str, stage: str) -> Project | None:
        """Get a project only if it is in the given stage's column."""
        for project in self._board.column(stage):
            if project.id == project_id:
                return project
        return None

    def remove(self, project_id: str, stage: str) -> Project | None:
        """Remove a project from a stage column; returns it if it was there."""
        column = self._board.columns.get(stage)
        if column is None:
            return None
        for index, project in enumerate(column):
            if project.id == project_id:
                del column[index]
                self._notify()
                return project
        return None

    def insert(self, project: Project, stage: str) -> Project:
        """Append a project to a stage column with its stage field updated."""
        moved = project.model_copy(update={"current_stage": stage})
        self._board.columns.setdefault(stage, []).append(moved)
        self._notify()
        return moved

    def move_local(self, project_id: str, from_stage: str, to_stage: str) -> Project | None:
        """Move a project between columns in one step with a single notification."""
        column = self._board.columns.get(from_stage)
        if column is None or to_stage not in self._board.columns:
            return None
        for index, project in enumerate(column):
            if project.id == project_id:
                del column[index]
                moved = project.model_copy(update={"current_stage": to_stage})
                self._board.columns[to_stage].append(moved)
                self._notify()
                return moved
        return None

    def replace(self, board: BoardState) -> None:
        self._board = board
        self._notify()
