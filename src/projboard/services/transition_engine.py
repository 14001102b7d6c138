"""Optimistic stage transitions for board projects."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from ..api import ApiClientError
from ..repositories import RepositoryProtocol
from .project_store import ProjectStore

logger = logging.getLogger(__name__)

ErrorHandler = Callable[[str, Exception], None]


class StageTransitionEngine:
    """
    Moves and archives projects optimistically.

    The local board changes synchronously, before any network call, and the
    remote write runs as an asyncio task. If the remote write fails the
    whole board is reloaded from the backend; no local rollback is attempted.

    Overlapping writes for the same project are not ordered: whichever
    response lands last wins.
    """

    def __init__(
        self,
        store: ProjectStore,
        repository: RepositoryProtocol,
        on_error: ErrorHandler | None = None,
    ) -> None:
        self.store = store
        self.repository = repository
        self.on_error = on_error
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> set[asyncio.Task[None]]:
        """Remote writes still in flight."""
        return set(self._pending)

    def move(
        self, project_id: str, from_stage: str, to_stage: str
    ) -> asyncio.Task[None] | None:
        """
        Move a project to another stage.

        Must be called from the running event loop.

        Returns:
            The task carrying the remote write, or None when nothing changed
            (same stage, or the project is not in from_stage).
        """
        if from_stage == to_stage:
            logger.debug("move: %s already in %s", project_id, to_stage)
            return None

        moved = self.store.move_local(project_id, from_stage, to_stage)
        if moved is None:
            logger.debug("move: %s not found in %s, ignoring", project_id, from_stage)
            return None

        logger.info("Project moved: %s (%s -> %s)", project_id, from_stage, to_stage)
        return self._schedule(
            "move",
            self.repository.update_stage(project_id, to_stage),
        )

    def archive(self, project_id: str, stage: str) -> asyncio.Task[None] | None:
        """
        Archive a project, removing it from the board.

        Returns:
            The task carrying the remote write, or None if the project is
            not in the given stage.
        """
        removed = self.store.remove(project_id, stage)
        if removed is None:
            logger.debug("archive: %s not found in %s, ignoring", project_id, stage)
            return None

        logger.info("Archiving project: %s (from %s)", project_id, stage)
        return self._schedule(
            "archive",
            self.repository.archive_project(project_id),
        )

    def move_left(self, project_id: str) -> asyncio.Task[None] | None:
        """Move a project to the previous stage (no-op at the first stage)."""
        stage = self.store.board.find_stage(project_id)
        if stage is None:
            return None
        target = self.store.stage_registry.previous_slug(stage)
        if target is None:
            return None
        return self.move(project_id, stage, target)

    def move_right(self, project_id: str) -> asyncio.Task[None] | None:
        """Move a project to the next stage (no-op at the last stage)."""
        stage = self.store.board.find_stage(project_id)
        if stage is None:
            return None
        target = self.store.stage_registry.next_slug(stage)
        if target is None:
            return None
        return self.move(project_id, stage, target)

    async def wait_idle(self) -> None:
        """Wait for every in-flight remote write (and its reconciliation)."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    def _schedule(self, action: str, remote_call: Awaitable[None]) -> asyncio.Task[None]:
        task = asyncio.get_running_loop().create_task(self._commit(action, remote_call))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _commit(self, action: str, remote_call: Awaitable[None]) -> None:
        try:
            await remote_call
        except ApiClientError as e:
            logger.error("Remote %s failed, reloading board: %s", action, e)
            await self.store.reload()
            if self.on_error is not None:
                self.on_error(action, e)
