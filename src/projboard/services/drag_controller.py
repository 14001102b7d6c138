"""Drag-and-drop state for the board."""

from __future__ import annotations

import asyncio
import logging

from .project_store import ProjectStore
from .transition_engine import StageTransitionEngine

logger = logging.getLogger(__name__)

DRAG_PAYLOAD_PREFIX = "project:"


def encode_payload(project_id: str) -> str:
    """Encode a project id as a drag payload."""
    return f"{DRAG_PAYLOAD_PREFIX}{project_id}"


def decode_payload(payload: str | None) -> str | None:
    """Decode a drag payload; returns None for empty or foreign payloads."""
    if not payload or not payload.startswith(DRAG_PAYLOAD_PREFIX):
        return None
    project_id = payload[len(DRAG_PAYLOAD_PREFIX) :]
    return project_id or None


class DragController:
    """Tracks the dragged project and the hovered column.

    Transient state only: hover highlighting and source lookup on drop.
    Moves themselves are delegated to the transition engine.
    """

    def __init__(self, store: ProjectStore, engine: StageTransitionEngine) -> None:
        self.store = store
        self.engine = engine
        self.dragged_project_id: str | None = None
        self.drag_over_column: str | None = None

    @property
    def is_dragging(self) -> bool:
        return self.dragged_project_id is not None

    def is_highlighted(self, column: str) -> bool:
        """Whether a column should show the drop highlight."""
        return self.is_dragging and self.drag_over_column == column

    def drag_start(self, project_id: str) -> str:
        """Begin dragging a project.

        Returns:
            The drag payload to hand to the input layer, so a drop can
            succeed even if this controller's state was cleared meanwhile.
        """
        self.dragged_project_id = project_id
        logger.debug("drag_start: %s", project_id)
        return encode_payload(project_id)

    def drag_enter(self, column: str) -> None:
        self.drag_over_column = column

    def drag_leave(self) -> None:
        self.drag_over_column = None

    def drop(self, column: str, payload: str | None = None) -> asyncio.Task[None] | None:
        """Drop onto a column.

        The payload's project id wins over in-memory state. Transient state
        is cleared before the move is delegated.

        Returns:
            The engine's remote-write task, or None if nothing moved.
        """
        project_id = decode_payload(payload) or self.dragged_project_id
        self.dragged_project_id = None
        self.drag_over_column = None

        if project_id is None:
            logger.debug("drop on %s with nothing dragged", column)
            return None

        source = self.store.board.find_stage(project_id)
        if source is None:
            logger.debug("drop: %s is no longer on the board", project_id)
            return None
        if source == column:
            return None
        return self.engine.move(project_id, source, column)

    def drag_end(self) -> None:
        """Clear all transient state, whether or not a drop happened."""
        self.dragged_project_id = None
        self.drag_over_column = None
