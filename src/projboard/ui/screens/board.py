"""Main project board screen."""

from __future__ import annotations

from textual import events
from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import Screen
from textual.widgets import Footer, Header, Static

from ...models import BoardState, Project
from ...services import DragController, ProjectStore
from ..widgets.column import StageColumn, column_widget_id
from ..widgets.project_card import ProjectCard


class BoardScreen(Screen):
    """Stage columns with keyboard navigation and mouse drag-and-drop."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._current_column = 0
        self._current_project = 0
        self._column_slugs: list[str] = []
        # Survives drag controller resets, like a browser's drag data
        self._drag_payload: str | None = None
        self._pending_focus_id: str | None = None
        self._unsubscribe = None

    @property
    def store(self) -> ProjectStore:
        return self.app.store  # pyrefly: ignore[missing-attribute]

    @property
    def drag(self) -> DragController:
        return self.app.drag_controller  # pyrefly: ignore[missing-attribute]

    @property
    def column_slugs(self) -> list[str]:
        return list(self._column_slugs)

    @property
    def column_count(self) -> int:
        return len(self._column_slugs)

    def compose(self) -> ComposeResult:
        yield Header()
        with Container(id="board-container"):
            yield Horizontal(id="columns")
        yield Static("", id="status-bar")
        yield Footer()

    def on_mount(self) -> None:
        self._unsubscribe = self.store.subscribe(self._on_board_changed)
        self.call_after_refresh(self.render_board)

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_board_changed(self, board: BoardState) -> None:
        self.call_after_refresh(self.render_board)

    async def render_board(self) -> None:
        """Sync column widgets with the store's stages and projects."""
        stages = self.store.stages
        slugs = [stage.slug for stage in stages]
        container = self.query_one("#columns", Horizontal)

        if slugs != self._column_slugs:
            await container.remove_children()
            await container.mount_all(
                StageColumn(stage, id=column_widget_id(stage.slug)) for stage in stages
            )
            self._column_slugs = slugs

        board = self.store.board
        for slug in slugs:
            column = self._get_column_by_slug(slug)
            if column is not None:
                column.set_projects(board.column(slug))
                column.set_highlight(self.drag.is_highlighted(slug))

        self._update_status()
        self.call_after_refresh(self._schedule_focus)

    def _schedule_focus(self) -> None:
        # Columns rebuild their cards after their own refresh
        self.call_after_refresh(self._apply_focus)

    def _apply_focus(self) -> None:
        if self._pending_focus_id:
            position = self._find_project_position(self._pending_focus_id)
            self._pending_focus_id = None
            if position:
                self._current_column, self._current_project = position
                self._update_focus()
                return

        self._current_column = max(0, min(self._current_column, self.column_count - 1))
        column = self._get_column(self._current_column)
        if column and column.project_count > 0:
            self._current_project = min(self._current_project, column.project_count - 1)
        else:
            self._current_project = 0
        self._update_focus()

    def follow_project(self, project_id: str) -> None:
        """Keep focus on a project after the next re-render."""
        self._pending_focus_id = project_id

    def _update_status(self) -> None:
        count = self.store.project_count
        parts = [f"{count} project{'s' if count != 1 else ''} across all stages"]
        if self.store.team_filter:
            team_name = self.store.team_filter
            for team in self.store.teams:
                if team.id == self.store.team_filter:
                    team_name = team.display_name
            parts.append(f"team: {team_name}")
        if self.store.stage_registry.loaded_from_fallback:
            parts.append("[yellow]default stages (server stages unavailable)[/]")
        if self.store.last_error:
            parts.append(f"[red]load failed: {self.store.last_error}[/]")
        try:
            self.query_one("#status-bar", Static).update(" | ".join(parts))
        except Exception:
            pass

    # Drag and drop

    def on_project_card_drag_started(self, message: ProjectCard.DragStarted) -> None:
        self._drag_payload = self.drag.drag_start(message.project_id)

    def on_stage_column_hovered(self, message: StageColumn.Hovered) -> None:
        if not self.drag.is_dragging or self.drag.drag_over_column == message.slug:
            return
        self.drag.drag_enter(message.slug)
        self._refresh_highlights()

    def on_stage_column_left(self, message: StageColumn.Left) -> None:
        if self.drag.drag_over_column == message.slug:
            self.drag.drag_leave()
            self._refresh_highlights()

    def on_stage_column_dropped(self, message: StageColumn.Dropped) -> None:
        if not self.drag.is_dragging and self._drag_payload is None:
            return
        payload = self._drag_payload
        self._drag_payload = None
        project_id = self.drag.dragged_project_id
        if self.drag.drop(message.slug, payload) is not None:
            if project_id:
                self.follow_project(project_id)
            self.app.notify(  # pyrefly: ignore[missing-attribute]
                f"Moved to {self._stage_name(message.slug)}", timeout=2
            )
        self.end_drag()

    def on_mouse_up(self, event: events.MouseUp) -> None:
        # Released outside any column
        self.end_drag()

    def end_drag(self) -> None:
        self._drag_payload = None
        self.drag.drag_end()
        self._refresh_highlights()

    def _refresh_highlights(self) -> None:
        for slug in self._column_slugs:
            column = self._get_column_by_slug(slug)
            if column is not None:
                column.set_highlight(self.drag.is_highlighted(slug))

    def _stage_name(self, slug: str) -> str:
        stage = self.store.stage_registry.get(slug)
        return stage.name if stage else slug.replace("_", " ")

    # Keyboard navigation

    def navigate_column(self, delta: int) -> None:
        """Navigate between columns."""
        new_column = max(0, min(self._current_column + delta, self.column_count - 1))
        if new_column != self._current_column:
            self._current_column = new_column
            column = self._get_column(new_column)
            if column and column.project_count > 0:
                self._current_project = min(self._current_project, column.project_count - 1)
            else:
                self._current_project = 0
            self._update_focus()

    def navigate_project(self, delta: int) -> None:
        """Navigate between projects in the current column."""
        column = self._get_column(self._current_column)
        if column is None or column.project_count == 0:
            return
        new_index = max(0, min(self._current_project + delta, column.project_count - 1))
        if new_index != self._current_project:
            self._current_project = new_index
            self._update_focus()

    def navigate_to_project(self, index: int) -> None:
        """Navigate to a specific index (-1 for last)."""
        column = self._get_column(self._current_column)
        if column is None or column.project_count == 0:
            return
        if index < 0:
            index = column.project_count - 1
        self._current_project = min(index, column.project_count - 1)
        self._update_focus()

    def _find_project_position(self, project_id: str) -> tuple[int, int] | None:
        for col_idx in range(self.column_count):
            column = self._get_column(col_idx)
            if column is None:
                continue
            index = column.index_of(project_id)
            if index >= 0:
                return (col_idx, index)
        return None

    def _get_column(self, index: int) -> StageColumn | None:
        if index < 0 or index >= self.column_count:
            return None
        return self._get_column_by_slug(self._column_slugs[index])

    def _get_column_by_slug(self, slug: str) -> StageColumn | None:
        try:
            return self.query_one(f"#{column_widget_id(slug)}", StageColumn)
        except Exception:
            return None

    def _update_focus(self) -> None:
        column = self._get_column(self._current_column)
        if column:
            column.focus_project(self._current_project)

    def get_current_project(self) -> Project | None:
        """Get the currently selected project."""
        column = self._get_column(self._current_column)
        if column:
            return column.get_project(self._current_project)
        return None

    @property
    def current_stage(self) -> str | None:
        """Slug of the selected column."""
        if 0 <= self._current_column < self.column_count:
            return self._column_slugs[self._current_column]
        return None
