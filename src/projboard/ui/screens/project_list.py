"""Flat list of every project on the board."""

from __future__ import annotations

from rich.markup import escape
from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, Static

from ...models import BoardState, Project, Stage
from ...services import ProjectStore
from ..widgets.project_preview_modal import ProjectPreviewModal

LIST_COLUMNS = ("Project", "Stage", "Priority", "Target", "Tasks")


def list_rows(board: BoardState, stages: list[Stage]) -> list[tuple[str, tuple]]:
    """Build (project id, cells) rows in stage order, then column order."""
    names = {stage.slug: stage for stage in stages}
    rows: list[tuple[str, tuple]] = []
    for slug, projects in board.columns.items():
        stage = names.get(slug)
        stage_cell = Text(stage.name, style=stage.color) if stage else Text(slug)
        for project in projects:
            tasks = (
                f"{project.tasks_completed}/{project.tasks_total}"
                if project.tasks_total
                else ""
            )
            target = project.target_date.isoformat() if project.target_date else ""
            rows.append(
                (
                    project.id,
                    (
                        escape(project.display_name),
                        stage_cell,
                        project.priority.value,
                        target,
                        tasks,
                    ),
                )
            )
    return rows


class ProjectListScreen(Screen):
    """The board's projects as one table. Enter shows details."""

    BINDINGS = [
        Binding("escape", "close", "Board", show=True),
    ]

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._row_ids: list[str] = []
        self._unsubscribe = None

    @property
    def store(self) -> ProjectStore:
        return self.app.store  # pyrefly: ignore[missing-attribute]

    def compose(self) -> ComposeResult:
        yield Header()
        yield DataTable(id="project-table", cursor_type="row", zebra_stripes=True)
        yield Static("", id="status-bar")
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one(DataTable)
        table.add_columns(*LIST_COLUMNS)
        self._unsubscribe = self.store.subscribe(self._on_board_changed)
        self.refresh_rows()
        table.focus()

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_board_changed(self, board: BoardState) -> None:
        self.call_after_refresh(self.refresh_rows)

    def refresh_rows(self) -> None:
        table = self.query_one(DataTable)
        table.clear()
        rows = list_rows(self.store.board, self.store.stages)
        self._row_ids = [project_id for project_id, _ in rows]
        for project_id, cells in rows:
            table.add_row(*cells, key=project_id)

        count = len(rows)
        status = self.query_one("#status-bar", Static)
        if count:
            status.update(f"{count} project{'s' if count != 1 else ''}")
        else:
            status.update("No projects yet. Press n to create one.")

    def get_current_project(self) -> Project | None:
        table = self.query_one(DataTable)
        if not self._row_ids or not 0 <= table.cursor_row < len(self._row_ids):
            return None
        project_id = self._row_ids[table.cursor_row]
        stage = self.store.board.find_stage(project_id)
        if stage is None:
            return None
        return self.store.find_project(project_id, stage)

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        event.stop()
        project = self.get_current_project()
        if project is None:
            return
        stage = self.app.stage_registry.get(  # pyrefly: ignore[missing-attribute]
            project.current_stage
        )
        self.app.push_screen(ProjectPreviewModal(project, stage))

    def action_close(self) -> None:
        self.app.pop_screen()
