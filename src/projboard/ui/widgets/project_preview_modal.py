"""Project detail modal."""

from rich.markup import escape
from rich.table import Table
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Static

from ...models import Project, Stage


def build_details_table(project: Project, stage: Stage | None = None) -> Table:
    """Render a project's fields as a two-column table."""
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()

    stage_name = stage.name if stage else project.current_stage
    table.add_row("Stage", escape(stage_name))
    table.add_row("Priority", project.priority.value)
    if project.all_team_ids:
        table.add_row("Teams", escape(", ".join(project.all_team_ids)))
    if project.start_date:
        table.add_row("Start", project.start_date.isoformat())
    if project.target_date:
        table.add_row("Target", project.target_date.isoformat())
    if project.tasks_total:
        table.add_row(
            "Tasks",
            f"{project.tasks_completed}/{project.tasks_total} "
            f"({round(project.task_progress * 100)}%)",
        )
    if project.updated_at:
        table.add_row("Updated", project.updated_at.strftime("%Y-%m-%d %H:%M"))
    return table


class ProjectPreviewModal(ModalScreen[None]):
    """Read-only view of a project's details. Any key closes it."""

    DEFAULT_CSS = """
    ProjectPreviewModal {
        align: center middle;
    }

    ProjectPreviewModal > VerticalScroll {
        width: 80;
        height: auto;
        max-height: 90%;
        border: solid $primary;
        background: $surface;
        padding: 0 1;
    }

    ProjectPreviewModal #title-bar {
        height: 1;
        width: 100%;
        background: $primary-darken-2;
        color: $text;
        text-align: center;
    }

    ProjectPreviewModal #description {
        padding: 1 0;
        color: $text-muted;
    }

    ProjectPreviewModal #footer-bar {
        height: 1;
        width: 100%;
        color: $text-muted;
        text-align: center;
    }
    """

    SCROLL_KEYS = {"up", "down", "pageup", "pagedown", "home", "end"}

    def __init__(self, project: Project, stage: Stage | None = None) -> None:
        super().__init__()
        self._project = project
        self._stage = stage

    def compose(self) -> ComposeResult:
        with VerticalScroll():
            yield Static(escape(self._project.display_name), id="title-bar")
            yield Static(build_details_table(self._project, self._stage), id="details")
            if self._project.description:
                yield Static(escape(self._project.description), id="description")
            yield Static("[any key] Close", id="footer-bar")

    def on_key(self, event) -> None:
        """Scroll keys scroll; anything else closes."""
        if event.key in self.SCROLL_KEYS:
            return
        event.stop()
        self.dismiss(None)
