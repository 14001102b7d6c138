"""Project card widget."""

from __future__ import annotations

from rich.markup import escape
from textual import events
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Static

from ...models import Project


class ProjectCard(Widget, can_focus=True):
    """A project card displayed in a stage column."""

    class DragStarted(Message):
        """Posted when the mouse is pressed on a card."""

        def __init__(self, project_id: str) -> None:
            super().__init__()
            self.project_id = project_id

    def __init__(
        self,
        project: Project,
        priority_color: str = "white",
        show_description: bool = True,
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self._project = project
        self._priority_color = priority_color
        self._show_description = show_description

    @property
    def project(self) -> Project:
        """Get the project for this card."""
        return self._project

    def compose(self) -> ComposeResult:
        """Create card layout."""
        title = self._truncate(self._project.display_name, 40)
        yield Static(escape(title), classes="project-title")

        with Horizontal(classes="project-meta"):
            yield Static(self._format_priority(), classes="project-priority")
            progress = self._format_progress()
            if progress:
                yield Static(progress, classes="project-progress")

        if self._project.target_date:
            yield Static(
                f"[dim]due {self._project.target_date.isoformat()}[/]",
                classes="project-due",
            )

        if self._show_description and self._project.description:
            preview = self._get_description_preview()
            if preview:
                yield Static(escape(preview), classes="project-preview")

    def on_mouse_down(self, event: events.MouseDown) -> None:
        if event.button == 1:
            self.focus()
            self.post_message(self.DragStarted(self._project.id))

    def _format_priority(self) -> str:
        priority = self._project.priority.value
        return f"[{self._priority_color}]●[/] {priority}"

    def _format_progress(self) -> str:
        """Tasks done/total, empty when the project has no tasks."""
        if self._project.tasks_total <= 0:
            return ""
        percent = round(self._project.task_progress * 100)
        return (
            f"[dim]{self._project.tasks_completed}/{self._project.tasks_total} "
            f"({percent}%)[/]"
        )

    def _truncate(self, text: str, max_len: int) -> str:
        """Truncate text with ellipsis."""
        if len(text) <= max_len:
            return text
        return text[: max_len - 1] + "…"

    def _get_description_preview(self) -> str:
        """First non-empty line of the description."""
        for line in (self._project.description or "").split("\n"):
            line = line.strip()
            if line:
                return self._truncate(line, 50)
        return ""
