"""Archive confirmation dialog."""

from rich.markup import escape
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Static

from ...models import Project


class ConfirmModal(ModalScreen[bool]):
    """Asks before a project leaves the board. Dismisses with True to proceed."""

    DEFAULT_CSS = """
    ConfirmModal {
        align: center middle;
    }

    ConfirmModal > Vertical {
        width: 60;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: thick $warning;
    }

    ConfirmModal #confirm-question {
        text-style: bold;
        margin-bottom: 1;
    }

    ConfirmModal #confirm-detail {
        color: $text-muted;
    }

    ConfirmModal Horizontal {
        height: auto;
        margin-top: 1;
        align-horizontal: right;
    }

    ConfirmModal Button {
        margin-left: 2;
    }
    """

    BINDINGS = [
        Binding("y", "answer(True)", "Archive"),
        Binding("n", "answer(False)", "Keep"),
        Binding("escape", "answer(False)", "Keep", show=False),
    ]

    def __init__(self, project: Project, stage_name: str | None = None) -> None:
        super().__init__()
        self.project = project
        self.stage_name = stage_name or project.current_stage

    @property
    def question(self) -> str:
        return f"Archive '{self.project.display_name}'?"

    @property
    def detail(self) -> str:
        parts = [f"Currently in {self.stage_name}."]
        if self.project.tasks_total:
            open_tasks = self.project.tasks_total - self.project.tasks_completed
            parts.append(f"{max(open_tasks, 0)} of {self.project.tasks_total} tasks still open.")
        parts.append("It will disappear from the board.")
        return " ".join(parts)

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static(escape(self.question), id="confirm-question")
            yield Static(escape(self.detail), id="confirm-detail")
            with Horizontal():
                yield Button("Keep", id="keep")
                yield Button("Archive (y)", id="archive", variant="warning")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "archive")

    def action_answer(self, proceed: bool) -> None:
        self.dismiss(proceed)
