"""Stage column widget."""

import re

from rich.markup import escape
from textual import events
from textual.actions import SkipAction
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Static

from ...models import Project, Stage
from .project_card import ProjectCard


def _css_id(value: str) -> str:
    """Generate a CSS-safe ID fragment from a slug or project id."""
    safe_id = re.sub(r"[^a-zA-Z0-9\-]", "-", value)
    safe_id = safe_id.strip("-").lower()
    return safe_id or "item"


def column_widget_id(slug: str) -> str:
    return f"column-{_css_id(slug)}"


class ProjectListScroll(VerticalScroll):
    """Scroll container for project cards.

    Raises SkipAction for navigation keys so they bubble up to the App
    for card navigation instead of being handled as scroll actions.
    """

    def action_scroll_up(self) -> None:
        raise SkipAction()

    def action_scroll_down(self) -> None:
        raise SkipAction()

    def action_scroll_home(self) -> None:
        raise SkipAction()

    def action_scroll_end(self) -> None:
        raise SkipAction()


class EmptyColumnMessage(Static):
    """Displayed when a column has no projects."""

    pass


class StageColumn(Widget):
    """A single stage column in the board."""

    class Hovered(Message):
        """Pointer moved over this column."""

        def __init__(self, slug: str) -> None:
            super().__init__()
            self.slug = slug

    class Left(Message):
        """Pointer left this column."""

        def __init__(self, slug: str) -> None:
            super().__init__()
            self.slug = slug

    class Dropped(Message):
        """Mouse released over this column."""

        def __init__(self, slug: str) -> None:
            super().__init__()
            self.slug = slug

    def __init__(
        self,
        stage: Stage,
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.stage = stage
        self._projects: list[Project] = []

    @property
    def slug(self) -> str:
        return self.stage.slug

    def compose(self) -> ComposeResult:
        """Create column layout."""
        yield Static(
            self._header_text, classes="column-header", id=f"header-{_css_id(self.slug)}"
        )
        yield ProjectListScroll(classes="column-content", id=f"content-{_css_id(self.slug)}")

    def on_mount(self) -> None:
        if self._projects:
            self.call_after_refresh(self._refresh_cards)

    @property
    def _header_text(self) -> str:
        """Header text with stage color marker and project count."""
        count = len(self._projects)
        marker = "✓ " if self.stage.is_complete else ""
        return f"[{self.stage.color}]■[/] {marker}{escape(self.stage.name)} [dim]({count})[/]"

    def set_projects(self, projects: list[Project]) -> None:
        """Set the projects for this column."""
        self._projects = list(projects)
        self.call_after_refresh(self._refresh_cards)

    def set_highlight(self, highlighted: bool) -> None:
        """Toggle the drop-target highlight."""
        self.set_class(highlighted, "drop-target")

    async def _refresh_cards(self) -> None:
        """Rebuild the project cards in this column."""
        content_id = f"#content-{_css_id(self.slug)}"
        try:
            content = self.query_one(content_id, ProjectListScroll)
        except Exception as e:
            self.log.error(f"Cannot find {content_id}: {e}")
            return

        await content.remove_children()

        if not self._projects:
            await content.mount(EmptyColumnMessage(f"No projects in {self.stage.name}"))
        else:
            board_config = None
            if hasattr(self.app, "config_service"):
                board_config = self.app.config_service.get_board_config()

            for project in self._projects:
                priority_color = "white"
                show_description = True
                if board_config:
                    priority_color = board_config.get_priority_color(project.priority.value)
                    show_description = board_config.show_description
                card = ProjectCard(
                    project,
                    priority_color=priority_color,
                    show_description=show_description,
                    id=f"project-{_css_id(project.id)}",
                )
                await content.mount(card)

        try:
            header = self.query_one(f"#header-{_css_id(self.slug)}", Static)
            header.update(self._header_text)
        except Exception:
            pass

    # Pointer events drive the drag controller through the screen

    def on_mouse_move(self, event: events.MouseMove) -> None:
        self.post_message(self.Hovered(self.slug))

    def on_leave(self, event: events.Leave) -> None:
        over = self.app.mouse_over
        if over is None or self not in over.ancestors_with_self:
            self.post_message(self.Left(self.slug))

    def on_mouse_up(self, event: events.MouseUp) -> None:
        # The screen ends stray drags on MouseUp; this one is a drop
        event.stop()
        self.post_message(self.Dropped(self.slug))

    @property
    def projects(self) -> list[Project]:
        return self._projects

    @property
    def project_count(self) -> int:
        return len(self._projects)

    def focus_project(self, index: int) -> bool:
        """
        Focus the project card at the given index.

        Returns:
            True if a card was focused, False otherwise
        """
        if not self._projects or index < 0 or index >= len(self._projects):
            return False

        project = self._projects[index]
        try:
            card = self.query_one(f"#project-{_css_id(project.id)}", ProjectCard)
            card.focus()
            card.scroll_visible()
            return True
        except Exception:
            return False

    def get_project(self, index: int) -> Project | None:
        if 0 <= index < len(self._projects):
            return self._projects[index]
        return None

    def index_of(self, project_id: str) -> int:
        """Position of a project in this column, or -1."""
        for i, project in enumerate(self._projects):
            if project.id == project_id:
                return i
        return -1
