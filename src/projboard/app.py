"""projboard TUI Application."""

import logging

from textual.app import App
from textual.binding import Binding

from .api import ApiClient, ApiClientError
from .config import Settings
from .models import Project
from .repositories import ApiRepository, FileRepository, RepositoryProtocol, seed_demo_data
from .services import (
    ConfigService,
    CreationWorkflow,
    DragController,
    ProjectStore,
    StageRegistry,
    StageTransitionEngine,
)
from .ui.screens import BoardScreen, CreateProjectModal, HelpScreen, ProjectListScreen
from .ui.widgets import ConfirmModal, ProjectPreviewModal

logger = logging.getLogger(__name__)

ACTION_LABELS = {
    "move": "Move",
    "archive": "Archive",
}


class ProjboardApp(App):
    """projboard - Kanban board for the projects pipeline."""

    TITLE = "projboard"

    CSS_PATH = "ui/styles.tcss"

    BINDINGS = [
        # Core bindings
        Binding("q", "quit", "Quit", show=True),
        Binding("?", "help", "Help", show=True),
        Binding("r", "refresh", "Refresh", show=True),
        # Navigation - vim style
        Binding("h", "nav_left", "← Stage", show=False),
        Binding("j", "nav_down", "↓ Project", show=False),
        Binding("k", "nav_up", "↑ Project", show=False),
        Binding("l", "nav_right", "→ Stage", show=False),
        # Navigation - arrow keys
        Binding("left", "nav_left", "← Stage", show=False),
        Binding("down", "nav_down", "↓ Project", show=False),
        Binding("up", "nav_up", "↑ Project", show=False),
        Binding("right", "nav_right", "→ Stage", show=False),
        # Jump navigation
        Binding("g", "nav_first", "First", show=False),
        Binding("G", "nav_last", "Last", show=False),
        Binding("home", "nav_first", "First", show=False),
        Binding("end", "nav_last", "Last", show=False),
        # Project actions
        Binding("n", "new_project", "New", show=True),
        Binding("enter", "preview_project", "Preview", show=False),
        Binding("H", "move_project_left", "Move ←", show=False),
        Binding("L", "move_project_right", "Move →", show=False),
        Binding("shift+left", "move_project_left", "Move ←", show=False),
        Binding("shift+right", "move_project_right", "Move →", show=False),
        Binding("a", "archive_project", "Archive", show=True),
        Binding("t", "cycle_team", "Team", show=True),
        Binding("v", "toggle_view", "List", show=True),
        Binding("escape", "cancel_drag", "Cancel drag", show=False),
    ]

    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__()
        self.settings = settings or Settings()
        self._init_services()

    def _init_services(self) -> None:
        """Initialize repository and services."""
        self.config_service = ConfigService(self.settings.project_root)
        config = self.config_service.get_config()

        if self.settings.demo or config.backend == "file":
            data_file = self.config_service.data_file
            if self.settings.demo and seed_demo_data(data_file):
                logger.info("Seeded demo data: %s", data_file)
            self.repository: RepositoryProtocol = FileRepository(data_file)
        else:
            client = ApiClient(
                self.settings.api_url or config.api.base_url,
                token=self.settings.api_token,
                timeout=config.api.timeout,
            )
            self.repository = ApiRepository(client)

        self.stage_registry = StageRegistry(self.repository)
        self.store = ProjectStore(self.repository, self.stage_registry)
        self.engine = StageTransitionEngine(
            self.store, self.repository, on_error=self._handle_remote_error
        )
        self.drag_controller = DragController(self.store, self.engine)
        self.workflow = CreationWorkflow(self.repository, self.store)

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.push_screen(BoardScreen())
        if self.config_service.has_config_error:
            self.notify(
                f"Config error, using defaults: {self.config_service.config_error}",
                severity="warning",
                timeout=6,
            )
        self.run_worker(self._initial_load(), exclusive=True, group="load")

    async def _initial_load(self) -> None:
        team = self.settings.team or self.config_service.get_board_config().team
        await self.store.load(team)
        await self.store.load_teams()

    def _handle_remote_error(self, action: str, error: ApiClientError) -> None:
        """Remote write failed; the store has already been reloaded."""
        label = ACTION_LABELS.get(action, action.capitalize())
        self.notify(f"{label} failed: {error}. Board reloaded.", severity="error")

    async def action_quit(self) -> None:
        """Let in-flight writes settle before exiting."""
        await self.engine.wait_idle()
        await self.repository.close()
        self.exit()

    def action_refresh(self) -> None:
        """Reload the board from the backend."""
        self.run_worker(self.store.reload(), exclusive=True, group="load")

    def action_help(self) -> None:
        """Show help screen."""
        self.push_screen(HelpScreen())

    # Navigation actions
    def action_nav_left(self) -> None:
        """Navigate to previous column."""
        screen = self.screen
        if isinstance(screen, BoardScreen):
            screen.navigate_column(-1)

    def action_nav_right(self) -> None:
        """Navigate to next column."""
        screen = self.screen
        if isinstance(screen, BoardScreen):
            screen.navigate_column(1)

    def action_nav_up(self) -> None:
        screen = self.screen
        if isinstance(screen, BoardScreen):
            screen.navigate_project(-1)

    def action_nav_down(self) -> None:
        screen = self.screen
        if isinstance(screen, BoardScreen):
            screen.navigate_project(1)

    def action_nav_first(self) -> None:
        screen = self.screen
        if isinstance(screen, BoardScreen):
            screen.navigate_to_project(0)

    def action_nav_last(self) -> None:
        screen = self.screen
        if isinstance(screen, BoardScreen):
            screen.navigate_to_project(-1)

    # Project actions
    def action_new_project(self) -> None:
        """Open the creation wizard."""
        if not isinstance(self.screen, BoardScreen):
            return
        self.workflow.cancel()
        self.push_screen(  # pyrefly: ignore[no-matching-overload]
            CreateProjectModal(self.workflow, self.store.teams),
            callback=self._handle_project_created,
        )

    def _handle_project_created(self, project: Project | None) -> None:
        if project is None:
            return
        screen = self.screen
        if isinstance(screen, BoardScreen):
            screen.follow_project(project.id)
        self.notify(f"Created {project.display_name}", timeout=2)

    def action_preview_project(self) -> None:
        """Show project preview modal."""
        screen = self.screen
        if not isinstance(screen, BoardScreen):
            return

        project = screen.get_current_project()
        if project is None:
            return

        stage = self.stage_registry.get(project.current_stage)
        self.push_screen(ProjectPreviewModal(project, stage))

    def action_move_project_left(self) -> None:
        """Move current project to the previous stage."""
        self._move_current(-1)

    def action_move_project_right(self) -> None:
        """Move current project to the next stage."""
        self._move_current(1)

    def _move_current(self, direction: int) -> None:
        screen = self.screen
        if not isinstance(screen, BoardScreen):
            return

        project = screen.get_current_project()
        if project is None:
            return

        screen.follow_project(project.id)
        if direction < 0:
            task = self.engine.move_left(project.id)
        else:
            task = self.engine.move_right(project.id)
        if task is None:
            return

        new_stage = self.store.board.find_stage(project.id) or ""
        stage = self.stage_registry.get(new_stage)
        self.notify(f"Moved to {stage.name if stage else new_stage}", timeout=2)

    def action_archive_project(self) -> None:
        """Archive the current project (with confirmation)."""
        screen = self.screen
        if not isinstance(screen, BoardScreen):
            return

        project = screen.get_current_project()
        if project is None:
            return

        def handle_confirm(confirmed: bool | None) -> None:
            if confirmed:
                self._archive(project)

        stage = self.stage_registry.get(project.current_stage)
        self.push_screen(  # pyrefly: ignore[no-matching-overload]
            ConfirmModal(project, stage.name if stage else None),
            callback=handle_confirm,
        )

    def _archive(self, project: Project) -> None:
        if self.engine.archive(project.id, project.current_stage) is not None:
            self.notify("Project archived", timeout=2)

    def action_cycle_team(self) -> None:
        """Switch the team filter: all teams, then each team in turn."""
        options: list[str | None] = [None] + [team.id for team in self.store.teams]
        if len(options) == 1:
            self.notify("No teams to filter by", severity="warning", timeout=2)
            return

        try:
            index = options.index(self.store.team_filter)
        except ValueError:
            index = 0
        team_id = options[(index + 1) % len(options)]

        label = "all teams"
        for team in self.store.teams:
            if team.id == team_id:
                label = team.display_name
        self.notify(f"Showing {label}", timeout=2)
        self.run_worker(self.store.load(team_id), exclusive=True, group="load")

    def action_toggle_view(self) -> None:
        """Switch between the stage columns and the flat project list."""
        screen = self.screen
        if isinstance(screen, ProjectListScreen):
            self.pop_screen()
        elif isinstance(screen, BoardScreen):
            self.push_screen(ProjectListScreen())

    def action_cancel_drag(self) -> None:
        screen = self.screen
        if isinstance(screen, BoardScreen):
            screen.end_drag()


def run(settings: Settings | None = None) -> None:
    """Run the projboard application."""
    app = ProjboardApp(settings)
    app.run()
