"""Keyboard and mouse reference."""

from rich.table import Table
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Static

HELP_SECTIONS: list[tuple[str, list[tuple[str, str]]]] = [
    (
        "Navigation",
        [
            ("h / Left", "Previous stage"),
            ("l / Right", "Next stage"),
            ("k / Up", "Previous project"),
            ("j / Down", "Next project"),
            ("g / Home", "First project in stage"),
            ("G / End", "Last project in stage"),
        ],
    ),
    (
        "Projects",
        [
            ("n", "New project wizard"),
            ("Enter", "Show project details"),
            ("H / Shift+Left", "Move to previous stage"),
            ("L / Shift+Right", "Move to next stage"),
            ("a", "Archive project"),
            ("Mouse drag", "Drop a card on another stage"),
            ("Escape", "Cancel a drag"),
        ],
    ),
    (
        "Board",
        [
            ("t", "Cycle team filter"),
            ("v", "Toggle board / list view"),
            ("r", "Reload from server"),
            ("?", "Show this help"),
            ("q", "Quit"),
        ],
    ),
]


def section_table(rows: list[tuple[str, str]]) -> Table:
    table = Table.grid(padding=(0, 3))
    table.add_column(style="bold", min_width=16)
    table.add_column(style="dim")
    for key, description in rows:
        table.add_row(key, description)
    return table


class HelpScreen(ModalScreen):
    """Shortcut reference. Any key closes it."""

    DEFAULT_CSS = """
    HelpScreen {
        align: center middle;
    }

    HelpScreen > VerticalScroll {
        width: 64;
        height: auto;
        max-height: 90%;
        padding: 0 2;
        background: $surface;
        border: round $primary;
    }

    HelpScreen #help-title {
        text-align: center;
        text-style: bold;
        margin: 1 0;
    }

    HelpScreen .section-title {
        color: $accent;
        text-style: bold underline;
        margin-top: 1;
    }

    HelpScreen #help-footer {
        color: $text-muted;
        text-align: center;
        margin: 1 0;
    }
    """

    def compose(self) -> ComposeResult:
        with VerticalScroll():
            yield Static("projboard shortcuts", id="help-title")
            for title, rows in HELP_SECTIONS:
                yield Static(title, classes="section-title")
                yield Static(section_table(rows))
            yield Static("Press any key to close", id="help-footer")

    def on_key(self, event) -> None:
        event.stop()
        self.dismiss()
