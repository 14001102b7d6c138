"""UI components."""

from .screens.board import BoardScreen
from .widgets.column import StageColumn
from .widgets.project_card import ProjectCard

__all__ = [
    "BoardScreen",
    "ProjectCard",
    "StageColumn",
]
