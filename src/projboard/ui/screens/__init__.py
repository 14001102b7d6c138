"""Screen components."""

from .board import BoardScreen
from .create_project import CreateProjectModal
from .help import HelpScreen
from .project_list import ProjectListScreen

__all__ = [
    "BoardScreen",
    "CreateProjectModal",
    "HelpScreen",
    "ProjectListScreen",
]
