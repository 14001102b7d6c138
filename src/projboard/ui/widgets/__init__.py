"""Widget components."""

from .column import EmptyColumnMessage, StageColumn
from .confirm_modal import ConfirmModal
from .project_card import ProjectCard
from .project_preview_modal import ProjectPreviewModal

__all__ = [
    "ConfirmModal",
    "EmptyColumnMessage",
    "ProjectCard",
    "ProjectPreviewModal",
    "StageColumn",
]
