"""Service layer for business logic."""

from .config_service import ConfigService
from .creation_workflow import CreationWorkflow, WizardStep
from .drag_controller import DragController
from .project_store import ProjectStore
from .stage_registry import StageRegistry
from .transition_engine import StageTransitionEngine

__all__ = [
    "ConfigService",
    "CreationWorkflow",
    "DragController",
    "ProjectStore",
    "StageRegistry",
    "StageTransitionEngine",
    "WizardStep",
]
