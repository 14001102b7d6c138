"""projboard - Terminal Kanban board for the projects pipeline."""

__version__ = "0.1.0"
