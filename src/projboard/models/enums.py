"""Enums for project priority and type."""

from enum import Enum


class Priority(str, Enum):
    """Priority levels for projects."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class ProjectType(str, Enum):
    """Kinds of project offered by the creation wizard."""

    GENERAL = "general"
    CLIENT = "client"
    EVENT = "event"
    INTERNAL = "internal"
    RESEARCH = "research"
