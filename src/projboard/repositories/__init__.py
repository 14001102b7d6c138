"""Repository layer for data access."""

from .api import ApiRepository
from .file import FileRepository, seed_demo_data
from .protocol import RepositoryProtocol

__all__ = [
    "ApiRepository",
    "FileRepository",
    "RepositoryProtocol",
    "seed_demo_data",
]
