"""Application settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    project_root: Path = Field(
        default=Path(),
        description="Path to project root containing projboard.yml",
    )

    api_url: str | None = Field(
        default=None,
        description="Projects API base URL (overrides projboard.yml)",
    )

    api_token: str | None = Field(
        default=None,
        description="Bearer token for the projects API",
    )

    team: str | None = Field(
        default=None,
        description="Initial team filter (team id)",
    )

    demo: bool = Field(
        default=False,
        description="Use the file backend seeded with sample projects",
    )

    verbose: int = Field(
        default=0,
        description="Verbosity level (0=off, 1=INFO, 2+=DEBUG)",
    )

    log_file: Path | None = Field(
        default=None,
        description="Optional path to write logs to file",
    )

    model_config = {
        "env_prefix": "PROJBOARD_",
    }
