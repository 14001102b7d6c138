"""Configuration models for projboard.yml."""

from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, Field, field_validator

from .enums import Priority


def _validate_color(v: str) -> str:
    """Validate color is a valid named color or hex code."""
    if v.startswith("#"):
        hex_part = v[1:]
        if len(hex_part) not in (3, 6):
            raise ValueError("Hex color must be 3 or 6 characters (e.g., #fff or #ffffff)")
        if not all(c in "0123456789abcdefABCDEF" for c in hex_part):
            raise ValueError("Invalid hex color code")
    return v


class ApiConfig(BaseModel):
    """Connection settings for the projects REST API."""

    base_url: str = Field(default="http://localhost:3000/api", min_length=1)
    timeout: float = Field(default=30.0, gt=0)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) URL and strip the trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v.rstrip("/")


class BoardViewConfig(BaseModel):
    """Display options for the board."""

    team: str | None = Field(default=None, description="Default team filter (team id)")
    show_description: bool = True
    priority_colors: dict[str, str] = Field(
        default_factory=lambda: {
            Priority.LOW.value: "green",
            Priority.MEDIUM.value: "yellow",
            Priority.HIGH.value: "orange1",
            Priority.URGENT.value: "red",
        }
    )

    @field_validator("team", mode="before")
    @classmethod
    def blank_team_is_all(cls, v: str | None) -> str | None:
        """An empty team means no filter."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("priority_colors")
    @classmethod
    def validate_priority_colors(cls, v: dict[str, str]) -> dict[str, str]:
        """Validate keys are known priorities and values are colors."""
        known = {p.value for p in Priority}
        for key, color in v.items():
            if key not in known:
                raise ValueError(
                    f"Unknown priority '{key}'. Must be one of: {', '.join(sorted(known))}"
                )
            _validate_color(color)
        return v

    def get_priority_color(self, priority: str) -> str:
        return self.priority_colors.get(priority, "white")


class ProjboardConfig(BaseModel):
    """Root configuration from projboard.yml."""

    version: int = 1
    backend: str = Field(default="api", description="Storage backend: api, file")
    data_file: str = Field(
        default=".projboard/projects.yml",
        description="Relative path to the YAML data file (file backend)",
    )
    api: ApiConfig = Field(default_factory=ApiConfig)
    board: BoardViewConfig = Field(default_factory=BoardViewConfig)

    VALID_BACKENDS: ClassVar[tuple[str, ...]] = ("api", "file")

    @field_validator("backend")
    @classmethod
    def validate_backend(cls, v: str) -> str:
        """Validate backend is a supported value."""
        if v not in cls.VALID_BACKENDS:
            raise ValueError(
                f"Invalid backend '{v}'. Must be one of: {', '.join(cls.VALID_BACKENDS)}"
            )
        return v

    @field_validator("data_file")
    @classmethod
    def validate_data_file(cls, v: str) -> str:
        """Validate data_file is a relative path inside the project directory."""
        path = Path(v)
        if path.is_absolute():
            raise ValueError("data_file must be a relative path")
        try:
            resolved = Path().resolve() / path
            resolved.resolve().relative_to(Path().resolve())
        except ValueError as err:
            raise ValueError("data_file must be within the project directory") from err
        return v

    @classmethod
    def default(cls) -> "ProjboardConfig":
        """Return default configuration."""
        return cls()
