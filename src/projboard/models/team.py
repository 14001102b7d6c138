"""Team model."""

from pydantic import BaseModel


class Team(BaseModel):
    """A team that can own projects; used for the board's team filter."""

    id: str
    name: str
    slug: str | None = None
    emoji: str | None = None
    color: str | None = None
    is_archived: bool = False

    model_config = {"extra": "ignore"}

    @property
    def display_name(self) -> str:
        if self.emoji:
            return f"{self.emoji} {self.name}"
        return self.name
