"""Colorful CLI output helpers."""

from rich.console import Console

CHECK = "\u2713"  # ✓
BULLET = "\u2022"  # •

# Rich drops the markup when stdout is not a terminal
console = Console(highlight=False)


def success(message: str) -> None:
    """Print success message with green checkmark."""
    console.print(f"[green]{CHECK}[/] {message}")


def info(message: str) -> None:
    """Print info message with yellow bullet."""
    console.print(f"[yellow]{BULLET}[/] {message}")
