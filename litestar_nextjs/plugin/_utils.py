"""Console helpers for the Next.js plugin."""

from litestar.cli._utils import console  # pyright: ignore[reportPrivateImportUsage]

__all__ = (
    "console",
    "log_info",
    "log_success",
    "log_warn",
)

_TICK = "[bold green]✓[/]"
_INFO = "[cyan]•[/]"
_WARN = "[yellow]![/]"


def log_success(message: str) -> None:
    """Print a success message with consistent styling."""

    console.print(f"{_TICK} {message}")


def log_info(message: str) -> None:
    """Print an informational message with consistent styling."""

    console.print(f"{_INFO} {message}")


def log_warn(message: str) -> None:
    """Print a warning message with consistent styling."""

    console.print(f"{_WARN} {message}")
