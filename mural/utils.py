"""Shared utility functions for mural.

Provides name sanitising, JSON loading and the Rich-based console output used by the CLI to
report what was generated and what to do next.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

console = Console()


# ---------------------------------------------------------------------------
# Name helpers
# ---------------------------------------------------------------------------


def sanitize_name(name: str) -> str:
    """Convert an arbitrary app name to a safe directory name.

    * Lowercases the input.
    * Replaces spaces, path separators and other characters outside
      ``[a-z0-9_-]`` with hyphens.
    * Collapses consecutive hyphens and strips leading/trailing hyphens.

    Examples::

        sanitize_name("Blog Post") -> "blog-post"
        sanitize_name("../admin") -> "admin"
    """
    result = re.sub(r"[^a-zA-Z0-9_-]", "-", name.strip().lower())
    result = re.sub(r"-+", "-", result)
    return result.strip("-")


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def load_json(path: str | Path) -> Any:
    """Load and parse a JSON file.

    Args:
        path: Path to the JSON file.

    Returns:
        The parsed document (usually a dict).

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    raw = Path(path).read_text(encoding="utf-8")
    return json.loads(raw)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_file_table(root: Path, paths: Iterable[Path], title: str = "Generated") -> None:
    """Print the files and directories created under *root*, one per row."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Path", no_wrap=True)

    for path in paths:
        try:
            shown = path.relative_to(root)
        except ValueError:
            shown = path
        table.add_row(str(shown) if str(shown) != "." else f"{root.name}/")

    console.print(table)
    console.print()


def print_next_steps(message: str, title: str = "Next steps") -> None:
    """Print the post-scaffold instructions in a panel."""
    console.print(Panel(Text(message.rstrip("\n")), title=title, expand=False))


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
