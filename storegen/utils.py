"""Shared utility functions for storegen.

Provides the two I/O collaborators every generator relies on (reading a
prompt answer and writing a generated file), small file-system helpers, and
Rich-based console output.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()
err_console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Prompt input
# ---------------------------------------------------------------------------


def read_line(prompt: str) -> str:
    """Ask *prompt* on the console and return the trimmed answer.

    Blocks until a full line is entered.  No validation happens here; each
    call site checks its own expectations.
    """
    return console.input(escape(prompt)).strip()


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def write_text(path: str | Path, content: str) -> Path:
    """Write generated *content* to *path*.

    Parent directories are created, an existing file is overwritten, and the
    content is stripped and terminated by exactly one newline.  ``OSError``
    propagates to the caller unchanged.
    """
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(content.strip() + "\n", encoding="utf-8")
    return file_path


async def write_text_async(path: str | Path, content: str) -> Path:
    """Run :func:`write_text` in a worker thread and wait for it."""
    return await asyncio.to_thread(write_text, path, content)


def ensure_file(path: str | Path, content: str = "") -> bool:
    """Create *path* with *content* unless it already exists.

    Returns:
        ``True`` if the file was created, ``False`` if it was left untouched.
    """
    file_path = Path(path)
    if file_path.exists():
        return False
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(content, encoding="utf-8")
    return True


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist."""
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def parse_csv(text: str) -> list[str]:
    """Split a comma-separated answer into trimmed, non-empty items."""
    return [item.strip() for item in text.split(",") if item.strip()]


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message to stderr."""
    err_console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")
