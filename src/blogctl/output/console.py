"""Rich Console factory and theme for blogctl output.

Consoles render into a StringIO buffer so renderers keep a plain
``-> str`` contract. Outside a terminal (tests, pipes, CI) Rich drops
the color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

BLOG_THEME = Theme(
    {
        "blog.ok": "bold green",
        "blog.error": "bold red",
        "blog.warning": "bold yellow",
        "blog.op": "bold cyan",
        "blog.key": "dim",
        "blog.id": "bold blue",
        "blog.test_id": "bold magenta",
        "blog.path": "dim",
        "blog.title": "bold",
        "blog.type.blog": "green",
        "blog.type.page": "blue",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    return Console(
        file=StringIO(),
        theme=BLOG_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Rendered text of a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_type(content_type: str) -> str:
    return f"blog.type.{content_type}" if content_type in ("blog", "page") else ""


def style_for_id(item_id: int) -> str:
    """Negative (test content) IDs get their own color."""
    return "blog.test_id" if item_id < 0 else "blog.id"
