"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`;
unknown ops fall through to a generic key-value renderer. Batch ops
(update, validate) also render their per-file report when they fail,
so the report lands on stderr next to the error line.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from blogctl.output.console import create_console, get_output, style_for_id, style_for_type

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from blogctl.services.result import ServiceResult

    Renderer = Callable[[ServiceResult, Console], None]


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render *result* to a string via Rich (plain text outside a terminal)."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
    else:
        _render_error(result, console, verbose=verbose)
        report = _FAILURE_REPORTS.get(result.op)
        if report is not None and result.data:
            report(result, console)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """One line: ``OK: <op>`` or ``ERROR: <op> - <message>``."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} - {msg}"
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="blog.ok"), Text(f"  {result.op}", style="blog.op"), sep="")


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="blog.key")
    if key == "path":
        v = Text(str(value), style="blog.path")
    elif key == "title":
        v = Text(str(value), style="blog.title")
    elif key == "type":
        v = Text(str(value), style=style_for_type(str(value)))
    else:
        v = Text(str(value))
    console.print(k, v, sep="", soft_wrap=True)


def _plain(console: Console, text: str) -> None:
    """Print without markup or wrapping (JSON, file paths)."""
    console.print(Text(text), soft_wrap=True)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="blog.error"),
        Text(f"  {result.op}", style="blog.op"),
        Text(f" - {msg}"),
        sep="",
        soft_wrap=True,
    )
    if verbose and err is not None:
        console.print(Text(f"  code: {err.code}", style="blog.key"))
        for key, value in err.detail.items():
            _field(console, key, value)


# ── Op renderers ──────────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, ensure_ascii=False, separators=(",", ":")))
        else:
            _field(console, key, value)


def _render_create(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key in ("path", "slug", "type", "title"):
        if key in result.data:
            _field(console, key, result.data[key])
    console.print()
    console.print(Text("Next steps:", style="blog.key"))
    console.print(f"  1. Open {result.data.get('slug', '')}.mdx and write the content")
    console.print("  2. Run 'blogctl update-metadata <file>' before committing")


def _render_generate_ids(result: ServiceResult, console: Console) -> None:
    data = result.data
    _status_line(console, result)
    _field(console, "posts", data.get("posts", 0))
    _field(console, "tags", data.get("tags", 0))
    _field(console, "categories", data.get("categories", 0))

    assigned: dict[str, dict[str, int]] = data.get("assigned", {})
    rows = [
        (label, key, item_id)
        for label, table in assigned.items()
        for key, item_id in table.items()
    ]
    if rows:
        table = Table(show_header=True, pad_edge=False, expand=False, title="New IDs")
        table.add_column("Kind")
        table.add_column("Key")
        table.add_column("ID", justify="right", no_wrap=True)
        for label, key, item_id in rows:
            table.add_row(label, key, Text(str(item_id), style=style_for_id(item_id)))
        console.print(table)
    else:
        console.print(Text("  no new IDs assigned", style="blog.key"))

    stats = data.get("stats", {})
    blog = stats.get("blog")
    if blog:
        _field(console, "blog", f"{blog.get('regular', 0)} regular, {blog.get('test', 0)} test")
    for path in data.get("recovered", []):
        console.print(Text(f"  recovered empty: {path}", style="blog.warning"))


def _render_update_metadata(result: ServiceResult, console: Console) -> None:
    data = result.data
    if result.ok:
        _status_line(console, result)
    for entry in data.get("updated", []):
        fields = ", ".join(entry.get("fields", []))
        if entry.get("reordered"):
            fields = f"{fields}, key order" if fields else "key order"
        console.print(
            Text("  updated ", style="blog.ok"),
            Text(entry["path"], style="blog.path"),
            Text(f" ({fields})"),
            sep="",
        )
    for entry in data.get("errors", []):
        console.print(
            Text("  failed  ", style="blog.error"),
            Text(entry["path"], style="blog.path"),
            Text(f": {entry['error']}"),
            sep="",
        )
    _field(console, "updated", f"{data.get('count', 0)}/{data.get('total', 0)}")
    if data.get("skipped"):
        _field(console, "skipped", len(data["skipped"]))


def _render_validate(result: ServiceResult, console: Console) -> None:
    data = result.data
    if result.ok:
        _status_line(console, result)
    for entry in data.get("files", []):
        console.print(Text(entry["path"], style="blog.path"), soft_wrap=True)
        for error in entry.get("errors", []):
            console.print(Text("  - ", style="blog.error"), Text(error), sep="", soft_wrap=True)
        for warning in entry.get("warnings", []):
            console.print(Text("  ~ ", style="blog.warning"), Text(warning), sep="", soft_wrap=True)
    _field(
        console,
        "checked",
        f"{data.get('checked', 0)} file(s), {data.get('invalid', 0)} invalid, "
        f"{data.get('error_count', 0)} error(s)",
    )


def _render_mappings(result: ServiceResult, console: Console) -> None:
    output = result.data.get("output")
    if output:
        _status_line(console, result)
        _field(console, "path", output)
        return
    _plain(console, json.dumps(result.data.get("payload", {}), indent=2, ensure_ascii=False))


_OP_RENDERERS: dict[str, Renderer] = {
    "create_content": _render_create,
    "generate_ids": _render_generate_ids,
    "update_metadata": _render_update_metadata,
    "validate_content": _render_validate,
    "mappings_ids": _render_mappings,
    "mappings_blog": _render_mappings,
    "mappings_hashes": _render_mappings,
}

_FAILURE_REPORTS: dict[str, Renderer] = {
    "update_metadata": _render_update_metadata,
    "validate_content": _render_validate,
}
