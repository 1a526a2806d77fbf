"""Building Markdown node lists and rendering them back to Markdown text."""

from __future__ import annotations

from typing import Any

from .mdparse import node


def _require_str(value: Any, message: str) -> str:
    if not isinstance(value, str):
        raise TypeError(message)
    return value


def _require_list(value: Any, message: str) -> list:
    if not isinstance(value, list):
        raise TypeError(message)
    return value


def _display(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "None"
    return str(value)


def _lines(text: str) -> list[str]:
    parts = text.split("\n")
    if parts and parts[-1] == "":
        parts.pop()
    return [p[:-1] if p.endswith("\r") else p for p in parts]


def _heading(level: int, text: Any) -> dict:
    return node("heading", level=level, text=_require_str(text, "md heading expects Str"))


def h1(text: str) -> dict:
    """A level-1 heading node."""
    return _heading(1, text)


def h2(text: str) -> dict:
    """A level-2 heading node."""
    return _heading(2, text)


def h3(text: str) -> dict:
    """A level-3 heading node."""
    return _heading(3, text)


def para(text: str) -> dict:
    """A paragraph node."""
    return node("para", text=_require_str(text, "md.para expects Str"))


def code(lang: str, source: str) -> dict:
    """A fenced code block node."""
    _require_str(lang, "md.code expects Str lang")
    _require_str(source, "md.code expects Str code")
    return node("code", lang=lang, code=source)


def bullet_list(items: list) -> dict:
    """An unordered list node."""
    return node("list", items=_require_list(items, "md.list expects List"))


def ordered(items: list) -> dict:
    """An ordered list node."""
    return node("ordered", items=_require_list(items, "md.ordered expects List"))


def table(headers: list, rows: list) -> dict:
    """A table node from header cells and rows of cells."""
    _require_list(headers, "md.table expects List headers")
    _require_list(rows, "md.table expects List rows")
    return node("table", headers=headers, rows=rows)


def link(text: str, url: str) -> dict:
    """An inline link node."""
    _require_str(text, "md.link expects Str text")
    _require_str(url, "md.link expects Str url")
    return node("link", text=text, url=url)


def blockquote(text: str) -> dict:
    """A block quote node."""
    return node("blockquote", text=_require_str(text, "md.blockquote expects Str"))


def hr() -> dict:
    """A horizontal rule node."""
    return node("hr")


def raw(text: str) -> dict:
    """A node whose text is emitted verbatim."""
    return node("raw", text=_require_str(text, "md.raw expects Str"))


def doc(nodes: list) -> list:
    """A document: the list of nodes itself."""
    return _require_list(nodes, "md.doc expects List of nodes")


def _field_str(rec: dict, key: str) -> str:
    value = rec.get(key)
    return value if isinstance(value, str) else ""


def _render_table(rec: dict) -> str:
    headers = rec.get("headers")
    rows = rec.get("rows")
    if not isinstance(headers, list) or not isinstance(rows, list):
        return ""
    lines = ["|" + "".join(f" {_display(h)} |" for h in headers)]
    lines.append("|" + " --- |" * len(headers))
    lines.extend(
        "|" + "".join(f" {_display(c)} |" for c in row)
        for row in rows
        if isinstance(row, list)
    )
    return "\n".join(lines) + "\n\n"


def _render_node(rec: dict) -> str:
    kind = _field_str(rec, "type")
    if kind == "heading":
        level = rec.get("level")
        if not isinstance(level, int) or isinstance(level, bool):
            level = 1
        return "#" * max(level, 0) + " " + _field_str(rec, "text") + "\n\n"
    if kind == "para":
        return _field_str(rec, "text") + "\n\n"
    if kind == "code":
        lang = rec.get("lang")
        lang = lang if isinstance(lang, str) else ""
        return f"```{lang}\n{_field_str(rec, 'code')}\n```\n\n"
    if kind == "list":
        items = rec.get("items")
        if not isinstance(items, list):
            return ""
        return "".join(f"- {_display(i)}\n" for i in items) + "\n"
    if kind == "ordered":
        items = rec.get("items")
        if not isinstance(items, list):
            return ""
        return "".join(f"{n}. {_display(i)}\n" for n, i in enumerate(items, 1)) + "\n"
    if kind == "table":
        return _render_table(rec)
    if kind == "blockquote":
        return "".join(f"> {line}\n" for line in _lines(_field_str(rec, "text"))) + "\n"
    if kind == "hr":
        return "---\n\n"
    if kind == "link":
        return f"[{_field_str(rec, 'text')}]({_field_str(rec, 'url')})"
    if kind == "raw":
        return _field_str(rec, "text")
    return ""


def render(nodes: list) -> str:
    """Render a list of nodes as Markdown text."""
    _require_list(nodes, "md.render expects List")
    return "".join(_render_node(n) for n in nodes if isinstance(n, dict)).rstrip()