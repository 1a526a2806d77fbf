"""Markdown parsing into a flat list of block nodes, plus queries over them.

A node is a dict whose "type" key names its kind: heading, para, code,
list, ordered, blockquote or hr.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, NamedTuple

from markdown_it import MarkdownIt

_WITH_TABLES = MarkdownIt("commonmark").enable("table")
_PLAIN = MarkdownIt("commonmark")


class _Event(NamedTuple):
    kind: str
    tag: str = ""
    data: Any = None


_PAIRED = {
    "heading": "heading",
    "paragraph": "para",
    "list_item": "item",
    "blockquote": "quote",
}


def _inline_events(tokens: Iterable) -> Iterator[_Event]:
    for tok in tokens:
        kind = tok.type
        if kind in ("text", "text_special"):
            yield _Event("text", data=tok.content)
        elif kind == "code_inline":
            yield _Event("code", data=tok.content)
        elif kind in ("softbreak", "hardbreak"):
            yield _Event("break")
        elif kind == "link_open":
            yield _Event("start", "link", tok.attrGet("href") or "")
        elif kind == "link_close":
            yield _Event("end", "link")
        elif kind == "image":
            yield _Event("start", "other")
            yield from _inline_events(tok.children or [])
            yield _Event("end", "other")
        elif kind.endswith("_open"):
            yield _Event("start", "other")
        elif kind.endswith("_close"):
            yield _Event("end", "other")


def _events(tokens: Iterable) -> Iterator[_Event]:
    for tok in tokens:
        kind = tok.type
        if kind == "inline":
            yield from _inline_events(tok.children or [])
        elif kind.startswith("paragraph_") and tok.hidden:
            continue
        elif kind in ("fence", "code_block"):
            lang = tok.info.strip() if kind == "fence" else ""
            yield _Event("start", "code", lang or None)
            yield _Event("text", data=tok.content)
            yield _Event("end", "code")
        elif kind == "hr":
            yield _Event("rule")
        elif kind == "html_block":
            yield _Event("start", "other")
            yield _Event("end", "other")
        elif kind in ("bullet_list_open", "ordered_list_open"):
            yield _Event("start", "list")
        elif kind in ("bullet_list_close", "ordered_list_close"):
            yield _Event("end", "list", kind == "ordered_list_close")
        elif kind.endswith("_open"):
            yield _Event("start", _PAIRED.get(kind[: -len("_open")], "other"))
        elif kind.endswith("_close"):
            tag = _PAIRED.get(kind[: -len("_close")], "other")
            level = int(tok.tag[1:]) if tag == "heading" else None
            yield _Event("end", tag, level)


def _require_str(value: Any, message: str) -> str:
    if not isinstance(value, str):
        raise TypeError(message)
    return value


def node(type_name: str, **kwargs: Any) -> dict:
    """Build a node dict with the given type and fields."""
    return {"type": type_name, **kwargs}


def parse(text: str) -> list[dict]:
    """Parse Markdown into block nodes."""
    _require_str(text, "md.parse expects Str")
    nodes: list[dict] = []
    buf = ""
    stack: list[str] = []
    items: list[str] = []
    lang = None
    for ev in _events(_WITH_TABLES.parse(text)):
        if ev.kind == "start":
            if ev.tag == "para":
                if "item" not in stack:
                    buf = ""
            elif ev.tag in ("heading", "item", "quote"):
                buf = ""
            elif ev.tag == "code":
                buf = ""
                lang = ev.data
            elif ev.tag == "list":
                items = []
            stack.append(ev.tag if ev.tag != "link" else "other")
        elif ev.kind == "end":
            if stack:
                stack.pop()
            if ev.tag == "heading":
                nodes.append(node("heading", level=ev.data, text=buf.strip()))
            elif ev.tag == "para":
                if "item" not in stack and "quote" not in stack:
                    nodes.append(node("para", text=buf.strip()))
            elif ev.tag == "code":
                nodes.append(node("code", lang=lang, code=buf.rstrip()))
                lang = None
            elif ev.tag == "item":
                items.append(buf.strip())
            elif ev.tag == "list":
                nodes.append(node("ordered" if ev.data else "list", items=items))
                items = []
            elif ev.tag == "quote":
                nodes.append(node("blockquote", text=buf.strip()))
        elif ev.kind == "text":
            buf += ev.data
        elif ev.kind == "code":
            buf += f"`{ev.data}`"
        elif ev.kind == "break":
            buf += "\n"
        elif ev.kind == "rule":
            nodes.append(node("hr"))
    return nodes


def _nodes(value: Any) -> list:
    if not isinstance(value, list):
        raise TypeError("md: expected List (parsed doc)")
    return value


def _field_str(rec: dict, key: str) -> str | None:
    value = rec.get(key)
    return value if isinstance(value, str) else None


def _section(level: int, title: str, content: str) -> dict:
    return node("section", level=level, title=title, content=content.strip())


def sections(nodes: list) -> list[dict]:
    """Group nodes under their headings, joining text bodies with blank lines."""
    result: list[dict] = []
    current: list | None = None
    for item in _nodes(nodes):
        if not isinstance(item, dict):
            continue
        if _field_str(item, "type") == "heading":
            if current is not None:
                result.append(_section(*current))
            level = item.get("level")
            if not isinstance(level, int) or isinstance(level, bool):
                level = 1
            current = [level, _field_str(item, "text") or "", ""]
        elif current is not None:
            text = _field_str(item, "text")
            if text is not None:
                current[2] = f"{current[2]}\n\n{text}" if current[2] else text
    if current is not None:
        result.append(_section(*current))
    return result


def _by_type(nodes: list, type_name: str) -> list[dict]:
    return [
        n for n in _nodes(nodes) if isinstance(n, dict) and _field_str(n, "type") == type_name
    ]


def code_blocks(nodes: list) -> list[dict]:
    """The code nodes."""
    return _by_type(nodes, "code")


def headings(nodes: list) -> list[dict]:
    """The heading nodes."""
    return _by_type(nodes, "heading")


def links(text: str) -> list[dict]:
    """Every link in Markdown source, with its text and destination."""
    _require_str(text, "md.links expects Str (markdown source)")
    found: list[dict] = []
    in_link = False
    url = ""
    label = ""
    for ev in _events(_PLAIN.parse(text)):
        if ev.kind == "start" and ev.tag == "link":
            in_link = True
            url = ev.data
            label = ""
        elif ev.kind == "end" and ev.tag == "link":
            found.append(node("link", text=label, url=url))
            in_link = False
        elif ev.kind == "text" and in_link:
            label += ev.data
    return found


def to_text(text: str) -> str:
    """Strip Markdown formatting, leaving plain text."""
    _require_str(text, "md.to_text expects Str (markdown source)")
    out = []
    for ev in _events(_PLAIN.parse(text)):
        if ev.kind in ("text", "code"):
            out.append(ev.data)
        elif ev.kind == "break":
            out.append("\n")
        elif ev.kind == "end" and ev.tag in ("para", "heading", "item"):
            out.append("\n")
    return "".join(out).strip()