"""Compact and indented XML serialization of node trees.

A node taking part in serialization offers:

* ``tag_name`` - the element name,
* ``is_void`` - whether it is written as a self-closing tag,
* ``attributes()`` - attribute objects with ``name``, ``value``,
  ``should_escape`` and ``escape_multibyte``,
* ``children()`` - its child nodes in document order.

A node may also define ``serialization_parts()`` returning a
:class:`SpecialParts` (text, comments, declarations, fragments); it is then
written from those parts instead of as an element.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

_ENTITIES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
}


@dataclass(frozen=True)
class SpecialParts:
    """How a node with its own syntax is written.

    ``opening`` is emitted before the children and ``closing`` after them;
    either may be None. ``indent_children`` says whether pretty output
    indents the children one level deeper.
    """

    opening: str | None = None
    closing: str | None = None
    indent_children: bool = False


def escape(text: str, escape_multibyte: bool = False) -> str:
    """Escape markup characters; optionally write non-ASCII as hex references."""
    out = []
    for ch in text:
        entity = _ENTITIES.get(ch)
        if entity is not None:
            out.append(entity)
        elif escape_multibyte and ord(ch) > 0x7F:
            out.append(f"&#x{ord(ch):x};")
        else:
            out.append(ch)
    return "".join(out)


def _special_parts(node: Any) -> SpecialParts | None:
    hook = getattr(node, "serialization_parts", None)
    return hook() if hook is not None else None


def _walk(root: Any) -> Iterator[tuple[Any, bool, SpecialParts | None, bool]]:
    """Yield (node, closing, special, has_children) in document order."""
    stack = [(root, False, _special_parts(root))]
    while stack:
        node, closing, special = stack.pop()
        kids = [] if node.is_void else list(node.children())
        yield node, closing, special, bool(kids)
        if closing:
            continue
        stack.append((node, True, special))
        stack.extend((child, False, _special_parts(child)) for child in reversed(kids))


def _open_tag(node: Any, sort_attributes: bool) -> str:
    attributes = list(node.attributes())
    if sort_attributes:
        attributes.sort(key=lambda attr: attr.name)
    parts = [f"<{node.tag_name}"]
    for attr in attributes:
        value = escape(attr.value, attr.escape_multibyte) if attr.should_escape else attr.value
        parts.append(f' {attr.name}="{value}"')
    return "".join(parts)


def serialize(node: Any) -> str:
    """Serialize a tree without whitespace, keeping attribute order."""
    out: list[str] = []
    for current, closing, special, has_children in _walk(node):
        if special is not None:
            text = special.closing if closing else special.opening
            if text is not None:
                out.append(text)
            continue
        tag = current.tag_name
        if closing:
            if has_children:
                out.append(f"</{tag}>")
            continue
        head = _open_tag(current, False)
        if current.is_void:
            out.append(f"{head}/>")
        elif has_children:
            out.append(f"{head}>")
        else:
            out.append(f"{head}></{tag}>")
    return "".join(out)


def serialize_pretty(node: Any, indentation: str = "\t", sort_attributes: bool = False) -> str:
    """Serialize a tree one node per line, indenting each level by ``indentation``."""
    out: list[str] = []
    depth = 0
    for current, closing, special, has_children in _walk(node):
        if special is not None:
            nests = special.indent_children and has_children
            if closing and nests:
                depth -= 1
            text = special.closing if closing else special.opening
            if text is not None:
                out.append(f"{indentation * depth}{text}\n")
            if not closing and nests:
                depth += 1
            continue
        tag = current.tag_name
        if closing:
            if has_children:
                depth -= 1
                out.append(f"{indentation * depth}</{tag}>\n")
            continue
        head = indentation * depth + _open_tag(current, sort_attributes)
        if current.is_void:
            out.append(f"{head}/>\n")
        elif has_children:
            out.append(f"{head}>\n")
            depth += 1
        else:
            out.append(f"{head}></{tag}>\n")
    result = "".join(out)
    return result[:-1] if result.endswith("\n") else result