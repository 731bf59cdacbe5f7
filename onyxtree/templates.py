"""Fixed element templates, placeholders and documents with late-bound content.

A :class:`StaticElement` describes an element whose markup is fully known
when it is built. It can be written out directly with ``serialize()``, or
turned into a mutable :class:`~onyxtree.node.Node` tree with
``dynamic_tree()``. A :class:`Placeholder` marks a spot that a
:class:`PlaceholderDocument` fills with a node later on.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable

from .fragments import (
    StaticAttribute,
    StaticCData,
    StaticComment,
    StaticDoctype,
    StaticProcessingInstruction,
    StaticText,
    StaticXmlDeclaration,
)
from .node import Attribute, Node
from .serialize import SpecialParts, escape


class _MarkupNode(Node):
    """A childless node written as a fixed piece of markup."""

    def __init__(self, tag_name: str, markup: str) -> None:
        super().__init__(tag_name, False)
        self.markup = markup

    def serialization_parts(self) -> SpecialParts:
        return SpecialParts(opening=self.markup)

    def shallow_equals(self, other: Node) -> bool:
        return super().shallow_equals(other) and getattr(other, "markup", None) == self.markup


class _GroupNode(Node):
    """A transparent root that writes only its children, at its own level."""

    def __init__(self) -> None:
        super().__init__(".fragment", False)

    def serialization_parts(self) -> SpecialParts:
        return SpecialParts()


def _to_dynamic(child: Any) -> Node:
    """Build a mutable node from a static child."""
    builder = getattr(child, "dynamic_tree", None)
    if builder is not None:
        return builder()
    if isinstance(child, StaticText):
        return _MarkupNode(".text", escape(child.text))
    if isinstance(child, StaticComment):
        return _MarkupNode(".comment", f"<!--{child.text.replace('--', '&#x2d;&#x2d;')}-->")
    if isinstance(child, StaticCData):
        body = child.text.replace("]]>", "&#x5d;&#x5d;&#x3e;")
        return _MarkupNode(".cdata", f"<![CDATA[{body}]]>")
    if isinstance(child, StaticDoctype):
        return _MarkupNode(".doctype", child.serialize())
    if isinstance(child, StaticProcessingInstruction):
        body = child.instruction.replace("?>", "&#x3f;&#x3e;")
        return _MarkupNode(".processing-instruction", f"<?{child.target} {body}?>")
    if isinstance(child, StaticXmlDeclaration):
        standalone = "yes" if child.standalone == "yes" else "no"
        return _MarkupNode(
            ".xml-declaration",
            f'<?xml version="{child.version}" encoding="{child.encoding}" '
            f'standalone="{standalone}"?>',
        )
    raise TypeError(f"Cannot build a node from {child!r}")


def serialize_node(tag_name: str, children: Iterable[Any]) -> str:
    """Write a non-void element; attributes must precede all other children."""
    out = [f"<{tag_name}"]
    opened = False
    for child in children:
        if isinstance(child, StaticAttribute):
            if opened:
                raise ValueError("Cannot add attribute after first child of node.")
        elif not opened:
            out.append(">")
            opened = True
        out.append(child.serialize())
    if not opened:
        out.append(">")
    out.append(f"</{tag_name}>")
    return "".join(out)


def serialize_void_node(tag_name: str, children: Iterable[Any]) -> str:
    """Write a self-closing element; only attributes are allowed as children."""
    out = [f"<{tag_name}"]
    for child in children:
        if not isinstance(child, StaticAttribute):
            raise ValueError("Cannot add non-attribute child for void node.")
        out.append(child.serialize())
    out.append(" />")
    return "".join(out)


class StaticElement:
    """An element with a fixed name, voidness, attributes and children."""

    def __init__(self, name: str, is_void: bool = False, *args: Any) -> None:
        self.name = name
        self.is_void = bool(is_void)
        self.children = tuple(args)

    def size(self) -> int:
        """Length of the serialized markup in UTF-8 bytes."""
        return len(self.serialize().encode("utf-8"))

    def serialize(self) -> str:
        """Write the element verbatim, without escaping."""
        if self.is_void:
            return serialize_void_node(self.name, self.children)
        return serialize_node(self.name, self.children)

    def dynamic_tree(self) -> Node:
        """Build an equivalent mutable node tree."""
        node = Node(self.name, self.is_void)
        for child in self.children:
            if isinstance(child, StaticAttribute):
                node[child.name] = child.value
            else:
                node.add_child(_to_dynamic(child))
        return node

    def __str__(self) -> str:
        return self.serialize()


class Placeholder:
    """Marks a spot in a template to be filled with a node later.

    Placeholder names should be unique within a document.
    """

    TAG_NAME = ".templater::placeholder"

    def __init__(self, name: str) -> None:
        self.name = name

    def size(self) -> int:
        """Length of the serialized markup in UTF-8 bytes."""
        return len(self.serialize().encode("utf-8"))

    def serialize(self) -> str:
        return serialize_void_node(self.TAG_NAME, [StaticAttribute("name", self.name)])

    def dynamic_tree(self) -> Node:
        """Build a void marker node carrying the placeholder name."""
        return Node(self.TAG_NAME, True, Attribute("name", self.name))


def _pairs(bindings: Any) -> Iterable[tuple[str, Node]]:
    if isinstance(bindings, Mapping):
        return bindings.items()
    return bindings


class PlaceholderDocument:
    """A sequence of static top-level items whose placeholders can be bound."""

    def __init__(self, *args: Any) -> None:
        self.children = tuple(args)

    def serialize(self) -> str:
        """Write all top-level items one after another."""
        return "".join(child.serialize() for child in self.children)

    def dynamic_tree(self) -> Node:
        """Build a mutable tree; its root is a transparent group of the items."""
        root = _GroupNode()
        for child in self.children:
            root.add_child(_to_dynamic(child))
        return root

    def serialize_with_placeholders(self, bindings: Any) -> str:
        """Serialize, replacing each named placeholder with a node's markup.

        ``bindings`` is a mapping or an iterable of (name, node) pairs.
        """
        result = self.serialize()
        for name, node in _pairs(bindings):
            marker = Placeholder(name).serialize()
            if marker not in result:
                raise ValueError(f"No dynamic binding {name} exists")
            result = result.replace(marker, node.serialize(), 1)
        return result

    def dynamic_tree_with_placeholders(self, bindings: Any) -> Node:
        """Build a mutable tree with each named placeholder replaced by its node."""
        root = self.dynamic_tree()
        placeholders: dict[str, Node] = {}
        for marker in root.get_children_by_tag_name(Placeholder.TAG_NAME):
            placeholders.setdefault(marker.get_attribute_value("name"), marker)
        for name, node in _pairs(bindings):
            marker = placeholders.pop(name, None)
            if marker is None:
                raise ValueError(f"No dynamic binding {name} exists")
            root.replace_child(marker, node)
        return root

    def __str__(self) -> str:
        return self.serialize()