"""Mutable XML element trees with attribute lookup, searching and copying."""

from __future__ import annotations

import copy
from dataclasses import dataclass, replace
from typing import Any, Iterable, Iterator

from .handle import NodeHandle
from .serialize import serialize as _serialize
from .serialize import serialize_pretty as _serialize_pretty


@dataclass
class Attribute:
    """A named attribute value, with escaping options used when serializing."""

    name: str
    value: str = ""
    should_escape: bool = True
    escape_multibyte: bool = False


def _flatten(args: Iterable[Any]) -> Iterator[Any]:
    for item in args:
        if isinstance(item, (list, tuple)):
            yield from item
        else:
            yield item


class Node:
    """An element with ordered attributes and child nodes.

    Positional arguments after ``tag_name`` and ``is_void`` may be
    :class:`Attribute` objects, nodes, :class:`NodeHandle` objects, or lists
    and tuples of those.
    """

    _indentation_sequence = "\t"
    _sort_attributes = False

    def __init__(self, tag_name: str, is_void: bool = False, *args: Any) -> None:
        self.tag_name = tag_name
        self.is_void = bool(is_void)
        self._attributes: list[Attribute] = []
        self._children: list[Node] = []
        self._parent: Node | None = None

        attributes: list[Attribute] = []
        children: list[Any] = []
        for item in _flatten(args):
            if isinstance(item, Attribute):
                attributes.append(item)
            elif isinstance(item, (Node, NodeHandle)):
                children.append(item)
            else:
                raise TypeError(f"Unsupported constructor argument: {item!r}")

        for child in children:
            if isinstance(child, NodeHandle) and not child.owning():
                raise ValueError("Mixing Nodes with different ownership modes")

        for attribute in attributes:
            if self.has_attribute(attribute.name):
                raise ValueError("Adding duplicate Attribute")
            self._attributes.append(replace(attribute))

        for child in children:
            self.add_child(child)

    # ----------------------------------------------------------------- tree

    def _ancestors(self) -> Iterator[Node]:
        node = self._parent
        while node is not None:
            yield node
            node = node._parent

    def _contains(self, node: Node) -> bool:
        return any(ancestor is self for ancestor in node._ancestors())

    def _descendants(self) -> Iterator[Node]:
        """Yield every node below this one in document order."""
        stack = list(reversed(self._children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node._children))

    def _checked_child(self, child: Any, target: Node) -> Node:
        if isinstance(child, NodeHandle):
            if not child:
                raise ValueError("Cannot add an empty handle")
            node, owning = child.get(), child.owning()
        else:
            node, owning = child, True
        if not isinstance(node, Node):
            raise TypeError(f"Not a node: {node!r}")
        if target.is_void:
            raise RuntimeError(f"Void {target.tag_name} cannot have children.")
        if node.is_in_tree():
            raise RuntimeError(
                f"Attempted to add child to {target.tag_name} "
                "that is already a child of another Object."
            )
        if not owning:
            raise RuntimeError(
                f"Attempted to add child to {target.tag_name} with different owning mode."
            )
        if node is target or any(ancestor is node for ancestor in target._ancestors()):
            raise ValueError("A node cannot become a descendant of itself")
        if isinstance(child, NodeHandle):
            child.release()
        return node

    def _detach(self, child: Node) -> int:
        position = next(i for i, kid in enumerate(self._children) if kid is child)
        del self._children[position]
        child._parent = None
        return position

    def add_child(self, child: Any) -> Node:
        """Append a node (or the node of a handle) and return it."""
        node = self._checked_child(child, self)
        node._parent = self
        self._children.append(node)
        return node

    def remove_child(self, child: Node) -> NodeHandle:
        """Detach a descendant and return an owning handle to it.

        An empty handle is returned when the node is not below this one.
        """
        if not child.is_in_tree() or not self._contains(child):
            return NodeHandle()
        assert child._parent is not None
        child._parent._detach(child)
        return NodeHandle(child, True)

    def replace_child(self, old: Node, new: Any) -> NodeHandle:
        """Put ``new`` in the place of descendant ``old``; return a handle to ``old``."""
        if not old.is_in_tree() or not self._contains(old):
            raise ValueError("Node to replace is not a descendant of this node")
        parent = old._parent
        assert parent is not None
        node = parent._checked_child(new, parent)
        position = parent._detach(old)
        node._parent = parent
        parent._children.insert(position, node)
        return NodeHandle(old, True)

    def children(self) -> list[Node]:
        """Return the direct children as a new list."""
        return list(self._children)

    def child_count(self) -> int:
        return len(self._children)

    def parent(self) -> Node | None:
        return self._parent

    def is_in_tree(self) -> bool:
        return self._parent is not None

    # --------------------------------------------------------------- search

    def get_children_by_attribute(self, name: str, value: str) -> list[Node]:
        """Descendants whose attribute ``name`` equals ``value``, in document order."""
        return [
            node
            for node in self._descendants()
            if node.has_attribute(name) and node.get_attribute_value(name) == value
        ]

    def get_children_by_attribute_name(self, name: str) -> list[Node]:
        return [node for node in self._descendants() if node.has_attribute(name)]

    def get_children_by_class_name(self, class_name: str) -> list[Node]:
        return self.get_children_by_attribute("class", class_name)

    def get_children_by_tag_name(self, tag_name: str) -> list[Node]:
        return [node for node in self._descendants() if node.tag_name == tag_name]

    def get_children_by_name(self, name: str) -> list[Node]:
        return self.get_children_by_attribute("name", name)

    def get_children_by_id(self, id_: str) -> list[Node]:
        return self.get_children_by_attribute("id", id_)

    # ----------------------------------------------------------- attributes

    def attributes(self) -> list[Attribute]:
        """Return the attributes in insertion order as a new list."""
        return list(self._attributes)

    def _find_attribute(self, name: str) -> Attribute | None:
        return next((attr for attr in self._attributes if attr.name == name), None)

    def has_attribute(self, name: str) -> bool:
        return self._find_attribute(name) is not None

    def get_attribute_value(self, name: str) -> str:
        attribute = self._find_attribute(name)
        if attribute is None:
            raise KeyError(f"Trying to get Attribute which does not exist: {name}")
        return attribute.value

    def set_attribute_value(self, name: str, value: str) -> None:
        """Set an attribute, appending it when it does not exist yet."""
        attribute = self._find_attribute(name)
        if attribute is None:
            self._attributes.append(Attribute(name, value))
        else:
            attribute.value = value

    def remove_attribute(self, name: str) -> None:
        self._attributes = [attr for attr in self._attributes if attr.name != name]

    def __getitem__(self, name: str) -> str:
        """Return an attribute value, creating it empty when missing."""
        if not self.has_attribute(name):
            self.set_attribute_value(name, "")
        return self.get_attribute_value(name)

    def __setitem__(self, name: str, value: str) -> None:
        self.set_attribute_value(name, value)

    def __iadd__(self, child: Any) -> Node:
        self.add_child(child)
        return self

    # ------------------------------------------------------- copy & compare

    def shallow_copy(self) -> Node:
        """Copy this node and its attributes, without children or parent."""
        clone = copy.copy(self)
        clone._attributes = [replace(attr) for attr in self._attributes]
        clone._children = []
        clone._parent = None
        return clone

    def deep_copy(self) -> Node:
        """Copy the whole subtree rooted at this node."""
        root = self.shallow_copy()
        stack = [(self, root)]
        while stack:
            source, target = stack.pop()
            for kid in source._children:
                clone = kid.shallow_copy()
                clone._parent = target
                target._children.append(clone)
                stack.append((kid, clone))
        return root

    def shallow_equals(self, other: Node) -> bool:
        """Compare tag, voidness, attributes (in any order) and child count."""
        if self is other:
            return True
        if self.is_void != other.is_void or self.tag_name != other.tag_name:
            return False
        if len(self._attributes) != len(other._attributes):
            return False
        if len(self._children) != len(other._children):
            return False

        def by_name(attr: Attribute) -> str:
            return attr.name

        return sorted(self._attributes, key=by_name) == sorted(other._attributes, key=by_name)

    def deep_equals(self, other: Node) -> bool:
        """Compare two subtrees node by node."""
        stack = [(self, other)]
        while stack:
            left, right = stack.pop()
            if not left.shallow_equals(right):
                return False
            stack.extend(zip(left._children, right._children))
        return True

    # --------------------------------------------------------------- shape

    def size(self) -> int:
        """Number of nodes in the subtree, this one included."""
        return 1 + sum(1 for _ in self._descendants())

    def depth(self) -> int:
        """Number of levels below this node; 0 for a node without children."""
        deepest = 0
        stack = [(self, 0)]
        while stack:
            node, level = stack.pop()
            if node._children:
                deepest = max(deepest, level + 1)
                stack.extend((kid, level + 1) for kid in node._children)
        return deepest

    def leaf_count(self) -> int:
        nodes = [self, *self._descendants()]
        return sum(1 for node in nodes if not node._children)

    # ------------------------------------------------------- serialization

    def serialize(self) -> str:
        return _serialize(self)

    def serialize_pretty(
        self, indentation: str | None = None, sort_attributes: bool | None = None
    ) -> str:
        """Indented serialization; unset options fall back to the class settings."""
        if indentation is None:
            indentation = type(self)._indentation_sequence
        if sort_attributes is None:
            sort_attributes = type(self)._sort_attributes
        return _serialize_pretty(self, indentation, sort_attributes)

    @classmethod
    def set_indentation_sequence(cls, sequence: str) -> None:
        Node._indentation_sequence = sequence

    @classmethod
    def get_indentation_sequence(cls) -> str:
        return Node._indentation_sequence

    @classmethod
    def set_sort_attributes(cls, should_sort: bool) -> None:
        Node._sort_attributes = bool(should_sort)

    @classmethod
    def get_sort_attributes(cls) -> bool:
        return Node._sort_attributes

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.tag_name!r}, children={len(self._children)})"