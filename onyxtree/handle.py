"""A handle that carries a node together with a flag saying whether it owns it."""

from __future__ import annotations

from typing import Any


class OwnershipError(RuntimeError):
    """Raised when ownership is requested from a handle that has none."""


class NodeHandle:
    """Wraps a node reference and whether the holder owns that node.

    Ownership decides whether a tree that receives the node through this
    handle is allowed to adopt it: owning trees accept only owning handles,
    non-owning trees only non-owning ones.
    """

    __slots__ = ("_node", "_owning")

    def __init__(self, node: Any = None, owning: bool = True) -> None:
        self._node = node
        self._owning = bool(owning) and node is not None

    def get(self) -> Any:
        """Return the wrapped node, or None for an empty handle."""
        return self._node

    def owning(self) -> bool:
        """Return whether this handle owns its node."""
        return self._owning

    def release(self) -> Any:
        """Give up the node: return it and leave the handle empty."""
        node = self._node
        self._node = None
        self._owning = False
        return node

    def to_unique(self) -> Any:
        """Hand over ownership of the node and return it.

        The handle keeps referring to the node but no longer owns it.
        """
        if not self._owning:
            raise OwnershipError("Handle does not own Node")
        self._owning = False
        return self._node

    def reset(self) -> None:
        """Drop the node and ownership, leaving the handle empty."""
        self._node = None
        self._owning = False

    def take(self) -> NodeHandle:
        """Move the node and its ownership into a new handle, emptying this one."""
        moved = NodeHandle(self._node, self._owning)
        self.reset()
        return moved

    def __bool__(self) -> bool:
        return self._node is not None

    def __repr__(self) -> str:
        return f"NodeHandle({self._node!r}, owning={self._owning})"