# Ancestor context: the path from the tree root down to the parent of the node
# currently being visited, maintained by the traversal engine.

from __future__ import annotations

from typing import Iterable, Iterator, Optional

from tree_sitter import Node as TSNode


class AncestorContext:
    """
    Stack of enclosing nodes, index 0 being the tree root.

    Only the traversal engine pushes and pops. Rules receive the context
    read-only and should use the query helpers (find, has_ancestor, ...).
    """

    def __init__(self, nodes: Iterable[TSNode] = ()) -> None:
        self._nodes: list[TSNode] = list(nodes)

    def push(self, node: TSNode) -> None:
        self._nodes.append(node)

    def pop(self) -> TSNode:
        if not self._nodes:
            raise IndexError("pop from empty ancestor context")
        return self._nodes.pop()

    @property
    def parent(self) -> Optional[TSNode]:
        """Direct parent of the node being visited, or None at the root."""
        return self._nodes[-1] if self._nodes else None

    @property
    def depth(self) -> int:
        return len(self._nodes)

    def find(self, *node_types: str) -> Optional[TSNode]:
        """Return the outermost ancestor whose type is one of node_types."""
        for node in self._nodes:
            if node.type in node_types:
                return node
        return None

    def has_ancestor(self, *node_types: str) -> bool:
        return self.find(*node_types) is not None

    def types(self) -> list[str]:
        return [node.type for node in self._nodes]

    def __iter__(self) -> Iterator[TSNode]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __bool__(self) -> bool:
        return bool(self._nodes)

    def __repr__(self) -> str:
        return f"AncestorContext({' > '.join(self.types())})"
