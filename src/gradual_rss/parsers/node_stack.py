"""
Nesting stack of open elements.

A plain list used as LIFO. Depth grows by one per start tag and shrinks by
one per (non-item) end tag. Popping does not check that the closed element
is the one on top; well-formed input is assumed (see ItemParser for the
optional verification).
"""

from typing import List, Optional, Tuple

from gradual_rss.models.node import Node


class NodeStack:
    """
    LIFO of Node objects representing the current element ancestry.

    Example:
        >>> stack = NodeStack()
        >>> stack.push('title')
        Node(tag='title', text=None, cdata=None)
        >>> stack.write_text('Hello')
        >>> stack.pop().text
        'Hello'
        >>> stack.pop() is None
        True
    """

    def __init__(self):
        self._nodes: List[Node] = []

    def push(self, tag: str) -> Node:
        node = Node(tag)
        self._nodes.append(node)
        return node

    def pop(self) -> Optional[Node]:
        """Remove and return the top node; None when the stack is empty."""
        if not self._nodes:
            return None
        return self._nodes.pop()

    @property
    def top(self) -> Optional[Node]:
        return self._nodes[-1] if self._nodes else None

    def write_text(self, value: str) -> None:
        """Overwrite the top node's text. No-op on an empty stack."""
        if self._nodes:
            self._nodes[-1].write_text(value)

    def write_cdata(self, value: str) -> None:
        """Overwrite the top node's CDATA. No-op on an empty stack."""
        if self._nodes:
            self._nodes[-1].write_cdata(value)

    @property
    def depth(self) -> int:
        return len(self._nodes)

    @property
    def path(self) -> Tuple[str, ...]:
        """Open tags from outermost to innermost."""
        return tuple(node.tag for node in self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __bool__(self) -> bool:
        return bool(self._nodes)

    def __repr__(self) -> str:
        return f"NodeStack({'/'.join(self.path)})"
