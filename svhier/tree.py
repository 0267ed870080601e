"""Syntax tree node model.

The classes in this module give a read-only, navigable view over the
concrete syntax tree exported by a SystemVerilog front-end.  There are
four kinds of node:

* :class:`RootNode` - top of one file's tree; the only node that knows
  the file's :class:`svhier.builder.SyntaxData` (and therefore the
  source text).
* :class:`BranchNode` - an interior grammar production with an ordered
  tuple of children.
* :class:`TokenNode` - a token with a ``[start, end)`` byte span and,
  optionally, its own literal text.
* :class:`LeafNode` - a placeholder for a null child, kept only when the
  tree was built with ``skip_null=False`` so sibling indices stay stable.

Every node keeps a *weak* reference to its parent.  The tree is owned
top-down from the root: if the root is dropped, the remaining nodes
simply report no parent and no text.

Text is resolved lazily.  ``node.text`` walks up to the root, takes the
source buffer and slices it with the node's byte offsets.  Any node whose
span cannot be resolved returns an empty string rather than raising, as
most callers walk the tree structurally and only occasionally ask for
text.
"""

from __future__ import annotations

import weakref
from typing import TYPE_CHECKING, Iterable, Iterator, List, Optional, Tuple

from .query import TagSpec, find, find_all, iter_find_all

if TYPE_CHECKING:  # pragma: no cover
    from .builder import SyntaxData


class MalformedTreeError(ValueError):
    """Raised when the exported tree does not describe a valid node."""


class Node:
    """Base syntax tree node.

    Attributes:
        tag: Grammar production or token kind, ``None`` for null leaves.
    """

    tag: Optional[str] = None
    children: Tuple["Node", ...] = ()

    def __init__(self) -> None:
        self._parent: Optional[weakref.ReferenceType] = None

    @property
    def parent(self) -> Optional["Node"]:
        """Enclosing node, or ``None`` for roots and detached nodes."""
        return self._parent() if self._parent is not None else None

    def _attach(self, parent: "Node") -> None:
        self._parent = weakref.ref(parent)

    @property
    def syntax_data(self) -> Optional["SyntaxData"]:
        """Parse result of the file this node belongs to."""
        node = self.parent
        while node is not None:
            if isinstance(node, RootNode):
                return node.syntax_data
            node = node.parent
        return None

    @property
    def start(self) -> Optional[int]:
        """Byte offset of node's first character in source text."""
        return None

    @property
    def end(self) -> Optional[int]:
        """Byte offset of a character just past the node in source text."""
        return None

    @property
    def text(self) -> str:
        """Source code fragment spanning all tokens in the node."""
        start, end = self.start, self.end
        if start is None or end is None:
            return ""
        data = self.syntax_data
        if data is None:
            return ""
        return data.slice(start, end)

    def iter_find_all(self, tags: TagSpec, max_count: Optional[int] = None) -> Iterator["Node"]:
        return iter_find_all(self, tags, max_count)

    def find_all(self, tags: TagSpec, max_count: Optional[int] = None) -> List["Node"]:
        return find_all(self, tags, max_count)

    def find(self, tags: TagSpec) -> Optional["Node"]:
        return find(self, tags)


class BranchNode(Node):
    """Syntax tree branch node.

    The span of a branch is derived from its descendants: ``start`` is
    the start of the first token that has one and ``end`` the end of
    the last such token.
    """

    def __init__(self, tag: str, children: Optional[Iterable[Node]] = None) -> None:
        super().__init__()
        self.tag = tag
        self.children = tuple(children or ())
        for child in self.children:
            child._attach(self)

    def _tokens(self, reverse: bool = False) -> Iterator["TokenNode"]:
        stack: List[Node] = [self]
        while stack:
            node = stack.pop()
            if isinstance(node, TokenNode):
                yield node
                continue
            kids = node.children if reverse else reversed(node.children)
            stack.extend(kids)

    @property
    def start(self) -> Optional[int]:
        for token in self._tokens():
            if token.start is not None:
                return token.start
        return None

    @property
    def end(self) -> Optional[int]:
        for token in self._tokens(reverse=True):
            if token.end is not None:
                return token.end
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.tag!r}, children={len(self.children)})"


class RootNode(BranchNode):
    """Syntax tree root node; exactly one per parsed file."""

    def __init__(
        self,
        tag: str,
        children: Optional[Iterable[Node]] = None,
        syntax_data: Optional["SyntaxData"] = None,
    ) -> None:
        super().__init__(tag, children)
        self._syntax_data = syntax_data

    @property
    def syntax_data(self) -> Optional["SyntaxData"]:
        return self._syntax_data


class LeafNode(Node):
    """Syntax tree leaf node used for null children."""

    def __repr__(self) -> str:
        return "LeafNode()"


class TokenNode(LeafNode):
    """Tree node with token data.

    ``text`` returns the literal carried by the exported tree when there
    is one; otherwise it slices the owning file's source buffer.
    """

    def __init__(self, tag: str, start: int, end: int, text: Optional[str] = None) -> None:
        super().__init__()
        if end < start:
            raise MalformedTreeError(f"token {tag!r} ends before it starts ({start} > {end})")
        self.tag = tag
        self._start = start
        self._end = end
        self._text = text

    @property
    def start(self) -> int:
        return self._start

    @property
    def end(self) -> int:
        return self._end

    @property
    def text(self) -> str:
        if self._text is not None:
            return self._text
        return super().text

    def __repr__(self) -> str:
        return f"TokenNode({self.tag!r}, {self._start}, {self._end})"


def iter_tree(node: Optional[Node]) -> Iterator[Node]:
    """Iterate ``node`` and all of its descendants in pre-order."""
    if node is None:
        return
    stack: List[Node] = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))
