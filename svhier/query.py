"""Structural queries over syntax trees.

Queries select descendants by tag.  A tag filter can be given as a
single tag or any iterable of tags; :class:`TagFilter` normalises both
forms into a frozen set once so the search loop only does a membership
test.

The search is a plain pre-order filter: the node passed in is not
itself tested, every descendant is tested before its own children, and
a match does not stop the descent into the matched node.  With
``max_count`` the search stops as soon as enough matches have been
found and the rest of the tree is never visited.

Searching under ``None`` yields nothing, so lookups can be chained
without checking every intermediate result::

    header = find(module, "kModuleHeader")
    name = find(header, IDENTIFIERS)   # None when header is None
"""

from __future__ import annotations

from itertools import islice
from typing import TYPE_CHECKING, FrozenSet, Iterable, Iterator, List, Optional, Union

if TYPE_CHECKING:  # pragma: no cover
    from .tree import Node


class TagFilter:
    """An immutable set of accepted node tags."""

    __slots__ = ("tags",)

    def __init__(self, tags: Union[str, Iterable[str]]) -> None:
        if isinstance(tags, str):
            tags = (tags,)
        self.tags: FrozenSet[str] = frozenset(tags)

    @classmethod
    def of(cls, value: "TagSpec") -> "TagFilter":
        """Return ``value`` if it is already a filter, else wrap it."""
        return value if isinstance(value, TagFilter) else cls(value)

    def matches(self, node: "Node") -> bool:
        return node.tag in self.tags

    def __contains__(self, tag: object) -> bool:
        return tag in self.tags

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TagFilter):
            return NotImplemented
        return self.tags == other.tags

    def __hash__(self) -> int:
        return hash(self.tags)

    def __repr__(self) -> str:
        return f"TagFilter({sorted(self.tags)!r})"


TagSpec = Union[str, Iterable[str], TagFilter]


def iter_find_all(
    node: Optional["Node"], tags: TagSpec, max_count: Optional[int] = None
) -> Iterator["Node"]:
    """Iterate all descendants of ``node`` whose tag is accepted.

    Args:
        node: Subtree to search; ``None`` yields nothing.
        tags: A tag, an iterable of tags or a :class:`TagFilter`.
        max_count: Stop after that many matches.

    Returns:
        A lazy iterator of matching nodes in pre-order.
    """
    if node is None:
        return iter(())
    matches = _walk(node, TagFilter.of(tags))
    if max_count is not None:
        return islice(matches, max(max_count, 0))
    return matches


def _walk(node: "Node", tag_filter: TagFilter) -> Iterator["Node"]:
    stack = list(reversed(node.children))
    while stack:
        current = stack.pop()
        if tag_filter.matches(current):
            yield current
        stack.extend(reversed(current.children))


def find_all(
    node: Optional["Node"], tags: TagSpec, max_count: Optional[int] = None
) -> List["Node"]:
    """Return all descendants of ``node`` whose tag is accepted."""
    return list(iter_find_all(node, tags, max_count))


def find(node: Optional["Node"], tags: TagSpec) -> Optional["Node"]:
    """Return the first accepted descendant of ``node``, or ``None``."""
    return next(iter_find_all(node, tags, 1), None)
