"""Conversion of exported JSON trees into the node model.

SystemVerilog front-ends export one JSON tree per file.  Every node
carries a ``tag``; interior productions carry a ``children`` list whose
entries may be ``null``, and tokens carry integer ``start``/``end`` byte
offsets (and sometimes their literal ``text``)::

    {"tag": "kModuleDeclaration", "children": [
        {"tag": "kModuleHeader", "children": [
            {"tag": "module", "start": 0, "end": 6},
            null,
            {"tag": "SymbolIdentifier", "start": 7, "end": 10, "text": "top"},
            ...

:class:`TreeBuilder` turns such a value into a :class:`RootNode`.  A
node that is neither a valid token nor a valid branch makes the whole
file's tree invalid: :class:`MalformedTreeError` is raised and the caller
is expected to record the failure and carry on with the next file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, Iterator, List, Optional, Tuple, Union

from .tree import BranchNode, LeafNode, MalformedTreeError, Node, RootNode, TokenNode


@dataclass
class SyntaxData:
    """Parse result for one source file.

    Attributes:
        source_code: Contents of the file.  Front-ends that read files
            keep the raw bytes, so byte offsets reported by the parser
            index the buffer exactly; a ``str`` is encoded as UTF-8.
        tree: Root of the syntax tree, ``None`` if it was not generated
            or could not be built.
        errors: Diagnostics reported by the front-end or the builder.
    """

    source_code: Optional[Union[str, bytes]] = None
    tree: Optional[RootNode] = None
    errors: List[str] = field(default_factory=list)

    @cached_property
    def source_bytes(self) -> bytes:
        if isinstance(self.source_code, bytes):
            return self.source_code
        return (self.source_code or "").encode("utf-8")

    def slice(self, start: int, end: int) -> str:
        """Return the source text between two byte offsets."""
        if self.source_code is None:
            return ""
        return self.source_bytes[start:end].decode("utf-8", errors="replace")


class TreeBuilder:
    """Build :class:`RootNode` trees from exported JSON values.

    Args:
        skip_null: Drop ``null`` children when True; otherwise keep a
            :class:`LeafNode` in their place so child indices match the
            grammar positions.
    """

    def __init__(self, skip_null: bool = True) -> None:
        self.skip_null = skip_null

    def build(self, raw_tree: Any, syntax_data: Optional[SyntaxData] = None) -> RootNode:
        """Convert ``raw_tree`` and bind it to ``syntax_data``.

        The tree is walked with an explicit stack, so nesting depth is
        not limited by the interpreter's recursion limit.

        Raises:
            MalformedTreeError: If any node in the tree is malformed.
        """
        try:
            tag = _tag(raw_tree)
            children = _child_list(raw_tree)
        except MalformedTreeError as exc:
            raise MalformedTreeError(f"tree: {exc}") from None
        root = RootNode(tag, self._convert(children), syntax_data)
        if syntax_data is not None:
            syntax_data.tree = root
        return root

    def _convert(self, children: list) -> List[Node]:
        # Each frame holds the pending children of one branch, its index
        # in the parent, the nodes built so far and its tag.
        result: List[Node] = []
        stack: List[_Frame] = [(enumerate(children), 0, result, None)]
        while stack:
            pending, _, nodes, _ = stack[-1]
            for index, child in pending:
                if child is None:
                    if not self.skip_null:
                        nodes.append(LeafNode())
                    continue
                try:
                    tag = _tag(child)
                    if "children" in child:
                        stack.append((enumerate(_child_list(child)), index, [], tag))
                        break
                    nodes.append(_token(child, tag))
                except MalformedTreeError as exc:
                    raise MalformedTreeError(f"{_path(stack, index)}: {exc}") from None
            else:
                _, _, done, tag = stack.pop()
                if stack:
                    stack[-1][2].append(BranchNode(tag, done))
        return result


_Frame = Tuple[Iterator[Tuple[int, Any]], int, List[Node], Optional[str]]


def _path(stack: List[_Frame], index: int) -> str:
    """JSON path of child ``index`` of the innermost frame, e.g. ``tree.children[2]``."""
    parts = ["tree"]
    parts.extend(f".children[{frame[1]}]" for frame in stack[1:])
    parts.append(f".children[{index}]")
    return "".join(parts)


def _tag(raw: Any) -> str:
    if not isinstance(raw, dict):
        raise MalformedTreeError(f"expected an object, got {type(raw).__name__}")
    tag = raw.get("tag")
    if not isinstance(tag, str):
        raise MalformedTreeError("missing 'tag'")
    return tag


def _child_list(raw: dict) -> list:
    children = raw.get("children")
    if children is None:
        return []
    if not isinstance(children, list):
        raise MalformedTreeError("'children' must be a list")
    return children


def _token(raw: dict, tag: str) -> TokenNode:
    start, end = raw.get("start"), raw.get("end")
    if not _is_offset(start) or not _is_offset(end):
        raise MalformedTreeError(f"token {tag!r} needs integer 'start' and 'end'")
    text = raw.get("text")
    if text is not None and not isinstance(text, str):
        raise MalformedTreeError(f"token {tag!r} has non-string 'text'")
    return TokenNode(tag, start, end, text)


def _is_offset(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def build_tree(
    raw_tree: Any, source_text: Optional[Union[str, bytes]], skip_null: bool = True
) -> RootNode:
    """Build a tree for one file from its exported JSON and source text."""
    return TreeBuilder(skip_null=skip_null).build(raw_tree, SyntaxData(source_code=source_text))
