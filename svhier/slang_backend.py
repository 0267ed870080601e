"""Slang-backed front-end.

This module defines a :class:`SlangBackend` front-end that parses
SystemVerilog with the ``pyslang`` bindings of the slang compiler
instead of running an external executable.  Only the *syntax* tree is
used: no compilation or elaboration takes place.

slang's concrete syntax tree is converted into the same JSON shape the
Verible front-end exports (``tag``/``children`` for nodes and
``tag``/``start``/``end``/``text`` for tokens) and then goes through
the common :class:`svhier.builder.TreeBuilder`.  Node tags are slang's
``SyntaxKind`` names and token tags its ``TokenKind`` names, which is
what the ``slang`` tag vocabulary expects.

Because this backend depends on a compiled extension it raises an
:class:`ImportError` on use when ``pyslang`` cannot be imported.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

from .builder import SyntaxData
from .frontend import SyntaxFrontend, frontend_registry, read_source

logger = logging.getLogger(__name__)

# Attempt to import the pyslang package.  If unavailable we set
# imported symbols to None; the backend raises when it is used.
try:
    import pyslang  # type: ignore[import]
    from pyslang import DiagnosticEngine  # type: ignore[import]
    from pyslang.parsing import Token, TokenKind  # type: ignore[import]
    from pyslang.syntax import SyntaxTree  # type: ignore[import]
except ImportError:
    pyslang = None  # type: ignore
    DiagnosticEngine = SyntaxTree = Token = TokenKind = None  # type: ignore


def syntax_to_json(node: Any) -> Optional[Dict[str, Any]]:
    """Convert a pyslang syntax node or token into an exported-tree value.

    Absent optional nodes and missing tokens become ``None``.
    """
    if node is None:
        return None
    if isinstance(node, Token):
        if node.kind == TokenKind.Unknown or node.isMissing:
            return None
        raw = node.rawText
        start = node.location.offset
        return {
            "tag": node.kind.name,
            "start": start,
            "end": start + len(raw.encode("utf-8")),
            "text": raw,
        }
    return {
        "tag": node.kind.name,
        "children": [syntax_to_json(child) for child in node],
    }


@frontend_registry.register("slang")
class SlangBackend(SyntaxFrontend):
    """Parse SystemVerilog sources with pyslang.

    Args:
        skip_null: Drop absent optional children from the trees.
    """

    vocabulary_name = "slang"

    def parse_files(self, paths: List[str]) -> Dict[str, SyntaxData]:
        _require_pyslang()
        data: Dict[str, SyntaxData] = {}
        for path in paths:
            tree = SyntaxTree.fromFile(path)
            data[path] = self._convert(path, tree, read_source(path))
        return data

    def parse_string(self, text: str, name: str = "-") -> Dict[str, SyntaxData]:
        _require_pyslang()
        tree = SyntaxTree.fromText(text, name)
        return {name: self._convert(name, tree, text)}

    # ------------------------------------------------------------------
    # Internal helpers

    def _convert(self, path: str, tree: Any, source: Optional[Union[str, bytes]]) -> SyntaxData:
        data = SyntaxData(source_code=source)
        errors = [diag for diag in tree.diagnostics if diag.isError()]
        if errors:
            report = DiagnosticEngine.reportAll(tree.sourceManager, errors)
            data.errors.extend(line for line in report.splitlines() if line.strip())
            logger.debug("%s: %d syntax error(s)", path, len(errors))
        raw = syntax_to_json(tree.root)
        if raw is not None:
            self._attach_tree(path, {"tag": "SyntaxTree", "children": [raw]}, data)
        return data


def _require_pyslang() -> None:
    if pyslang is None:
        raise ImportError(
            "pyslang is required for the slang front-end but is not installed. "
            "Install it via `pip install pyslang`."
        )
