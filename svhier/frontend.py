"""Front-end interface.

A front-end turns SystemVerilog source files into
:class:`svhier.builder.SyntaxData` objects whose trees can be searched
with :mod:`svhier.query`.  Implementations register themselves in
:data:`frontend_registry` and name the :class:`TagVocabulary` their
trees use, so the rest of the pipeline does not need to know which
front-end produced a tree.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from .builder import SyntaxData, TreeBuilder
from .registry import Registry
from .tree import MalformedTreeError
from .vocabulary import TagVocabulary, vocabulary_registry

logger = logging.getLogger(__name__)

frontend_registry = Registry("frontend")


class FrontendError(RuntimeError):
    """Raised when a front-end cannot produce any parse result."""


class SyntaxFrontend(ABC):
    """Abstract base class of SystemVerilog front-ends.

    Args:
        skip_null: Passed on to :class:`TreeBuilder`.
    """

    #: Key of the tag vocabulary in :data:`vocabulary_registry`.
    vocabulary_name = ""

    def __init__(self, skip_null: bool = True) -> None:
        self.skip_null = skip_null

    @property
    def vocabulary(self) -> TagVocabulary:
        return vocabulary_registry.get(self.vocabulary_name)

    @abstractmethod
    def parse_files(self, paths: List[str]) -> Dict[str, SyntaxData]:
        """Parse several files; returns a mapping of path to result."""
        raise NotImplementedError

    def parse_file(self, path: str) -> Dict[str, SyntaxData]:
        """Parse a single file."""
        return self.parse_files([path])

    @abstractmethod
    def parse_string(self, text: str) -> Dict[str, SyntaxData]:
        """Parse SystemVerilog code given as a string."""
        raise NotImplementedError

    def _attach_tree(self, path: str, raw_tree: Any, data: SyntaxData) -> None:
        """Build ``raw_tree`` into ``data``; a malformed tree only fails this file."""
        try:
            TreeBuilder(skip_null=self.skip_null).build(raw_tree, data)
        except MalformedTreeError as exc:
            logger.warning("%s: unusable syntax tree: %s", path, exc)
            data.tree = None
            data.errors.append(str(exc))


def read_source(path: str) -> Optional[bytes]:
    """Return the raw bytes of ``path``, or ``None`` if it cannot be read.

    Parsers report byte offsets into the file as stored, so the contents
    are neither decoded nor newline-translated here.
    """
    try:
        with open(path, "rb") as fh:
            return fh.read()
    except OSError as exc:
        logger.warning("could not read %s: %s", path, exc)
        return None
