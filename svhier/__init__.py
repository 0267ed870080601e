"""Top level package of the SystemVerilog design hierarchy tools.

This package reads the concrete syntax trees exported by SystemVerilog
front-ends, extracts the facts about every module declaration and
reconstructs the module instantiation hierarchy of a design.  It is
intended for design-verification engineers who need a quick overview
of a design: which modules are tops, what they instantiate, and which
ports, parameters and package imports each module has.

Key concepts:

* **Node model** represents one file's syntax tree.  See :mod:`svhier.tree`.
* **Queries** find descendants by tag.  See :mod:`svhier.query`.
* **Builder** converts exported JSON trees into nodes.  See :mod:`svhier.builder`.
* **Extractor** turns trees into :class:`ModuleRecord` objects.
  See :mod:`svhier.extractor`.
* **Hierarchy** finds top modules and walks the instantiation tree.
  See :mod:`svhier.hierarchy`.
* **Front-ends** run ``verible-verilog-syntax`` or pyslang.
  See :mod:`svhier.frontend`.
* **Renderer** provides pluggable output formats (text, Markdown, CSV, JSON).
  See :mod:`svhier.renderers`.
* **Registry** enables decorator-based plugin registration.
  See :mod:`svhier.registry`.
"""

from .tree import (
    MalformedTreeError,
    Node,
    BranchNode,
    RootNode,
    TokenNode,
    LeafNode,
    iter_tree,
)
from .query import TagFilter, find, find_all, iter_find_all
from .builder import SyntaxData, TreeBuilder, build_tree
from .model import Instance, ModuleRecord
from .vocabulary import TagVocabulary, vocabulary_registry, VERIBLE, SLANG
from .extractor import ModuleExtractor, extract_modules, extract_design
from .hierarchy import (
    DuplicateModuleError,
    HierarchyEntry,
    ModuleSet,
    find_cycles,
    hierarchy,
    iter_hierarchy,
    top_modules,
)
from .registry import Registry
from .frontend import FrontendError, SyntaxFrontend, frontend_registry
from .verible_backend import VeribleVerilogSyntax
from .slang_backend import SlangBackend
from .analysis import DesignAnalysis
from .renderers import HierarchyRenderer, renderer_registry

__all__ = [
    "MalformedTreeError",
    "Node",
    "BranchNode",
    "RootNode",
    "TokenNode",
    "LeafNode",
    "iter_tree",
    "TagFilter",
    "find",
    "find_all",
    "iter_find_all",
    "SyntaxData",
    "TreeBuilder",
    "build_tree",
    "Instance",
    "ModuleRecord",
    "TagVocabulary",
    "vocabulary_registry",
    "VERIBLE",
    "SLANG",
    "ModuleExtractor",
    "extract_modules",
    "extract_design",
    "DuplicateModuleError",
    "HierarchyEntry",
    "ModuleSet",
    "find_cycles",
    "hierarchy",
    "iter_hierarchy",
    "top_modules",
    "Registry",
    "FrontendError",
    "SyntaxFrontend",
    "frontend_registry",
    "VeribleVerilogSyntax",
    "SlangBackend",
    "DesignAnalysis",
    "HierarchyRenderer",
    "renderer_registry",
]
