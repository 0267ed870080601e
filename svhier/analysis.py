"""Design analysis pipeline.

:class:`DesignAnalysis` ties the pieces together: a front-end parses
the files, :class:`svhier.extractor.ModuleExtractor` pulls the module
records out of every tree and the records are merged into one
:class:`svhier.hierarchy.ModuleSet` on which the hierarchy questions are
answered.

Files whose tree could not be built contribute no modules; they are
listed in :attr:`DesignAnalysis.failed_files` and the rest of the design
is still analysed.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from .builder import SyntaxData
from .extractor import ModuleExtractor
from .frontend import SyntaxFrontend
from .hierarchy import HierarchyEntry, ModuleSet, find_cycles, hierarchy, top_modules
from .model import ModuleRecord


class DesignAnalysis:
    """Extract modules from a set of files and resolve their hierarchy.

    Args:
        frontend: Front-end used to parse the files.
        strict: Reject designs in which two modules share a name.
    """

    def __init__(self, frontend: SyntaxFrontend, strict: bool = False) -> None:
        self.frontend = frontend
        self.strict = strict
        self.syntax: Dict[str, SyntaxData] = {}
        self.records: List[ModuleRecord] = []
        self.modules = ModuleSet(strict=strict)

    def load_design(self, files: List[str]) -> None:
        """Parse ``files`` and add their modules to the design."""
        self.add_syntax(self.frontend.parse_files(files))

    def add_syntax(self, data: Dict[str, SyntaxData]) -> None:
        """Add already parsed files to the design."""
        extractor = ModuleExtractor(self.frontend.vocabulary)
        for path, file_data in data.items():
            self.syntax[path] = file_data
            for record in extractor.extract(file_data.tree, path):
                self.records.append(record)
                self.modules.add(record)

    @property
    def failed_files(self) -> List[str]:
        """Files for which no syntax tree is available."""
        return [path for path, data in self.syntax.items() if data.tree is None]

    def records_by_file(self) -> Dict[str, List[ModuleRecord]]:
        grouped: Dict[str, List[ModuleRecord]] = {}
        for record in self.records:
            grouped.setdefault(record.path, []).append(record)
        return grouped

    def top_modules(self) -> List[str]:
        return top_modules(self.modules)

    def hierarchy(
        self, tops: Optional[List[str]] = None, include_unresolved: bool = False
    ) -> List[HierarchyEntry]:
        return hierarchy(self.modules, tops, include_unresolved)

    def cycles(self) -> List[List[str]]:
        return find_cycles(self.modules)
