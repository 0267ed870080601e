"""Extraction of module records from syntax trees.

:class:`ModuleExtractor` walks one file's tree with a handful of
structural queries and produces a :class:`svhier.model.ModuleRecord`
for every module declaration it understands:

* the module name is the first identifier in the module header;
* ports and parameters are searched in the header only, each one
  contributing its first identifier;
* package imports are searched in the whole declaration and recorded
  with their full source text;
* instance names and instance types are two independent searches over
  the whole declaration, paired by position.  When their counts differ
  the module keeps no instances and a warning is logged.

Anything the extractor does not recognise (a declaration without a
header, a header without a name, a port without an identifier) is
skipped rather than reported as an error; the grammar accepts
constructs we have no use for.
"""

from __future__ import annotations

import logging
from typing import List, Mapping, Optional

from .builder import SyntaxData
from .model import Instance, ModuleRecord
from .query import TagFilter, find, iter_find_all
from .tree import Node
from .vocabulary import VERIBLE, TagVocabulary

logger = logging.getLogger(__name__)


class ModuleExtractor:
    """Extract :class:`ModuleRecord` objects using a tag vocabulary."""

    def __init__(self, vocabulary: TagVocabulary = VERIBLE) -> None:
        self.vocabulary = vocabulary

    def extract(self, root: Optional[Node], path: str) -> List[ModuleRecord]:
        """Return the records of all modules declared under ``root``.

        Args:
            root: Root of one file's tree, or ``None`` if the file could
                not be parsed (no records are produced then).
            path: File the tree came from; informational only.
        """
        records: List[ModuleRecord] = []
        for module in iter_find_all(root, self.vocabulary.module_declaration):
            record = self._extract_module(module, path)
            if record is not None:
                records.append(record)
        logger.debug("%s: %d module(s) extracted", path, len(records))
        return records

    def _extract_module(self, module: Node, path: str) -> Optional[ModuleRecord]:
        vocab = self.vocabulary

        header = find(module, vocab.module_header)
        if header is None:
            logger.debug("%s: module declaration without header skipped", path)
            return None

        name_id = find(header, vocab.identifier)
        name = name_id.text if name_id is not None else ""
        if not name:
            logger.debug("%s: module declaration without name skipped", path)
            return None

        ports = self._identifiers(header, vocab.port)
        parameters = self._identifiers(header, vocab.parameter)
        imports = [pkg.text for pkg in iter_find_all(module, vocab.package_import)]

        names = self._identifiers(module, vocab.instance_name)
        types = self._identifiers(module, vocab.instantiation_type)
        if len(names) != len(types):
            # Positions no longer line up, so any pairing could be wrong.
            logger.warning(
                "%s: module %s has %d instance name(s) but %d instance type(s); "
                "its instances are skipped",
                path, name, len(names), len(types),
            )
            names, types = [], []

        return ModuleRecord(
            path=path,
            name=name,
            ports=tuple(ports),
            parameters=tuple(parameters),
            imports=tuple(imports),
            instances=tuple(Instance(n, t) for n, t in zip(names, types)),
        )

    def _identifiers(self, scope: Node, tags: TagFilter) -> List[str]:
        """First identifier text of every ``tags`` node under ``scope``."""
        found: List[str] = []
        for node in iter_find_all(scope, tags):
            ident = find(node, self.vocabulary.identifier)
            if ident is None:
                continue
            found.append(ident.text)
        return found


def extract_modules(
    root: Optional[Node], path: str, vocabulary: TagVocabulary = VERIBLE
) -> List[ModuleRecord]:
    """Return the module records of one file's tree."""
    return ModuleExtractor(vocabulary).extract(root, path)


def extract_design(
    data: Mapping[str, SyntaxData], vocabulary: TagVocabulary = VERIBLE
) -> List[ModuleRecord]:
    """Return the module records of every parsed file, in input order."""
    extractor = ModuleExtractor(vocabulary)
    records: List[ModuleRecord] = []
    for path, file_data in data.items():
        records.extend(extractor.extract(file_data.tree, path))
    return records

