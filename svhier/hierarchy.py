"""Design hierarchy inference.

Given the module records of a whole design this module answers two
questions:

* which modules are *top* modules, i.e. never instantiated by another
  known module (:func:`top_modules`);
* in which order the instantiation tree below each top is visited
  (:func:`hierarchy`).

The traversal keeps a frontier of pending instances.  It repeatedly
takes the first one, looks up the record of its type and pushes that
record's instances to the *front* of the frontier, so the children of a
module are visited right after it, depth first, in the order they were
declared.  Instance types without a record (primitives, vendor cells,
files that were not parsed) end the descent at that point; they are not
errors.  An instance whose type is already being expanded further up
the same branch is reported once and not expanded again, which keeps
recursive designs from looping forever.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from .model import ModuleRecord

logger = logging.getLogger(__name__)


class DuplicateModuleError(ValueError):
    """Raised in strict mode when two modules share a name."""


class ModuleSet(Mapping[str, ModuleRecord]):
    """Module records keyed by module name.

    A later record with an already known name replaces the earlier one
    but keeps its position, so iteration order is the order in which
    names were first seen.  With ``strict=True`` a second definition
    raises :class:`DuplicateModuleError` instead.
    """

    def __init__(self, records: Iterable[ModuleRecord] = (), strict: bool = False) -> None:
        self.strict = strict
        self._records: Dict[str, ModuleRecord] = {}
        for record in records:
            self.add(record)

    def add(self, record: ModuleRecord) -> None:
        previous = self._records.get(record.name)
        if previous is not None:
            if self.strict:
                raise DuplicateModuleError(
                    f"module '{record.name}' defined in {previous.path} and {record.path}"
                )
            logger.warning(
                "module %s from %s overrides the one from %s",
                record.name, record.path, previous.path,
            )
        self._records[record.name] = record

    def __getitem__(self, name: str) -> ModuleRecord:
        return self._records[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"ModuleSet({list(self._records)!r})"


Records = Union[ModuleSet, Mapping[str, ModuleRecord], Iterable[ModuleRecord]]


def as_module_set(records: Records) -> Mapping[str, ModuleRecord]:
    """Return ``records`` keyed by name, building a :class:`ModuleSet` if needed."""
    if isinstance(records, Mapping):
        return records
    return ModuleSet(records)


def top_modules(records: Records) -> List[str]:
    """Return the names of modules no other known module instantiates.

    A module instantiating itself does not count as its own parent.
    """
    modules = as_module_set(records)
    instantiated = set()
    for parent in modules.values():
        for inst in parent.instances:
            if inst.type != parent.name:
                instantiated.add(inst.type)
    return [name for name in modules if name not in instantiated]


@dataclass(frozen=True)
class HierarchyEntry:
    """One visited node of the instantiation tree.

    Attributes:
        record: Record of the instantiated module, ``None`` for types
            without a declaration.
        type_name: Module type; the top module name for top entries.
        depth: 0 for top modules, +1 per instantiation level.
        instance_name: Name of the instance, ``None`` for top entries.
        parent: Name of the instantiating module.
        recursive: True if the type was already being expanded on this
            branch; such entries are not expanded.
    """

    record: Optional[ModuleRecord]
    type_name: str
    depth: int = 0
    instance_name: Optional[str] = None
    parent: Optional[str] = None
    recursive: bool = False

    @property
    def resolved(self) -> bool:
        return self.record is not None

    @property
    def label(self) -> str:
        if self.instance_name is None:
            return self.type_name
        return f"{self.instance_name} ({self.type_name})"


_Pending = Tuple[Optional[str], str, int, Optional[str], Tuple[str, ...]]


def iter_hierarchy(
    records: Records,
    tops: Optional[Iterable[str]] = None,
    include_unresolved: bool = False,
) -> Iterator[HierarchyEntry]:
    """Iterate the instantiation tree below each top module.

    Args:
        records: Module records of the design.
        tops: Names to start from; defaults to :func:`top_modules`.
        include_unresolved: Also yield entries for instance types that
            have no record.
    """
    modules = as_module_set(records)
    if tops is None:
        tops = top_modules(modules)

    for top in tops:
        frontier: Deque[_Pending] = deque([(None, top, 0, None, ())])
        while frontier:
            inst_name, type_name, depth, parent, ancestors = frontier.popleft()
            record = modules.get(type_name)
            if record is None:
                logger.debug("no declaration for %s, not expanded", type_name)
                if include_unresolved:
                    yield HierarchyEntry(None, type_name, depth, inst_name, parent)
                continue

            if type_name in ancestors:
                logger.warning(
                    "recursive instantiation of %s below %s, not expanded",
                    type_name, " > ".join(ancestors),
                )
                yield HierarchyEntry(record, type_name, depth, inst_name, parent, recursive=True)
                continue

            yield HierarchyEntry(record, type_name, depth, inst_name, parent)
            path = ancestors + (type_name,)
            frontier.extendleft(
                (inst.name, inst.type, depth + 1, record.name, path)
                for inst in reversed(record.instances)
            )


def hierarchy(
    records: Records,
    tops: Optional[Iterable[str]] = None,
    include_unresolved: bool = False,
) -> List[HierarchyEntry]:
    """Return the visit order of the instantiation tree, see :func:`iter_hierarchy`."""
    return list(iter_hierarchy(records, tops, include_unresolved))


def find_cycles(records: Records) -> List[List[str]]:
    """Return groups of modules that instantiate each other.

    Each group is a strongly connected component of the instantiation
    graph found with Tarjan's algorithm.  A module instantiating itself
    forms a group of one.
    """
    modules = as_module_set(records)
    index: Dict[str, int] = {}
    lowlink: Dict[str, int] = {}
    on_stack = set()
    stack: List[str] = []
    sccs: List[List[str]] = []
    counter = [0]

    def _visit(v: str) -> None:
        index[v] = lowlink[v] = counter[0]
        counter[0] += 1
        stack.append(v)
        on_stack.add(v)

        for w in modules[v].instance_types:
            if w not in modules:
                continue
            if w not in index:
                _visit(w)
                lowlink[v] = min(lowlink[v], lowlink[w])
            elif w in on_stack:
                lowlink[v] = min(lowlink[v], index[w])

        if lowlink[v] == index[v]:
            scc: List[str] = []
            while True:
                w = stack.pop()
                on_stack.discard(w)
                scc.append(w)
                if w == v:
                    break
            if len(scc) >= 2 or modules[v].instantiates(v):
                sccs.append(list(reversed(scc)))

    for v in modules:
        if v not in index:
            _visit(v)

    return sccs
