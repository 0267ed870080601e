"""JSON renderer for machine consumption."""

from __future__ import annotations

import json
from typing import Iterable, Sequence

from ..hierarchy import HierarchyEntry
from ..model import ModuleRecord
from .base import HierarchyRenderer, renderer_registry


@renderer_registry.register("json")
class JsonRenderer(HierarchyRenderer):
    """Render module facts and hierarchies as JSON documents."""

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent

    def _dump(self, value) -> str:
        return json.dumps(value, indent=self.indent)

    def render_modules(self, records: Iterable[ModuleRecord]) -> str:
        return self._dump([mod.to_dict() for mod in records])

    def render_top_modules(self, tops: Sequence[str]) -> str:
        return self._dump(list(tops))

    def render_hierarchy(self, entries: Iterable[HierarchyEntry]) -> str:
        return self._dump([
            {
                "module": entry.type_name,
                "instance": entry.instance_name,
                "depth": entry.depth,
                "parent": entry.parent,
                "path": entry.record.path if entry.record is not None else None,
                "resolved": entry.resolved,
                "recursive": entry.recursive,
            }
            for entry in entries
        ])
