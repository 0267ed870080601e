"""CSV renderer.

One row per module for the module list; one row per visited instance,
with its depth and parent, for the hierarchy.  Multi-valued cells are
joined with ``;``.
"""

from __future__ import annotations

import csv
import io
from typing import Iterable, Sequence

from ..hierarchy import HierarchyEntry
from ..model import ModuleRecord
from .base import HierarchyRenderer, renderer_registry


@renderer_registry.register("csv")
class CsvRenderer(HierarchyRenderer):
    """Render module facts and hierarchies as CSV."""

    def __init__(self, separator: str = ";") -> None:
        self.separator = separator

    def _rows_to_csv(self, headers, rows) -> str:
        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n")
        writer.writerow(headers)
        writer.writerows(rows)
        return output.getvalue().rstrip("\n")

    def render_modules(self, records: Iterable[ModuleRecord]) -> str:
        sep = self.separator
        rows = [
            [
                mod.path,
                mod.name,
                sep.join(mod.ports),
                sep.join(mod.parameters),
                sep.join(mod.imports),
                sep.join(mod.instance_names),
                sep.join(mod.instance_types),
            ]
            for mod in records
        ]
        headers = ["File", "Module", "Ports", "Parameters", "Imports", "Instance Names", "Instance Types"]
        return self._rows_to_csv(headers, rows)

    def render_top_modules(self, tops: Sequence[str]) -> str:
        return self._rows_to_csv(["Top Module"], [[name] for name in tops])

    def render_hierarchy(self, entries: Iterable[HierarchyEntry]) -> str:
        rows = [
            [
                entry.depth,
                entry.instance_name or "",
                entry.type_name,
                entry.parent or "",
                entry.record.path if entry.record is not None else "",
            ]
            for entry in entries
        ]
        return self._rows_to_csv(["Depth", "Instance", "Module", "Parent", "File"], rows)
