"""Markdown renderer.

Renders module facts as GitHub Flavoured Markdown tables and the
hierarchy as a nested bullet list.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

from ..hierarchy import HierarchyEntry
from ..model import ModuleRecord
from .base import HierarchyRenderer, renderer_registry


@renderer_registry.register("markdown")
class MarkdownRenderer(HierarchyRenderer):
    """Render tables in GitHub Flavoured Markdown format."""

    def render_modules(self, records: Iterable[ModuleRecord]) -> str:
        headers = ["Module", "File", "Ports", "Parameters", "Imports", "Instances"]
        header_line = "| " + " | ".join(headers) + " |"
        align_line = "|" + "|".join([":" + "-" * (len(h) + 1) for h in headers]) + "|"
        rows: List[str] = [header_line, align_line]
        for mod in records:
            row = "| {name} | {path} | {ports} | {params} | {imports} | {insts} |".format(
                name=mod.name,
                path=mod.path,
                ports="<br/>".join(mod.ports),
                params="<br/>".join(mod.parameters),
                imports="<br/>".join(mod.imports),
                insts="<br/>".join(str(i) for i in mod.instances),
            )
            rows.append(row)
        return "\n".join(rows)

    def render_top_modules(self, tops: Sequence[str]) -> str:
        return "\n".join(f"- {name}" for name in tops)

    def render_hierarchy(self, entries: Iterable[HierarchyEntry]) -> str:
        rows: List[str] = []
        for entry in entries:
            if entry.instance_name is None:
                label = f"**{entry.type_name}**"
            else:
                label = f"{entry.instance_name} : `{entry.type_name}`"
            if not entry.resolved:
                label += " _(no declaration)_"
            elif entry.recursive:
                label += " _(recursive)_"
            rows.append(f"{'  ' * entry.depth}- {label}")
        return "\n".join(rows)
