"""Coloured terminal renderer.

Mirrors the layout of Verible's ``print_modules`` example: yellow keys,
light green values, a grey ``-`` for empty lists and an inverted banner
with the file path above each file's modules.  Colours are plain ANSI
escape sequences and can be switched off.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from ..hierarchy import HierarchyEntry
from ..model import ModuleRecord
from .base import HierarchyRenderer, renderer_registry

_ESC = {
    "default": "\033[0m",
    "yellow": "\033[33m",
    "light_black": "\033[90m",
    "light_green": "\033[92m",
    "light_red": "\033[91m",
    "banner": "\033[1;97;7m",
}


@renderer_registry.register("text")
class TextRenderer(HierarchyRenderer):
    """Render human readable, optionally coloured, text."""

    def __init__(self, color: bool = True, indent: int = 2) -> None:
        self.color = color
        self.indent = indent

    def _c(self, color: str, text: str) -> str:
        if not self.color:
            return text
        return f"{_ESC[color]}{text}{_ESC['default']}"

    def _entry(self, key: str, values: Sequence[str]) -> str:
        if not values:
            return f"{self._c('yellow', key)}{self._c('light_black', '-')}"
        pad = " " * len(key)
        lines = [f"{self._c('yellow', key)}{self._c('light_green', values[0])}"]
        lines.extend(f"{pad}{self._c('light_green', v)}" for v in values[1:])
        return "\n".join(lines)

    def render_modules(self, records: Iterable[ModuleRecord]) -> str:
        by_path: Dict[str, List[ModuleRecord]] = {}
        for record in records:
            by_path.setdefault(record.path, []).append(record)

        blocks: List[str] = []
        for path, mods in by_path.items():
            lines = [self._c("banner", f"{path} "), ""]
            for mod in mods:
                lines.append(self._entry("name:       ", [mod.name]))
                lines.append(self._entry("ports:      ", mod.ports))
                lines.append(self._entry("parameters: ", mod.parameters))
                lines.append(self._entry("imports:    ", mod.imports))
                lines.append(self._entry("instances:  ", [str(i) for i in mod.instances]))
                lines.append("")
            blocks.append("\n".join(lines))
        return "\n".join(blocks).rstrip("\n")

    def render_top_modules(self, tops: Sequence[str]) -> str:
        return self._entry("top modules: ", list(tops))

    def render_hierarchy(self, entries: Iterable[HierarchyEntry]) -> str:
        lines: List[str] = []
        for entry in entries:
            pad = " " * (self.indent * entry.depth)
            if entry.instance_name is None:
                label = self._c("yellow", entry.type_name)
            else:
                label = f"{self._c('light_green', entry.instance_name)} {self._c('light_black', entry.type_name)}"
            if not entry.resolved:
                label += self._c("light_black", " (no declaration)")
            elif entry.recursive:
                label += self._c("light_red", " (recursive)")
            lines.append(f"{pad}{label}")
        return "\n".join(lines)
