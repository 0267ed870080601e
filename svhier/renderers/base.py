"""Renderer interface.

A renderer turns the results of an analysis into one string for one of
the three CLI reports: the module list, the list of top modules and the
hierarchy walk.  Implementations register under their ``--format`` key
in :data:`renderer_registry`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Sequence

from ..hierarchy import HierarchyEntry
from ..model import ModuleRecord
from ..registry import Registry

renderer_registry = Registry("renderer")


class HierarchyRenderer(ABC):
    """Formats module records and hierarchy walks."""

    @abstractmethod
    def render_modules(self, records: Iterable[ModuleRecord]) -> str:
        """Format the extracted facts of each module, in the given order."""

    @abstractmethod
    def render_top_modules(self, tops: Sequence[str]) -> str:
        """Format a list of top module names."""

    @abstractmethod
    def render_hierarchy(self, entries: Iterable[HierarchyEntry]) -> str:
        """Format :class:`HierarchyEntry` objects in visit order.

        Entries carry their depth, so an indented tree can be drawn
        from the flat sequence.
        """
