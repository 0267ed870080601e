"""Renderer implementations for module and hierarchy output.

This package contains various output format renderers:
- text: coloured terminal output
- markdown: GitHub Flavoured Markdown tables and bullet lists
- csv: one row per module / visited instance
- json: machine readable documents

All renderers are automatically registered via decorators.
"""

from .base import HierarchyRenderer, renderer_registry
from .text import TextRenderer
from .markdown import MarkdownRenderer
from .csv import CsvRenderer
from .json import JsonRenderer

__all__ = [
    "HierarchyRenderer",
    "renderer_registry",
    "TextRenderer",
    "MarkdownRenderer",
    "CsvRenderer",
    "JsonRenderer",
]
