"""Tag vocabularies of the supported front-ends.

Module extraction only ever looks at node tags.  Each front-end names
the grammar productions differently, so the tags the extractor searches
for are grouped into a :class:`TagVocabulary` and registered per
front-end in :data:`vocabulary_registry`.
"""

from __future__ import annotations

from dataclasses import dataclass

from .query import TagFilter
from .registry import Registry

vocabulary_registry = Registry("vocabulary")


@dataclass(frozen=True)
class TagVocabulary:
    """Tags used by one front-end for the constructs we extract."""

    module_declaration: TagFilter
    module_header: TagFilter
    port: TagFilter
    parameter: TagFilter
    package_import: TagFilter
    instance_name: TagFilter
    instantiation_type: TagFilter
    identifier: TagFilter


VERIBLE = vocabulary_registry.add("verible", TagVocabulary(
    module_declaration=TagFilter("kModuleDeclaration"),
    module_header=TagFilter("kModuleHeader"),
    port=TagFilter(["kPortDeclaration", "kPort"]),
    parameter=TagFilter("kParamDeclaration"),
    package_import=TagFilter("kPackageImportItem"),
    instance_name=TagFilter("kGateInstance"),
    instantiation_type=TagFilter("kInstantiationType"),
    identifier=TagFilter(["SymbolIdentifier", "EscapedIdentifier"]),
))

# slang reports escaped identifiers with the plain Identifier kind.
SLANG = vocabulary_registry.add("slang", TagVocabulary(
    module_declaration=TagFilter("ModuleDeclaration"),
    module_header=TagFilter("ModuleHeader"),
    port=TagFilter([
        "ImplicitAnsiPort",
        "ExplicitAnsiPort",
        "ImplicitNonAnsiPort",
        "PortDeclaration",
    ]),
    parameter=TagFilter(["ParameterDeclaration", "TypeParameterDeclaration"]),
    package_import=TagFilter("PackageImportItem"),
    instance_name=TagFilter("HierarchicalInstance"),
    instantiation_type=TagFilter("HierarchyInstantiation"),
    identifier=TagFilter("Identifier"),
))
