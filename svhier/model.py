"""Value objects produced by module extraction.

A :class:`ModuleRecord` summarises one module declaration: where it
was found, its name, the names of its ports and parameters, the package
imports it contains and the modules it instantiates.  Records are
immutable; every sequence is a tuple in source order and duplicates are
kept as found.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class Instance:
    """A named usage of a module (or primitive) inside another module."""

    name: str
    type: str

    def __str__(self) -> str:
        return f"{self.type} {self.name}"


@dataclass(frozen=True)
class ModuleRecord:
    """Facts extracted from one module declaration."""

    path: str
    name: str
    ports: Tuple[str, ...] = ()
    parameters: Tuple[str, ...] = ()
    imports: Tuple[str, ...] = ()
    instances: Tuple[Instance, ...] = field(default=())

    @property
    def instance_names(self) -> Tuple[str, ...]:
        return tuple(inst.name for inst in self.instances)

    @property
    def instance_types(self) -> Tuple[str, ...]:
        return tuple(inst.type for inst in self.instances)

    def instantiates(self, module_name: str) -> bool:
        """Return True if any instance of this module has the given type."""
        return any(inst.type == module_name for inst in self.instances)

    def to_dict(self) -> Dict[str, object]:
        """Return a JSON-ready mapping.

        Instances are given as two index-aligned lists, ``name`` and
        ``type``.
        """
        instances: Dict[str, List[str]] = {
            "name": list(self.instance_names),
            "type": list(self.instance_types),
        }
        return {
            "path": self.path,
            "name": self.name,
            "ports": list(self.ports),
            "parameters": list(self.parameters),
            "imports": list(self.imports),
            "instances": instances,
        }

    def __str__(self) -> str:
        return f"module {self.name}"
