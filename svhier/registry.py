"""Keyed lookup of pluggable components.

Front-ends, renderers and tag vocabularies are selected by short keys
(``verible``, ``slang``, ``text``...), both from the command line and
from library code.  A :class:`Registry` maps those keys to either a
class, registered with the :meth:`Registry.register` decorator and
instantiated by :meth:`Registry.create`, or a ready-made object stored
with :meth:`Registry.add`::

    renderer_registry = Registry("renderer")

    @renderer_registry.register("text")
    class TextRenderer(HierarchyRenderer):
        ...

    renderer = renderer_registry.create("text", color=False)
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Type, TypeVar

C = TypeVar("C", bound=type)


class Registry:
    """Components addressable by key, in registration order.

    Args:
        name: What the registry holds; used in error messages.
    """

    def __init__(self, name: str = "registry") -> None:
        self.name = name
        self._entries: Dict[str, Any] = {}

    def register(self, key: str) -> Callable[[C], C]:
        """Class decorator storing the class under ``key``.

        Raises:
            ValueError: If ``key`` is taken.
        """
        def decorator(cls: C) -> C:
            self.add(key, cls)
            return cls
        return decorator

    def add(self, key: str, item: Any) -> Any:
        """Store ``item`` under ``key`` and return it.

        Raises:
            ValueError: If ``key`` is taken.
        """
        if key in self._entries:
            taken_by = self._entries[key]
            label = getattr(taken_by, "__name__", repr(taken_by))
            raise ValueError(f"{self.name}: key '{key}' already registered to {label}")
        self._entries[key] = item
        return item

    def get(self, key: str) -> Any:
        """Return whatever was stored under ``key``.

        Raises:
            KeyError: If nothing is stored under ``key``; the message
                lists the known keys.
        """
        try:
            return self._entries[key]
        except KeyError:
            known = ", ".join(sorted(self._entries))
            raise KeyError(f"{self.name}: unknown key '{key}'. Available: {known}") from None

    def create(self, key: str, **kwargs: Any) -> Any:
        """Instantiate the class stored under ``key`` with ``kwargs``."""
        factory: Type[Any] = self.get(key)
        return factory(**kwargs)

    def keys(self) -> List[str]:
        """Registered keys, suitable for argparse ``choices``."""
        return list(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Registry({self.name!r}, {self.keys()!r})"
