# locator_resolver/selectors/registry.py
from __future__ import annotations

"""Selector registry
--------------------
Named catalogue of selector definitions. Iteration order is registration
order and decides auto-detection precedence.

The registry does no locking: populate it from one thread at startup and
treat it as read-only afterwards.
"""

import functools
from typing import Dict, Iterator, List, Optional

from locator_resolver.selectors.definition import SelectorBuilder, SelectorDefinition
from locator_resolver.utils.config import get_settings
from locator_resolver.utils.logger import get_logger

log = get_logger(__name__)


class SelectorRegistry:
    def __init__(self) -> None:
        self._definitions: Dict[str, SelectorDefinition] = {}

    def add(self, definition: SelectorDefinition) -> SelectorDefinition:
        """Insert or replace the entry for `definition.name` (last registration wins)."""
        if definition.name in self._definitions:
            log.debug(f"Replacing selector '{definition.name}'")
        self._definitions[definition.name] = definition
        return definition

    def remove(self, name: str) -> None:
        if self._definitions.pop(str(name), None) is not None:
            log.debug(f"Removed selector '{name}'")

    def find(self, name: str) -> Optional[SelectorDefinition]:
        return self._definitions.get(str(name))

    def all(self) -> Iterator[SelectorDefinition]:
        # Snapshot: adds and removes during a scan do not affect it
        yield from list(self._definitions.values())

    def define(self, name: str) -> SelectorBuilder:
        return SelectorBuilder(name, registry=self)

    def names(self) -> List[str]:
        return list(self._definitions)

    def clear(self) -> None:
        self._definitions.clear()

    def copy(self) -> "SelectorRegistry":
        """Independent registry holding the same definitions in the same order."""
        other = SelectorRegistry()
        other._definitions = dict(self._definitions)
        return other

    def __iter__(self) -> Iterator[SelectorDefinition]:
        return self.all()

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, name: object) -> bool:
        return str(name) in self._definitions

    def __repr__(self) -> str:
        return f"SelectorRegistry({self.names()!r})"


# --------- Process default (memoized) ---------

@functools.lru_cache(maxsize=1)
def get_registry() -> SelectorRegistry:
    """
    Registry with the built-in selectors plus any from `SELECTORS_FILE`.
    Call `get_registry.cache_clear()` to rebuild it.
    """
    from locator_resolver.selectors.builtins import register_builtins
    from locator_resolver.selectors.loader import load_selectors_file, register_selectors

    registry = SelectorRegistry()
    register_builtins(registry)

    selectors_file = get_settings().SELECTORS_FILE
    if selectors_file is not None:
        register_selectors(registry, load_selectors_file(selectors_file), source=selectors_file)
    return registry
