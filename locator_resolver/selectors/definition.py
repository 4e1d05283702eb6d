# locator_resolver/selectors/definition.py
from __future__ import annotations

"""Selector definitions
-----------------------
A `SelectorDefinition` is an immutable value describing one query kind:
how a locator becomes XPath, when the kind is auto-detected, which filter
options it recognizes, the filters it applies and how it words a failure.

Definitions are assembled with `SelectorBuilder`. Inheriting from a parent
copies the parent's xpath builder, failure message, filters and filter keys
at build time; the parent's match predicate is not inherited.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, FrozenSet, List, Mapping, Optional, Tuple

from locator_resolver.selectors.errors import SelectorConfigError
from locator_resolver.selectors.filters import FilterPredicate
from locator_resolver.selectors.node import Node

if TYPE_CHECKING:
    from locator_resolver.selectors.registry import SelectorRegistry

XPathBuilder = Callable[[Any, Mapping[str, Any]], Any]
MatchPredicate = Callable[[Any], bool]
FailureMessageBuilder = Callable[[Optional[Node], Any], str]


@dataclass(frozen=True)
class SelectorDefinition:
    name: str
    xpath_builder: XPathBuilder
    match: Optional[MatchPredicate] = None
    failure_message_builder: Optional[FailureMessageBuilder] = None
    filters: Tuple[FilterPredicate, ...] = ()
    filter_keys: FrozenSet[str] = frozenset()
    parent: Optional[str] = None

    def call(self, locator: Any, xpath_options: Mapping[str, Any]) -> Any:
        return self.xpath_builder(locator, xpath_options)

    def matches(self, locator: Any) -> bool:
        """True when this kind should be auto-detected for `locator`."""
        return self.match is not None and bool(self.match(locator))


class SelectorBuilder:
    """
    Step-by-step construction of a `SelectorDefinition`.

        registry.define("id").inherit_from("xpath") \\
            .xpath(lambda loc, opts: f".//*[@id = '{loc}']") \\
            .match(lambda loc: isinstance(loc, Sym)) \\
            .register()

    Setters return the builder so calls chain. Parent fields are read once,
    when `build()` runs, from the registry passed to it (or bound at creation).
    """

    def __init__(self, name: str, registry: Optional["SelectorRegistry"] = None) -> None:
        self.name = str(name)
        self._registry = registry
        self._parent: Optional[str] = None
        self._xpath: Optional[XPathBuilder] = None
        self._match: Optional[MatchPredicate] = None
        self._failure_message: Optional[FailureMessageBuilder] = None
        self._filters: List[FilterPredicate] = []
        self._filter_keys: List[str] = []

    # ---------- Setters ----------

    def inherit_from(self, parent: str) -> "SelectorBuilder":
        self._parent = str(parent)
        return self

    def xpath(self, fn: XPathBuilder) -> "SelectorBuilder":
        self._xpath = fn
        return self

    def match(self, fn: MatchPredicate) -> "SelectorBuilder":
        self._match = fn
        return self

    def failure_message(self, fn: FailureMessageBuilder) -> "SelectorBuilder":
        self._failure_message = fn
        return self

    def filter(self, predicate: FilterPredicate, *keys: str) -> "SelectorBuilder":
        """Append a filter predicate together with the option keys it consumes."""
        self._filters.append(predicate)
        self._filter_keys.extend(keys)
        return self

    def filter_keys(self, *keys: str) -> "SelectorBuilder":
        self._filter_keys.extend(keys)
        return self

    # ---------- Terminal operations ----------

    def build(self, registry: Optional["SelectorRegistry"] = None) -> SelectorDefinition:
        registry = registry if registry is not None else self._registry

        xpath = None
        failure_message = None
        filters: List[FilterPredicate] = []
        keys: set[str] = set()

        if self._parent is not None:
            if registry is None:
                raise SelectorConfigError(
                    f"selector '{self.name}' inherits from '{self._parent}' but no registry was given"
                )
            parent = registry.find(self._parent)
            if parent is None:
                raise SelectorConfigError(
                    f"selector '{self.name}' inherits from unknown selector '{self._parent}'"
                )
            xpath = parent.xpath_builder
            failure_message = parent.failure_message_builder
            filters.extend(parent.filters)
            keys.update(parent.filter_keys)

        xpath = self._xpath or xpath
        if xpath is None:
            raise SelectorConfigError(f"selector '{self.name}' has no xpath builder")

        filters.extend(self._filters)
        keys.update(self._filter_keys)

        return SelectorDefinition(
            name=self.name,
            xpath_builder=xpath,
            match=self._match,
            failure_message_builder=self._failure_message or failure_message,
            filters=tuple(filters),
            filter_keys=frozenset(keys),
            parent=self._parent,
        )

    def register(self, registry: Optional["SelectorRegistry"] = None) -> SelectorDefinition:
        registry = registry if registry is not None else self._registry
        if registry is None:
            raise SelectorConfigError(f"no registry to register selector '{self.name}' into")
        definition = self.build(registry)
        registry.add(definition)
        return definition
