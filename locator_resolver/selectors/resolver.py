# locator_resolver/selectors/resolver.py
from __future__ import annotations

"""Locator resolution
---------------------
Turns the arguments of a finder call into a `ResolvedQuery`:

    normalize(locator)
    normalize(locator, options)
    normalize(selector_name, locator)
    normalize(selector_name, locator, options)

A trailing mapping is always the options. The query carries the XPath
alternatives to run and a `filter(node)` for the nodes they return.
"""

from collections.abc import Mapping as MappingABC
from dataclasses import dataclass
from types import MappingProxyType
from typing import AbstractSet, Any, Dict, Mapping, Optional, Tuple

from locator_resolver.selectors.definition import SelectorDefinition
from locator_resolver.selectors.errors import SelectorConfigError, SelectorNotFound
from locator_resolver.selectors.filters import normalize_filter_options
from locator_resolver.selectors.node import Node
from locator_resolver.selectors.registry import SelectorRegistry, get_registry
from locator_resolver.utils.config import get_settings
from locator_resolver.utils.logger import get_logger

log = get_logger(__name__)


class Sym(str):
    """A symbolic locator: an identifier rather than free text (auto-detected as `id`)."""

    def __repr__(self) -> str:
        return f"Sym({str.__repr__(self)})"


@dataclass(frozen=True)
class ResolvedQuery:
    definition: SelectorDefinition
    locator: Any
    options: Mapping[str, Any]
    xpath_options: Mapping[str, Any]
    filter_options: Mapping[str, Any]
    xpaths: Tuple[str, ...]

    @property
    def name(self) -> str:
        return self.definition.name

    def filter(self, node: Node) -> bool:
        return all(f(node, self.filter_options) for f in self.definition.filters)

    def failure_message(self, node: Optional[Node] = None) -> str:
        builder = self.definition.failure_message_builder
        if builder is None:
            return f"Unable to find {self.name} {self.locator!r}"
        return builder(node, self.locator)


def split_options(
    options: Mapping[str, Any], filter_keys: AbstractSet[str]
) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """Partition `options` into (xpath_options, filter_options) by `filter_keys`."""
    xpath_options: Dict[str, Any] = {}
    filter_options: Dict[str, Any] = {}
    for key, value in options.items():
        if key in filter_keys:
            filter_options[key] = value
        else:
            xpath_options[key] = value
    return xpath_options, filter_options


def expand_xpaths(expression: Any) -> Tuple[str, ...]:
    if hasattr(expression, "to_xpaths"):
        return tuple(str(x) for x in expression.to_xpaths())
    return (str(expression),)


class LocatorResolver:
    """
    Resolve finder arguments against a registry.

    `default_selector` and `ignore_hidden_elements` left as None are read
    from settings on every call.
    """

    def __init__(
        self,
        registry: SelectorRegistry,
        *,
        default_selector: Optional[str] = None,
        ignore_hidden_elements: Optional[bool] = None,
    ) -> None:
        self.registry = registry
        self.default_selector = default_selector
        self.ignore_hidden_elements = ignore_hidden_elements

    # ---------- Configuration ----------

    def _default_selector(self) -> str:
        if self.default_selector is not None:
            return self.default_selector
        return get_settings().DEFAULT_SELECTOR

    def _ignore_hidden(self) -> bool:
        if self.ignore_hidden_elements is not None:
            return self.ignore_hidden_elements
        return get_settings().IGNORE_HIDDEN_ELEMENTS

    # ---------- Selection ----------

    def detect(self, locator: Any) -> Optional[SelectorDefinition]:
        """First definition, in registration order, whose match predicate accepts `locator`."""
        for definition in self.registry.all():
            if definition.matches(locator):
                return definition
        return None

    def _choose(self, name: Optional[str], locator: Any) -> SelectorDefinition:
        if name is not None:
            definition = self.registry.find(name)
            if definition is None:
                log.debug(f"Unknown selector '{name}', falling back to '{self._default_selector()}'")
        else:
            definition = self.detect(locator)

        if definition is None:
            default = self._default_selector()
            definition = self.registry.find(default)
            if definition is None:
                wanted = f"'{name}'" if name is not None else f"a selector for {locator!r}"
                raise SelectorNotFound(
                    f"No selector found for {wanted} and default selector '{default}' is not registered"
                )
        return definition

    # ---------- Public API ----------

    def normalize(self, *args: Any) -> ResolvedQuery:
        args_list = list(args)
        options: Mapping[str, Any] = {}
        if args_list and isinstance(args_list[-1], MappingABC):
            options = args_list.pop()

        if len(args_list) == 1:
            name, locator = None, args_list[0]
        elif len(args_list) == 2:
            name, locator = args_list
        else:
            raise TypeError(
                "normalize() takes (locator), (locator, options), (selector, locator) "
                f"or (selector, locator, options); got {len(args)} argument(s)"
            )

        definition = self._choose(name, locator)
        xpath_options, filter_options = split_options(options, definition.filter_keys)
        filter_options = normalize_filter_options(
            filter_options,
            filter_keys=definition.filter_keys,
            ignore_hidden_elements=self._ignore_hidden(),
        )

        xpaths = expand_xpaths(definition.call(locator, dict(xpath_options)))
        if not xpaths:
            raise SelectorConfigError(f"selector '{definition.name}' built no xpath for {locator!r}")

        return ResolvedQuery(
            definition=definition,
            locator=locator,
            options=MappingProxyType(dict(options)),
            xpath_options=MappingProxyType(xpath_options),
            filter_options=MappingProxyType(filter_options),
            xpaths=xpaths,
        )


def normalize(*args: Any) -> ResolvedQuery:
    """Resolve against the process default registry and settings."""
    return LocatorResolver(get_registry()).normalize(*args)
