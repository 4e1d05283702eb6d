# locator_resolver/selectors/__init__.py
"""
Selectors package
-----------------
Registry of named query kinds and the pipeline that resolves a locator
into XPath alternatives plus a post-query node filter.
"""

from .definition import SelectorBuilder, SelectorDefinition
from .errors import SelectorConfigError, SelectorError, SelectorNotFound
from .node import Node, PlaywrightNode
from .registry import SelectorRegistry, get_registry
from .resolver import LocatorResolver, ResolvedQuery, Sym, normalize
from .builtins import register_builtins

__all__ = [
    "SelectorBuilder",
    "SelectorDefinition",
    "SelectorRegistry",
    "get_registry",
    "register_builtins",
    "LocatorResolver",
    "ResolvedQuery",
    "Sym",
    "normalize",
    "Node",
    "PlaywrightNode",
    "SelectorError",
    "SelectorNotFound",
    "SelectorConfigError",
]
