"""
locator-resolver
----------------
Resolve test-author locators into XPath queries and node filters.

    from locator_resolver import normalize, Sym

    query = normalize("fillable_field", "Email", {"with": "a@b.c"})
    query.xpaths            # XPath alternatives to run
    query.filter(node)      # keep or drop a node the driver returned
"""

from locator_resolver.selectors import (
    LocatorResolver,
    ResolvedQuery,
    SelectorBuilder,
    SelectorConfigError,
    SelectorDefinition,
    SelectorError,
    SelectorNotFound,
    SelectorRegistry,
    Sym,
    get_registry,
    normalize,
    register_builtins,
)

__all__ = [
    "LocatorResolver",
    "ResolvedQuery",
    "SelectorBuilder",
    "SelectorConfigError",
    "SelectorDefinition",
    "SelectorError",
    "SelectorNotFound",
    "SelectorRegistry",
    "Sym",
    "get_registry",
    "normalize",
    "register_builtins",
]
