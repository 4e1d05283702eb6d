# locator_resolver/selectors/errors.py
from __future__ import annotations


class SelectorError(Exception):
    pass


class SelectorNotFound(SelectorError, LookupError):
    """No definition matched and no usable default selector is registered."""


class SelectorConfigError(SelectorError, ValueError):
    """A selector definition is malformed (missing xpath builder, unknown parent, ...)."""
