# locator_resolver/selectors/filters.py
from __future__ import annotations

"""Post-query filters
---------------------
Predicates applied to each node a query returned, and the normalization
applied to the caller's filter option values before those predicates run.

Every predicate has the shape `(node, filter_options) -> bool` and reads
only the keys it owns; an absent key never excludes a node.
"""

import re
from collections.abc import Iterable
from typing import AbstractSet, Any, Callable, Dict, Mapping, Tuple

from locator_resolver.selectors.node import Node

FilterPredicate = Callable[[Node, Mapping[str, Any]], bool]

TEXT = "text"
VISIBLE = "visible"
WITH = "with"
CHECKED = "checked"
UNCHECKED = "unchecked"
SELECTED = "selected"


# ---------- Predicates ----------

def text_filter(node: Node, options: Mapping[str, Any]) -> bool:
    pattern = options.get(TEXT)
    if pattern is None:
        return True
    return re.search(pattern, node.text()) is not None


def visible_filter(node: Node, options: Mapping[str, Any]) -> bool:
    if options.get(VISIBLE):
        return node.is_visible()
    return True


def value_filter(node: Node, options: Mapping[str, Any]) -> bool:
    expected = options.get(WITH)
    if expected is None:
        return True
    return node.value() == expected


def checked_filter(node: Node, options: Mapping[str, Any]) -> bool:
    if options.get(CHECKED):
        return node.is_checked()
    return True


def unchecked_filter(node: Node, options: Mapping[str, Any]) -> bool:
    if options.get(UNCHECKED):
        return not node.is_checked()
    return True


def selected_filter(node: Node, options: Mapping[str, Any]) -> bool:
    expected = options.get(SELECTED)
    if not expected:
        return True
    return not (set(expected) - set(node.selected_option_texts()))


# Named predicates, each with the option keys it consumes.
NAMED_FILTERS: Dict[str, Tuple[FilterPredicate, Tuple[str, ...]]] = {
    TEXT: (text_filter, (TEXT,)),
    VISIBLE: (visible_filter, (VISIBLE,)),
    WITH: (value_filter, (WITH,)),
    CHECKED: (checked_filter, (CHECKED,)),
    UNCHECKED: (unchecked_filter, (UNCHECKED,)),
    SELECTED: (selected_filter, (SELECTED,)),
}


# ---------- Normalization ----------

def _normalize_text(value: Any) -> Any:
    # Plain strings match literally; compiled patterns are used as given.
    if isinstance(value, str):
        return re.compile(re.escape(value))
    return value


def _normalize_selected(value: Any) -> Any:
    if isinstance(value, str):
        return [value]
    if isinstance(value, Iterable):
        return list(value)
    # None and other falsy scalars mean "no requirement"
    if not value:
        return value
    return [value]


_NORMALIZERS: Dict[str, Callable[[Any], Any]] = {
    TEXT: _normalize_text,
    SELECTED: _normalize_selected,
}


def normalize_filter_options(
    options: Mapping[str, Any],
    *,
    filter_keys: AbstractSet[str],
    ignore_hidden_elements: bool,
) -> Dict[str, Any]:
    """
    Normalize the values of already-split filter options.

    `visible` falls back to `ignore_hidden_elements` when the caller did not
    pass it, but only for definitions that recognize the key.
    """
    out: Dict[str, Any] = {}
    for key, value in options.items():
        fn = _NORMALIZERS.get(key)
        out[key] = fn(value) if fn else value
    if VISIBLE in filter_keys and VISIBLE not in out:
        out[VISIBLE] = ignore_hidden_elements
    return out
