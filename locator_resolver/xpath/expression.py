# locator_resolver/xpath/expression.py
from __future__ import annotations

"""XPath expression helpers
---------------------------
String literal quoting, multi-alternative expressions and CSS translation.
Builders may return a plain string or an `XPathUnion`; the resolver expands
anything exposing `to_xpaths()` into separate queries.
"""

import re
from typing import Iterator, Union

from cssselect import HTMLTranslator, parse

_translator = HTMLTranslator()

Expression = Union[str, "XPathUnion"]


def text_of(locator) -> str:
    """String form of a locator as used inside an XPath expression."""
    if isinstance(locator, re.Pattern):
        return locator.pattern
    return str(locator)


def literal(value) -> str:
    """
    Quote a value as an XPath 1.0 string literal.

    XPath 1.0 has no escape sequences, so a value holding both quote kinds
    is assembled with concat().
    """
    s = text_of(value)
    if "'" not in s:
        return f"'{s}'"
    if '"' not in s:
        return f'"{s}"'
    parts = s.split("'")
    pieces: list[str] = []
    for idx, part in enumerate(parts):
        if idx:
            pieces.append('"\'"')
        if part:
            pieces.append(f"'{part}'")
    return "concat(" + ", ".join(pieces) + ")"


class XPathUnion:
    """An ordered set of alternative XPath expressions whose results are unioned."""

    def __init__(self, *expressions: Expression) -> None:
        flat: list[str] = []
        for expr in expressions:
            if isinstance(expr, XPathUnion):
                flat.extend(expr.expressions)
            else:
                flat.append(str(expr))
        self.expressions: tuple[str, ...] = tuple(flat)

    def to_xpaths(self) -> list[str]:
        return list(self.expressions)

    def __iter__(self) -> Iterator[str]:
        return iter(self.expressions)

    def __len__(self) -> int:
        return len(self.expressions)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, XPathUnion):
            return NotImplemented
        return self.expressions == other.expressions

    def __hash__(self) -> int:
        return hash(self.expressions)

    def __str__(self) -> str:
        return " | ".join(self.expressions)

    def __repr__(self) -> str:
        return f"XPathUnion({', '.join(repr(e) for e in self.expressions)})"


def css(selector: str) -> XPathUnion:
    """
    Translate a CSS selector into XPath over the descendants of the current node.
    A selector group ("a, b") becomes one alternative per member.
    """
    return XPathUnion(
        *(_translator.selector_to_xpath(sel, prefix="descendant::") for sel in parse(selector))
    )
