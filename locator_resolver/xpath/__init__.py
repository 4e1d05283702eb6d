# locator_resolver/xpath/__init__.py
"""
XPath package
-------------
Expression building used by the built-in selector definitions: literal
quoting, multi-alternative unions, CSS translation and HTML helpers.
"""

from .expression import XPathUnion, css, literal, text_of
from . import html

__all__ = [
    "XPathUnion",
    "css",
    "literal",
    "text_of",
    "html",
]
