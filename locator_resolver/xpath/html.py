# locator_resolver/xpath/html.py
from __future__ import annotations

"""HTML-aware XPath builders
----------------------------
Expressions for the form controls, links and containers a test author
usually refers to by visible text, id, name, placeholder or label.
"""

from typing import Any, Mapping, Optional

from locator_resolver.xpath.expression import XPathUnion, literal


# ---------- Node tests ----------

_FIELD = (
    "*[self::input or self::textarea or self::select]"
    "[not(@type = 'submit' or @type = 'image' or @type = 'hidden')]"
)
_FILLABLE = (
    "*[self::input or self::textarea]"
    "[not(@type = 'submit' or @type = 'image' or @type = 'radio' or @type = 'checkbox'"
    " or @type = 'hidden' or @type = 'file')]"
)
_CHECKBOX = "input[@type = 'checkbox']"
_RADIO = "input[@type = 'radio']"
_SELECT = "select"
_FILE = "input[@type = 'file']"
_BUTTON_INPUT_TYPES = "@type = 'submit' or @type = 'reset' or @type = 'image' or @type = 'button'"


def _has_text(lit: str) -> str:
    return f"contains(normalize-space(string(.)), {lit})"


def _locate_field(node_test: str, locator) -> XPathUnion:
    """
    A control matched by id, name, placeholder or the text of a label
    pointing at it, plus the control nested inside such a label.
    """
    lit = literal(locator)
    by_attribute = (
        f".//{node_test}[@id = {lit} or @name = {lit} or @placeholder = {lit}"
        f" or @id = //label[{_has_text(lit)}]/@for]"
    )
    in_label = f".//label[{_has_text(lit)}]//{node_test}"
    return XPathUnion(by_attribute, in_label)


# ---------- Builders ----------

def id_(locator) -> str:
    return f".//*[@id = {literal(locator)}]"


def field(locator, options: Optional[Mapping[str, Any]] = None) -> XPathUnion:
    return _locate_field(_FIELD, locator)


def fillable_field(locator, options: Optional[Mapping[str, Any]] = None) -> XPathUnion:
    return _locate_field(_FILLABLE, locator)


def checkbox(locator, options: Optional[Mapping[str, Any]] = None) -> XPathUnion:
    return _locate_field(_CHECKBOX, locator)


def radio_button(locator, options: Optional[Mapping[str, Any]] = None) -> XPathUnion:
    return _locate_field(_RADIO, locator)


def select(locator, options: Optional[Mapping[str, Any]] = None) -> XPathUnion:
    return _locate_field(_SELECT, locator)


def file_field(locator, options: Optional[Mapping[str, Any]] = None) -> XPathUnion:
    return _locate_field(_FILE, locator)


def link(locator, options: Optional[Mapping[str, Any]] = None) -> str:
    """Anchors with an href, matched by id, text, title or the alt text of a nested image."""
    lit = literal(locator)
    expr = (
        f".//a[@href][@id = {lit} or {_has_text(lit)} or contains(@title, {lit})"
        f" or .//img[contains(@alt, {lit})]]"
    )
    href = (options or {}).get("href")
    if href:
        expr += f"[@href = {literal(href)}]"
    return expr


def button(locator, options: Optional[Mapping[str, Any]] = None) -> XPathUnion:
    lit = literal(locator)
    return XPathUnion(
        f".//input[{_BUTTON_INPUT_TYPES}][@id = {lit} or contains(@value, {lit}) or contains(@title, {lit})]",
        f".//button[@id = {lit} or contains(@value, {lit}) or {_has_text(lit)} or contains(@title, {lit})]",
        f".//input[@type = 'image'][contains(@alt, {lit})]",
    )


def link_or_button(locator, options: Optional[Mapping[str, Any]] = None) -> XPathUnion:
    return XPathUnion(link(locator, options), button(locator, options))


def fieldset(locator, options: Optional[Mapping[str, Any]] = None) -> str:
    lit = literal(locator)
    return f".//fieldset[@id = {lit} or ./legend[{_has_text(lit)}]]"


def option(locator, options: Optional[Mapping[str, Any]] = None) -> str:
    return f".//option[normalize-space(string(.)) = {literal(locator)}]"


def content(locator, options: Optional[Mapping[str, Any]] = None) -> str:
    return f"./descendant-or-self::*[{_has_text(literal(locator))}]"


def table(locator, options: Optional[Mapping[str, Any]] = None) -> str:
    lit = literal(locator)
    return f".//table[@id = {lit} or ./caption[{_has_text(lit)}]]"
