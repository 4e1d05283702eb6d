# locator_resolver/selectors/builtins.py
from __future__ import annotations

"""Built-in selectors
---------------------
The default query kinds. Registration order matters for auto-detection;
only `id` has a match predicate, so every other kind is reached by name
or as the configured default.
"""

from locator_resolver.selectors import filters as f
from locator_resolver.selectors.registry import SelectorRegistry
from locator_resolver.selectors.resolver import Sym
from locator_resolver.xpath import css, html


def _option_failure_message(node, locator) -> str:
    message = f"no option with text '{locator}'"
    if node is not None and node.tag_name() == "select":
        message += " in the select box"
    return message


def _fixed_message(template: str):
    return lambda node, locator: template.format(locator=locator)


def register_builtins(registry: SelectorRegistry) -> SelectorRegistry:
    (registry.define("xpath")
        .xpath(lambda locator, options: locator)
        .filter(f.text_filter, f.TEXT)
        .filter(f.visible_filter, f.VISIBLE)
        .register())

    (registry.define("css").inherit_from("xpath")
        .xpath(lambda locator, options: css(locator))
        .register())

    (registry.define("id").inherit_from("xpath")
        .xpath(lambda locator, options: html.id_(locator))
        .match(lambda locator: isinstance(locator, Sym))
        .register())

    (registry.define("field").inherit_from("xpath")
        .xpath(html.field)
        .filter(f.value_filter, f.WITH)
        .filter(f.checked_filter, f.CHECKED)
        .filter(f.unchecked_filter, f.UNCHECKED)
        .filter(f.selected_filter, f.SELECTED)
        .register())

    (registry.define("fieldset").inherit_from("xpath")
        .xpath(html.fieldset)
        .register())

    (registry.define("link_or_button").inherit_from("field")
        .xpath(html.link_or_button)
        .failure_message(_fixed_message("no link or button '{locator}' found"))
        .register())

    (registry.define("link").inherit_from("xpath")
        .xpath(html.link)
        .failure_message(_fixed_message("no link with title, id or text '{locator}' found"))
        .register())

    (registry.define("button").inherit_from("field")
        .xpath(html.button)
        .failure_message(_fixed_message("no button with value or id or text '{locator}' found"))
        .register())

    (registry.define("fillable_field").inherit_from("field")
        .xpath(html.fillable_field)
        .failure_message(_fixed_message(
            "no text field, text area or password field with id, name, or label '{locator}' found"
        ))
        .register())

    (registry.define("radio_button").inherit_from("field")
        .xpath(html.radio_button)
        .failure_message(_fixed_message("no radio button with id, name, or label '{locator}' found"))
        .register())

    (registry.define("checkbox").inherit_from("field")
        .xpath(html.checkbox)
        .failure_message(_fixed_message("no checkbox with id, name, or label '{locator}' found"))
        .register())

    (registry.define("select").inherit_from("field")
        .xpath(html.select)
        .failure_message(_fixed_message("no select box with id, name, or label '{locator}' found"))
        .register())

    (registry.define("option").inherit_from("field")
        .xpath(html.option)
        .failure_message(_option_failure_message)
        .register())

    (registry.define("file_field").inherit_from("field")
        .xpath(html.file_field)
        .failure_message(_fixed_message("no file field with id, name, or label '{locator}' found"))
        .register())

    # no parent, so no filter options
    (registry.define("content")
        .xpath(html.content)
        .register())

    (registry.define("table").inherit_from("xpath")
        .xpath(html.table)
        .register())

    return registry
