import pytest

from locator_resolver.selectors import (
    LocatorResolver,
    SelectorBuilder,
    SelectorConfigError,
    SelectorRegistry,
)
from locator_resolver.selectors import filters as f


def _always(node, options):
    return True


def test_build_without_xpath_builder_fails():
    with pytest.raises(SelectorConfigError, match="no xpath builder"):
        SelectorBuilder("broken").build(SelectorRegistry())


def test_unknown_parent_fails():
    reg = SelectorRegistry()
    with pytest.raises(SelectorConfigError, match="unknown selector 'ghost'"):
        reg.define("child").inherit_from("ghost").register()


def test_inherit_without_registry_fails():
    with pytest.raises(SelectorConfigError):
        SelectorBuilder("child").inherit_from("xpath").build()


def test_child_copies_parent_behavior(registry):
    child = registry.define("my_field").inherit_from("field").register()
    parent = registry.find("field")

    assert child.xpath_builder is parent.xpath_builder
    assert child.filters == parent.filters
    assert child.filter_keys == parent.filter_keys
    assert child.parent == "field"


def test_match_is_not_inherited(registry):
    child = registry.define("my_id").inherit_from("id").register()
    assert registry.find("id").match is not None
    assert child.match is None


def test_failure_message_is_inherited():
    reg = SelectorRegistry()
    reg.define("base").xpath(lambda l, o: ".//b").failure_message(lambda n, l: f"no base {l}").register()
    child = reg.define("child").inherit_from("base").register()
    assert child.failure_message_builder(None, "x") == "no base x"


def test_parent_filters_come_first():
    reg = SelectorRegistry()

    def own(node, options):
        return True

    reg.define("base").xpath(lambda l, o: ".//b").filter(f.text_filter, f.TEXT).register()
    child = reg.define("child").inherit_from("base").filter(own, "mine").register()

    assert child.filters == (f.text_filter, own)
    assert child.filter_keys == frozenset({"text", "mine"})


def test_inheritance_is_a_snapshot():
    reg = SelectorRegistry()
    reg.define("base").xpath(lambda l, o: ".//old").filter(_always, "a").register()
    child = reg.define("child").inherit_from("base").register()

    # Replace the parent; the child keeps what it copied
    reg.define("base").xpath(lambda l, o: ".//new").filter(_always, "b").register()

    assert child.call("x", {}) == ".//old"
    assert child.filter_keys == frozenset({"a"})
    assert reg.define("late").inherit_from("base").register().filter_keys == frozenset({"b"})


def test_multi_level_chain(registry):
    registry.define("level1").inherit_from("field").filter_keys("extra").register()
    level2 = registry.define("level2").inherit_from("level1").register()

    assert {"text", "visible", "with", "checked", "unchecked", "selected", "extra"} <= level2.filter_keys
    assert level2.parent == "level1"


def test_parent_keys_stay_filterable_on_child(registry):
    registry.define("quiet").inherit_from("xpath").register()
    resolver = LocatorResolver(registry, default_selector="css", ignore_hidden_elements=False)

    query = resolver.normalize("quiet", ".//p", {"text": "hello", "count": 2})

    assert "text" in query.filter_options
    assert dict(query.xpath_options) == {"count": 2}


def test_definitions_are_immutable(registry):
    d = registry.find("css")
    with pytest.raises(AttributeError):
        d.name = "other"  # type: ignore[misc]
