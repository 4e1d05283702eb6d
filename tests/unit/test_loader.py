from pathlib import Path
import textwrap

import pytest

from locator_resolver.selectors import LocatorResolver, SelectorConfigError
from locator_resolver.selectors.loader import load_selectors_file, register_selectors


def write_yaml(tmp_path: Path, body: str, name: str = "selectors.yaml") -> Path:
    p = tmp_path / name
    p.write_text(textwrap.dedent(body), encoding="utf-8")
    return p


def test_load_and_resolve_custom_selector(tmp_path: Path, registry, make_node):
    f = write_yaml(
        tmp_path,
        """
        selectors:
          - name: test_id
            inherit: xpath
            xpath: ".//*[@data-testid = {locator}]"
            match: "^testid:(?P<locator>.+)$"
            failure_message: "no element with data-testid '{locator}' found"
        """,
    )
    register_selectors(registry, load_selectors_file(f))
    resolver = LocatorResolver(registry, default_selector="css", ignore_hidden_elements=True)

    query = resolver.normalize("testid:save", {"text": "Save"})
    assert query.name == "test_id"
    assert query.xpaths == (".//*[@data-testid = 'save']",)
    assert query.failure_message() == "no element with data-testid 'save' found"
    # filters come from the xpath parent
    assert query.filter(make_node("Save"))
    assert not query.filter(make_node("Save", visible=False))

    # explicit use passes the locator through untouched
    assert resolver.normalize("test_id", "cancel").xpaths == (".//*[@data-testid = 'cancel']",)


def test_css_template_and_named_filters(tmp_path: Path, registry, make_node):
    f = write_yaml(
        tmp_path,
        """
        name: qa
        css: "[data-qa='{locator}']"
        filters: [checked]
        """,
    )
    register_selectors(registry, load_selectors_file(f))
    query = LocatorResolver(registry, default_selector="css").normalize("qa", "agree", {"checked": True})

    assert "@data-qa = 'agree'" in query.xpaths[0]
    assert set(query.filter_options) == {"checked"}
    assert not query.filter(make_node(checked=False))


def test_xpath_list_gives_alternatives(tmp_path: Path, registry):
    f = write_yaml(
        tmp_path,
        """
        name: heading
        xpath:
          - ".//h1[. = {locator}]"
          - ".//h2[. = {locator}]"
        """,
    )
    register_selectors(registry, load_selectors_file(f))
    query = LocatorResolver(registry, default_selector="css").normalize("heading", "Intro")
    assert query.xpaths == (".//h1[. = 'Intro']", ".//h2[. = 'Intro']")


def test_multi_doc_and_inherit_from_earlier_entry(tmp_path: Path, registry):
    f = write_yaml(
        tmp_path,
        """
        name: base_row
        xpath: ".//tr[td = {locator}]"
        filters: [text]
        ---
        name: active_row
        inherit: base_row
        """,
    )
    defs = register_selectors(registry, load_selectors_file(f))
    assert [d.name for d in defs] == ["base_row", "active_row"]
    assert registry.find("active_row").filter_keys == frozenset({"text"})


def test_env_substitution(tmp_path: Path, registry, monkeypatch):
    monkeypatch.setenv("QA_ATTR", "data-qa")
    f = write_yaml(
        tmp_path,
        """
        name: qa
        xpath: ".//*[@${QA_ATTR} = {locator}]"
        """,
    )
    register_selectors(registry, load_selectors_file(f))
    query = LocatorResolver(registry, default_selector="css").normalize("qa", "ok")
    assert query.xpaths == (".//*[@data-qa = 'ok']",)


@pytest.mark.parametrize(
    "body, message",
    [
        ("name: x\nxpath: './/a'\ncss: 'a'\n", "either 'xpath' or 'css'"),
        ("name: x\n", "needs an 'xpath' or 'css'"),
        ("name: x\nxpath: './/a'\nfilters: [shiny]\n", "unknown filter"),
        ("name: x\nxpath: './/a'\nmatch: '('\n", "invalid match pattern"),
        ("name: x\nxpath: './/a'\ncolour: red\n", "colour"),
    ],
)
def test_invalid_definitions(tmp_path: Path, body: str, message: str):
    f = write_yaml(tmp_path, body)
    with pytest.raises(SelectorConfigError, match=message):
        load_selectors_file(f)


def test_unknown_parent_fails_on_register(tmp_path: Path, registry):
    f = write_yaml(tmp_path, "name: x\ninherit: nowhere\n")
    specs = load_selectors_file(f)
    with pytest.raises(SelectorConfigError, match="nowhere"):
        register_selectors(registry, specs)


def test_bad_documents(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_selectors_file(tmp_path / "missing.yaml")
    with pytest.raises(SelectorConfigError, match="YAML parse error"):
        load_selectors_file(write_yaml(tmp_path, "name: [unclosed\n", "broken.yaml"))
    with pytest.raises(SelectorConfigError, match="mapping"):
        load_selectors_file(write_yaml(tmp_path, "- just\n- a list\n", "list.yaml"))
    with pytest.raises(SelectorConfigError, match="No selector definitions"):
        load_selectors_file(write_yaml(tmp_path, "---\n", "empty.yaml"))
