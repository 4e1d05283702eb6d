from typing import Sequence

import pytest

from locator_resolver.selectors import LocatorResolver, SelectorRegistry, register_builtins
from locator_resolver.selectors.registry import get_registry
from locator_resolver.utils.config import get_settings


class FakeNode:
    """In-memory node implementing the capability interface filters read."""

    def __init__(
        self,
        text: str = "",
        *,
        visible: bool = True,
        value: str = "",
        checked: bool = False,
        tag: str = "div",
        selected: Sequence[str] = (),
    ) -> None:
        self._text = text
        self._visible = visible
        self._value = value
        self._checked = checked
        self._tag = tag
        self._selected = list(selected)

    def text(self) -> str:
        return self._text

    def is_visible(self) -> bool:
        return self._visible

    def value(self) -> str:
        return self._value

    def is_checked(self) -> bool:
        return self._checked

    def tag_name(self) -> str:
        return self._tag

    def selected_option_texts(self) -> list[str]:
        return list(self._selected)


@pytest.fixture
def make_node():
    return FakeNode


@pytest.fixture
def registry() -> SelectorRegistry:
    return register_builtins(SelectorRegistry())


@pytest.fixture
def resolver(registry) -> LocatorResolver:
    return LocatorResolver(registry, default_selector="css", ignore_hidden_elements=False)


@pytest.fixture
def fresh_settings(monkeypatch):
    """Reload settings (and the default registry) around env changes made by the test."""
    for key in ("DEFAULT_SELECTOR", "IGNORE_HIDDEN_ELEMENTS", "SELECTORS_FILE"):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    get_registry.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()
    get_registry.cache_clear()
