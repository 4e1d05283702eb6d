# locator_resolver/selectors/node.py
from __future__ import annotations

"""Node capability interface
----------------------------
What filters need to know about a candidate node, and an adapter exposing
a Playwright Locator/ElementHandle through that interface.
"""

from typing import List, Protocol, Sequence, Union, runtime_checkable

from playwright.sync_api import ElementHandle, Locator

_SELECTED_OPTION_TEXTS_JS = (
    "el => Array.from(el.querySelectorAll('option'))"
    ".filter(o => o.selected).map(o => o.text)"
)


@runtime_checkable
class Node(Protocol):
    def text(self) -> str: ...

    def is_visible(self) -> bool: ...

    def value(self) -> str: ...

    def is_checked(self) -> bool: ...

    def tag_name(self) -> str: ...

    def selected_option_texts(self) -> Sequence[str]: ...


class PlaywrightNode:
    """
    Wrap a Playwright Locator or ElementHandle (sync API) as a `Node`.

    Only reads are performed; every call goes straight to the page, so the
    values reflect the live document at call time.
    """

    def __init__(self, handle: Union[Locator, ElementHandle]) -> None:
        self.handle = handle

    def text(self) -> str:
        return self.handle.inner_text()

    def is_visible(self) -> bool:
        return self.handle.is_visible()

    def value(self) -> str:
        return self.handle.input_value()

    def is_checked(self) -> bool:
        return self.handle.is_checked()

    def tag_name(self) -> str:
        return str(self.handle.evaluate("el => el.tagName")).lower()

    def selected_option_texts(self) -> List[str]:
        return list(self.handle.evaluate(_SELECTED_OPTION_TEXTS_JS))

    def __repr__(self) -> str:
        return f"PlaywrightNode({self.handle!r})"
