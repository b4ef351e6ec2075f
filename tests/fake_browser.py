"""
In-memory browser used by the unit tests.

FakeSession implements BrowserSession over a tiny node tree and
records every driver call, so tests can assert on what a step did
without a real browser.
"""

from typing import Dict, List, Optional

from phrasebook.core.errors import ClickableTimeoutError, DisplayTimeoutError, ElementNotFoundError
from phrasebook.core.session import BrowserSession


class FakeNode:
    def __init__(
        self,
        tag: str,
        id: Optional[str] = None,
        classes: Optional[str] = None,
        text: str = "",
        attrs: Optional[Dict[str, str]] = None,
        children: Optional[List["FakeNode"]] = None,
        displayed: bool = True,
        clickable: bool = True,
    ):
        self.tag = tag
        self.id = id
        self.classes = classes
        self.text = text
        self.attrs = dict(attrs or {})
        self.displayed = displayed
        self.clickable = clickable
        self.parent: Optional["FakeNode"] = None
        self.children: List["FakeNode"] = []
        for child in children or []:
            self.append(child)

    def append(self, child: "FakeNode") -> "FakeNode":
        child.parent = self
        self.children.append(child)
        return child

    def descendants(self):
        for child in self.children:
            yield child
            yield from child.descendants()

    def matches(self, selector: str) -> bool:
        """Supports "tag", "#id", ".class" and "tag.class"."""
        if selector.startswith("#"):
            return self.id == selector[1:]
        tag, _, class_name = selector.partition(".")
        if tag and tag != self.tag:
            return False
        if class_name:
            return class_name in (self.classes or "").split()
        return True

    def __repr__(self) -> str:
        return f"<{self.tag} id={self.id!r} class={self.classes!r}>"


def page(*body_children: FakeNode) -> FakeNode:
    """Build <html><body>...</body></html>."""
    return FakeNode("html", children=[FakeNode("body", children=list(body_children))])


class FakeSession(BrowserSession):
    def __init__(self, root: FakeNode, url: str = "about:blank"):
        super().__init__()
        self.root = root
        self.url = url
        self.calls: List[str] = []
        self.clicks: List[FakeNode] = []
        self.keys: List[str] = []
        self.screenshots: List[str] = []
        self.focused: Optional[FakeNode] = None

    def _record(self, name: str) -> None:
        self.calls.append(name)

    async def find_element(self, selector):
        self._record("find_element")
        for node in self.root.descendants():
            if node.matches(selector):
                return node
        raise ElementNotFoundError(selector)

    async def find_all(self, selector, root=None):
        self._record("find_all")
        container = root if root is not None else self.root
        return [node for node in container.descendants() if node.matches(selector)]

    async def parent_of(self, handle):
        self._record("parent_of")
        return handle.parent

    async def get_attribute(self, handle, name):
        self._record("get_attribute")
        if name == "class":
            return handle.classes
        if name == "id":
            return handle.id
        return handle.attrs.get(name)

    async def get_text(self, handle):
        self._record("get_text")
        return handle.text

    async def get_tag_name(self, handle):
        self._record("get_tag_name")
        return handle.tag

    async def get_url(self):
        self._record("get_url")
        return self.url

    async def wait_for_displayed(self, handle, timeout_ms, selector):
        self._record("wait_for_displayed")
        if not handle.displayed:
            raise DisplayTimeoutError(f'Element "{selector}" was not displayed', timeout_ms)

    async def wait_for_clickable(self, handle, timeout_ms, selector):
        self._record("wait_for_clickable")
        if not handle.clickable:
            raise ClickableTimeoutError(f'Element "{selector}" was not clickable', timeout_ms)

    async def click(self, handle):
        self._record("click")
        self.clicks.append(handle)
        self.focused = handle

    async def send_keys(self, *keys):
        self._record("send_keys")
        self.keys.extend(keys)

    async def select_all(self):
        self._record("select_all")
        self.keys.append("<select-all>")

    async def save_screenshot(self, path):
        self._record("save_screenshot")
        with open(path, "wb") as f:
            f.write(b"\x89PNG fake")
        self.screenshots.append(path)

    async def navigate(self, url):
        self._record("navigate")
        self.url = url
