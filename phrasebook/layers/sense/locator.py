"""
Locator - Ancestor-relative element resolution.

Resolves the element a step acts on, optionally scoped to the
closest ancestor carrying a given class. Scoping lets a step say
"the input inside the card containing #title" without hard-coding
how deep the wrapper markup goes.
"""

from dataclasses import dataclass
from typing import Optional, Set, TYPE_CHECKING
import logging

from phrasebook.core.errors import AncestorNotFoundError, ScopedElementNotFoundError

if TYPE_CHECKING:
    from phrasebook.core.context import StepContext
    from phrasebook.core.session import BrowserSession, ElementHandle

logger = logging.getLogger(__name__)

# Ancestor walks stop at the document element
ROOT_TAG = "html"


def class_tokens(value: Optional[str]) -> Set[str]:
    """Split a class attribute into its tokens; None and blank values give an empty set."""
    if not value:
        return set()
    return set(value.split())


async def resolve_ancestor(
    session: "BrowserSession",
    start: "ElementHandle",
    class_selector: str,
) -> Optional["ElementHandle"]:
    """
    Find the closest ancestor of start whose class list contains class_selector.

    The walk begins at start's immediate parent and stops at the <html>
    element or at a node without a parent. The nearest match wins.

    Args:
        session: Browser session used for DOM reads
        start: Element to walk up from (never matched itself)
        class_selector: Class name, with or without a leading "."

    Returns:
        The matching ancestor, or None if none exists below the root
    """
    class_name = class_selector.strip().lstrip(".")
    if not class_name:
        return None

    node = await session.parent_of(start)
    depth = 1
    while node is not None:
        tag = await session.get_tag_name(node)
        if tag and tag.lower() == ROOT_TAG:
            break
        if class_name in class_tokens(await session.get_attribute(node, "class")):
            logger.debug(f"[Locator] Matched '.{class_name}' {depth} level(s) up")
            return node
        node = await session.parent_of(node)
        depth += 1

    logger.debug(f"[Locator] No ancestor with '.{class_name}' after {depth} level(s)")
    return None


async def locate_first(
    session: "BrowserSession",
    root: Optional["ElementHandle"],
    selector: str,
) -> Optional["ElementHandle"]:
    """First descendant of root matching selector (whole document when root is None)."""
    matches = await session.find_all(selector, root)
    if not matches:
        return None
    return matches[0]


@dataclass(frozen=True)
class SearchScope:
    """
    Where a step looks for its target.

    Attributes:
        target: CSS selector of the element to act on
        parent: Class selector of the closest ancestor to search within
        anchor: Selector of the element the ancestor walk starts from;
            defaults to target when only a parent is given
    """
    target: str
    parent: Optional[str] = None
    anchor: Optional[str] = None

    @property
    def is_scoped(self) -> bool:
        return self.parent is not None

    @property
    def anchor_selector(self) -> str:
        return self.anchor or self.target

    def describe(self) -> str:
        if not self.is_scoped:
            return self.target
        text = f"{self.target} in closest {self.parent}"
        if self.anchor:
            text += f" with child {self.anchor}"
        return text


async def resolve_target(ctx: "StepContext", scope: SearchScope) -> "ElementHandle":
    """
    Resolve a SearchScope to a single element.

    Unscoped targets are looked up in the whole document. Scoped targets
    go through the anchor, the closest matching ancestor and a search
    restricted to that ancestor. A missing ancestor fails fast; the
    search never widens to the whole document.

    Raises:
        ElementNotFoundError: target or anchor not in the document
        DisplayTimeoutError: explicit anchor never became visible
        AncestorNotFoundError: no ancestor matches the parent selector
        ScopedElementNotFoundError: target not inside the ancestor
    """
    session = ctx.session
    if not scope.is_scoped:
        return await session.find_element(scope.target)

    anchor = await session.find_element(scope.anchor_selector)
    if scope.anchor:
        await session.wait_for_displayed(anchor, ctx.config.anchor_timeout_ms, scope.anchor)

    parent = await resolve_ancestor(session, anchor, scope.parent)
    if parent is None:
        raise AncestorNotFoundError(scope.parent, scope.anchor_selector)

    element = await locate_first(session, parent, scope.target)
    if element is None:
        raise ScopedElementNotFoundError(scope.target, scope.parent)

    logger.debug(f"[Locator] Resolved {scope.describe()}")
    return element
