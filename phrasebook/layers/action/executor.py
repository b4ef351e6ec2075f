"""
Action Executor - Display-gated UI interactions.

Every action resolves its target, waits for it to be displayed
(and clickable, for clicks) and then performs exactly one
primitive. Failures propagate as named step errors.
"""

from enum import Enum
from typing import Dict, TYPE_CHECKING
from urllib.parse import urljoin
import logging
import os

from selenium.webdriver.common.keys import Keys

from phrasebook.core.errors import UnsupportedKeyError
from phrasebook.layers.sense.locator import SearchScope, resolve_target

if TYPE_CHECKING:
    from phrasebook.core.context import StepContext
    from phrasebook.core.session import ElementHandle

logger = logging.getLogger(__name__)


class SpecialKey(Enum):
    """Keys that can be pressed by name, with their WebDriver control codes."""
    ENTER = Keys.ENTER
    ESCAPE = Keys.ESCAPE
    TAB = Keys.TAB
    ARROW_DOWN = Keys.ARROW_DOWN
    ARROW_UP = Keys.ARROW_UP

    @classmethod
    def from_name(cls, name: str) -> "SpecialKey":
        """Look up a key by the name used in step phrases."""
        try:
            return _KEY_NAMES[name]
        except KeyError:
            raise UnsupportedKeyError(name, sorted(_KEY_NAMES)) from None


_KEY_NAMES: Dict[str, SpecialKey] = {
    "Enter": SpecialKey.ENTER,
    "Esc": SpecialKey.ESCAPE,
    "Escape": SpecialKey.ESCAPE,
    "Tab": SpecialKey.TAB,
    "ArrowDown": SpecialKey.ARROW_DOWN,
    "ArrowUp": SpecialKey.ARROW_UP,
}


def screenshot_path(screenshot_dir: str, version: str, feature_location: str) -> str:
    """
    Build the screenshot path for a feature file.

    The name is the feature file's basename cut at its first ".",
    so "checkout.smoke.feature" and "checkout.feature" share a file.
    """
    stem = os.path.basename(feature_location).split(".")[0]
    return os.path.join(screenshot_dir, version, f"{stem}.png")


class ActionExecutor:
    """
    Execute step actions against the context's browser session.

    Text entry always simulates keystrokes (select-all, Backspace,
    then the characters), so frameworks see per-character input events
    regardless of how the target was scoped.

    Example:
        >>> executor = ActionExecutor(ctx)
        >>> await executor.click(SearchScope("#save", parent=".card"))
    """

    def __init__(self, ctx: "StepContext"):
        self.ctx = ctx
        self.session = ctx.session
        self.config = ctx.config

    async def press_key(self, key_name: str) -> SpecialKey:
        """Press a named key on the focused element."""
        key = SpecialKey.from_name(key_name)
        await self.session.send_keys(key.value)
        return key

    async def click(self, scope: SearchScope) -> None:
        element = await resolve_target(self.ctx, scope)
        described = scope.describe()
        await self.session.wait_for_displayed(element, self.config.display_timeout_ms, described)
        await self.session.wait_for_clickable(element, self.config.clickable_timeout_ms, described)
        await self.session.click(element)
        logger.debug(f"[ActionExecutor] Clicked {scope.describe()}")

    async def clear(self, scope: SearchScope) -> "ElementHandle":
        """Focus the element and delete its whole content."""
        element = await resolve_target(self.ctx, scope)
        await self._focus_and_clear(element, scope)
        logger.debug(f"[ActionExecutor] Cleared {scope.describe()}")
        return element

    async def enter_text(self, scope: SearchScope, text: str) -> None:
        """Replace the element's content by typing text."""
        element = await resolve_target(self.ctx, scope)
        await self._focus_and_clear(element, scope)
        await self.session.send_keys(text)
        logger.debug(f"[ActionExecutor] Typed {len(text)} character(s) into {scope.describe()}")

    async def navigate(self, url: str) -> str:
        """Open url, resolved against the configured base URL when relative."""
        if self.config.base_url:
            url = urljoin(self.config.base_url, url)
        await self.session.navigate(url)
        return url

    async def take_screenshot(self) -> str:
        """Save a screenshot named after the current feature file."""
        path = screenshot_path(
            self.config.screenshot_dir,
            self.config.version,
            self.ctx.feature_location,
        )
        directory = os.path.dirname(path)
        if directory and not os.path.isdir(directory):
            os.makedirs(directory, exist_ok=True)
            logger.info(f"[ActionExecutor] Created directory: {directory}")

        await self.session.save_screenshot(path)
        logger.info(f"[ActionExecutor] Screenshot saved: {path}")
        return path

    async def _focus_and_clear(self, element: "ElementHandle", scope: SearchScope) -> None:
        await self.session.wait_for_displayed(element, self.config.display_timeout_ms, scope.describe())
        await self.session.click(element)
        await self.session.select_all()
        await self.session.send_keys(Keys.BACKSPACE)
