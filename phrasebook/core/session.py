"""
Browser Session - Async facade over the WebDriver.

Step handlers never touch Selenium directly. They await a
BrowserSession, so every driver call is a suspension point and
steps can be serialized with the session lock.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, TYPE_CHECKING
import asyncio
import logging

from selenium.common.exceptions import (
    InvalidSelectorException,
    NoSuchElementException,
    TimeoutException,
)
from selenium.webdriver.common.action_chains import ActionChains
from selenium.webdriver.common.by import By
from selenium.webdriver.common.keys import Keys
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from phrasebook.core.errors import (
    ClickableTimeoutError,
    DisplayTimeoutError,
    ElementNotFoundError,
    StepError,
)

if TYPE_CHECKING:
    from selenium.webdriver.remote.webdriver import WebDriver

logger = logging.getLogger(__name__)

# Opaque element reference borrowed from the driver for one step
ElementHandle = Any


class BrowserSession(ABC):
    """Abstract async interface consumed by locators, waiters and actions."""

    def __init__(self):
        self.lock = asyncio.Lock()

    @abstractmethod
    async def find_element(self, selector: str) -> ElementHandle:
        """Find the first element matching a CSS selector in the document."""

    @abstractmethod
    async def find_all(self, selector: str, root: Optional[ElementHandle] = None) -> List[ElementHandle]:
        """All matches in document order, restricted to descendants of root if given."""

    @abstractmethod
    async def parent_of(self, handle: ElementHandle) -> Optional[ElementHandle]:
        """Parent element, or None when the node has none."""

    @abstractmethod
    async def get_attribute(self, handle: ElementHandle, name: str) -> Optional[str]:
        pass

    @abstractmethod
    async def get_text(self, handle: ElementHandle) -> str:
        pass

    @abstractmethod
    async def get_tag_name(self, handle: ElementHandle) -> str:
        pass

    @abstractmethod
    async def get_url(self) -> str:
        pass

    @abstractmethod
    async def wait_for_displayed(self, handle: ElementHandle, timeout_ms: int, selector: str) -> None:
        """Raise DisplayTimeoutError naming selector if the element is not visible in time."""

    @abstractmethod
    async def wait_for_clickable(self, handle: ElementHandle, timeout_ms: int, selector: str) -> None:
        """Raise ClickableTimeoutError naming selector if the element is not clickable in time."""

    @abstractmethod
    async def click(self, handle: ElementHandle) -> None:
        pass

    @abstractmethod
    async def send_keys(self, *keys: str) -> None:
        """Send keystrokes to the focused element."""

    @abstractmethod
    async def select_all(self) -> None:
        """Select the whole content of the focused element."""

    @abstractmethod
    async def save_screenshot(self, path: str) -> None:
        pass

    @abstractmethod
    async def navigate(self, url: str) -> None:
        pass

    async def close(self) -> None:
        """Release the underlying browser."""


class SeleniumSession(BrowserSession):
    """
    BrowserSession backed by a Selenium WebDriver.

    Blocking Selenium calls run in a worker thread via asyncio.to_thread,
    so the event loop stays free while the browser works.

    Example:
        >>> session = SeleniumSession(create_driver(headless=True))
        >>> element = await session.find_element("#login")
        >>> await session.click(element)
    """

    def __init__(self, driver: "WebDriver", find_timeout_ms: int = 5000):
        super().__init__()
        self.driver = driver
        self.find_timeout_ms = find_timeout_ms

    async def _call(self, func, *args):
        return await asyncio.to_thread(func, *args)

    async def find_element(self, selector: str) -> ElementHandle:
        def _find():
            try:
                return WebDriverWait(self.driver, self.find_timeout_ms / 1000).until(
                    EC.presence_of_element_located((By.CSS_SELECTOR, selector))
                )
            except TimeoutException as e:
                raise ElementNotFoundError(selector, self.find_timeout_ms) from e

        return await self._call(_find)

    async def find_all(self, selector: str, root: Optional[ElementHandle] = None) -> List[ElementHandle]:
        container = root if root is not None else self.driver
        return await self._call(container.find_elements, By.CSS_SELECTOR, selector)

    async def parent_of(self, handle: ElementHandle) -> Optional[ElementHandle]:
        def _parent():
            try:
                return handle.find_element(By.XPATH, "..")
            except (NoSuchElementException, InvalidSelectorException):
                # The document node is not an element; detached nodes have no parent
                return None

        return await self._call(_parent)

    async def get_attribute(self, handle: ElementHandle, name: str) -> Optional[str]:
        return await self._call(handle.get_attribute, name)

    async def get_text(self, handle: ElementHandle) -> str:
        return await self._call(lambda: handle.text)

    async def get_tag_name(self, handle: ElementHandle) -> str:
        return await self._call(lambda: handle.tag_name)

    async def get_url(self) -> str:
        return await self._call(lambda: self.driver.current_url)

    async def wait_for_displayed(self, handle: ElementHandle, timeout_ms: int, selector: str) -> None:
        def _wait():
            try:
                WebDriverWait(self.driver, timeout_ms / 1000).until(EC.visibility_of(handle))
            except TimeoutException as e:
                raise DisplayTimeoutError(f'Element "{selector}" was not displayed', timeout_ms) from e

        await self._call(_wait)

    async def wait_for_clickable(self, handle: ElementHandle, timeout_ms: int, selector: str) -> None:
        def _wait():
            try:
                WebDriverWait(self.driver, timeout_ms / 1000).until(EC.element_to_be_clickable(handle))
            except TimeoutException as e:
                raise ClickableTimeoutError(f'Element "{selector}" was not clickable', timeout_ms) from e

        await self._call(_wait)

    async def click(self, handle: ElementHandle) -> None:
        await self._call(handle.click)

    async def send_keys(self, *keys: str) -> None:
        def _send():
            ActionChains(self.driver).send_keys(*keys).perform()

        await self._call(_send)

    async def select_all(self) -> None:
        def _select():
            (
                ActionChains(self.driver)
                .key_down(Keys.CONTROL)
                .send_keys("a")
                .key_up(Keys.CONTROL)
                .perform()
            )

        await self._call(_select)

    async def save_screenshot(self, path: str) -> None:
        saved = await self._call(self.driver.save_screenshot, path)
        if not saved:
            raise StepError(f"Could not write screenshot to {path}")

    async def navigate(self, url: str) -> None:
        logger.info(f"[SeleniumSession] Navigating to {url}")
        await self._call(self.driver.get, url)

    async def close(self) -> None:
        await self._call(self.driver.quit)
