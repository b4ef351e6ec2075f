"""
Driver Factory - WebDriver creation for step runs.

Provides a single place to build the Chrome WebDriver and wrap it
in the async session the steps consume.
"""

from typing import Optional
from selenium import webdriver
from selenium.webdriver.chrome.options import Options as ChromeOptions

from phrasebook.core.config import StepConfig
from phrasebook.core.session import SeleniumSession

# Type alias for driver - can be extended to support other browsers
WebDriverType = webdriver.Chrome


def create_driver(
    headless: bool = False,
    profile_path: Optional[str] = None,
    window_size: str = "1920,1080",
) -> WebDriverType:
    """
    Create a Chrome WebDriver instance.

    Args:
        headless: Run browser in headless mode
        profile_path: Path to browser profile for session persistence
        window_size: Initial window size as "width,height"

    Example:
        >>> driver = create_driver(headless=True)
        >>> driver.get("https://example.com")
    """
    options = ChromeOptions()

    if headless:
        options.add_argument("--headless=new")

    if profile_path:
        options.add_argument(f"--user-data-dir={profile_path}")

    # Common stability options
    options.add_argument(f"--window-size={window_size}")
    options.add_argument("--disable-extensions")
    options.add_argument("--no-sandbox")
    options.add_argument("--disable-dev-shm-usage")
    options.add_argument("--disable-gpu")
    options.add_experimental_option("excludeSwitches", ["enable-automation"])

    return webdriver.Chrome(options=options)


def create_session(config: StepConfig, driver: Optional[WebDriverType] = None) -> SeleniumSession:
    """Wrap a (new or given) WebDriver in a SeleniumSession configured from config."""
    if driver is None:
        driver = create_driver(headless=config.headless)
    return SeleniumSession(driver, find_timeout_ms=config.find_timeout_ms)
