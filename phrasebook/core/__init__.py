"""Core module - Session, configuration, context and errors."""

from phrasebook.core.config import StepConfig
from phrasebook.core.context import StepContext
from phrasebook.core.session import BrowserSession, SeleniumSession
from phrasebook.core.driver_factory import create_driver, create_session

__all__ = [
    "StepConfig",
    "StepContext",
    "BrowserSession",
    "SeleniumSession",
    "create_driver",
    "create_session",
]
