"""
Phrasebook - BDD Step Definitions for Selenium

Plain-language behave steps backed by an element-resolution and
wait-synchronization engine.
"""

__version__ = "0.1.0"

from phrasebook.core.config import StepConfig
from phrasebook.core.context import StepContext

__all__ = [
    "StepConfig",
    "StepContext",
    "__version__",
]
