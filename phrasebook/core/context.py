"""Explicit execution context threaded into every step handler."""

from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING

from phrasebook.core.config import StepConfig

if TYPE_CHECKING:
    from phrasebook.core.session import BrowserSession


@dataclass
class StepContext:
    """The browser session plus metadata of the executing scenario."""
    session: "BrowserSession"
    feature_location: str  # Source file of the current scenario
    scenario_name: Optional[str] = None
    config: StepConfig = field(default_factory=StepConfig)
