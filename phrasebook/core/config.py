"""Configuration for step execution."""

from dataclasses import dataclass
from typing import Any, Mapping, Optional
import os

# Wait budgets that can be overridden per run
BUDGET_FIELDS = (
    "display_timeout_ms",
    "clickable_timeout_ms",
    "anchor_timeout_ms",
    "poll_timeout_ms",
    "poll_interval_ms",
    "find_timeout_ms",
)


def _as_bool(value: Any) -> bool:
    return str(value).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class StepConfig:
    """Timeouts, output locations and browser options for a run."""
    version: str = "default"  # Screenshot subdirectory
    screenshot_dir: str = "screenshots"
    base_url: Optional[str] = None
    headless: bool = False
    # Wait budgets in milliseconds
    display_timeout_ms: int = 5000
    clickable_timeout_ms: int = 5000
    anchor_timeout_ms: int = 10000  # Explicit "with child" anchors
    poll_timeout_ms: int = 10000
    poll_interval_ms: int = 100
    find_timeout_ms: int = 5000

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "StepConfig":
        """
        Build a config from environment variables.

        Reads VERSION, PHRASEBOOK_SCREENSHOT_DIR, PHRASEBOOK_BASE_URL and
        PHRASEBOOK_HEADLESS. Keyword overrides win over the environment.
        """
        env = os.environ if environ is None else environ
        values = {
            "version": env.get("VERSION") or "default",
            "screenshot_dir": env.get("PHRASEBOOK_SCREENSHOT_DIR") or "screenshots",
            "base_url": env.get("PHRASEBOOK_BASE_URL") or None,
            "headless": _as_bool(env.get("PHRASEBOOK_HEADLESS", "")),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    @classmethod
    def from_userdata(
        cls,
        userdata: Mapping[str, Any],
        environ: Optional[Mapping[str, str]] = None,
    ) -> "StepConfig":
        """
        Build a config from behave userdata (-D name=value) over the environment.

        Recognised names are version, screenshot_dir, base_url, headless
        and the wait budgets in BUDGET_FIELDS.
        """
        overrides = {name: userdata.get(name) for name in ("version", "screenshot_dir", "base_url")}
        if "headless" in userdata:
            overrides["headless"] = _as_bool(userdata["headless"])
        for name in BUDGET_FIELDS:
            if name in userdata:
                overrides[name] = int(userdata[name])
        return cls.from_env(environ, **overrides)
