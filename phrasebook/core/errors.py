"""
Step errors - Named failures surfaced by step handlers.

Nothing here is recovered internally: every error aborts the
current step and is reported by behave as a failed step.
"""

from typing import Optional


class StepError(Exception):
    """Base class for all step failures."""


class UnsupportedKeyError(StepError):
    """Requested key name has no control-code mapping."""

    def __init__(self, key_name: str, supported: Optional[list] = None):
        self.key_name = key_name
        message = f'Key "{key_name}" is not supported'
        if supported:
            message += f" (supported: {', '.join(supported)})"
        super().__init__(message)


class ElementNotFoundError(StepError):
    """Document-wide lookup found no element for the selector."""

    def __init__(self, selector: str, timeout_ms: Optional[int] = None):
        self.selector = selector
        message = f'No element found for "{selector}"'
        if timeout_ms is not None:
            message += f" after {timeout_ms}ms"
        super().__init__(message)


class AncestorNotFoundError(StepError):
    """Ancestor walk reached the document root without a class match."""

    def __init__(self, parent_selector: str, anchor_selector: str):
        self.parent_selector = parent_selector
        self.anchor_selector = anchor_selector
        super().__init__(
            f'Closest parent "{parent_selector}" not found from "{anchor_selector}"'
        )


class ScopedElementNotFoundError(StepError):
    """No descendant matched inside the resolved ancestor."""

    def __init__(self, selector: str, parent_selector: str):
        self.selector = selector
        self.parent_selector = parent_selector
        super().__init__(
            f'Element "{selector}" not found inside parent "{parent_selector}"'
        )


class WaitTimeoutError(StepError):
    """A bounded wait exceeded its budget."""

    def __init__(self, message: str, timeout_ms: int):
        self.timeout_ms = timeout_ms
        super().__init__(f"{message} (timed out after {timeout_ms}ms)")


class DisplayTimeoutError(WaitTimeoutError):
    """Element was not displayed in time."""


class ClickableTimeoutError(WaitTimeoutError):
    """Element was not clickable in time."""


class PredicateTimeoutError(WaitTimeoutError):
    """Polling assertion never observed the expected condition."""


class FinalAssertionMismatch(StepError, AssertionError):
    """
    The re-read after a successful poll disagreed with the expectation.

    Distinct from PredicateTimeoutError: the value was observed,
    then regressed before the final check.
    """
