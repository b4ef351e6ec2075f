"""Validation Layer - Bounded polling assertions."""

from phrasebook.layers.validation.waiter import WaitBudget, poll_until

__all__ = ["WaitBudget", "poll_until"]
