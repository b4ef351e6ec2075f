"""Action Layer - Display-gated interactions."""

from phrasebook.layers.action.executor import ActionExecutor, SpecialKey

__all__ = ["ActionExecutor", "SpecialKey"]
