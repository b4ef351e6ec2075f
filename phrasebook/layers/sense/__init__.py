"""Sense Layer - Element resolution."""

from phrasebook.layers.sense.locator import SearchScope, locate_first, resolve_ancestor, resolve_target

__all__ = ["SearchScope", "locate_first", "resolve_ancestor", "resolve_target"]
