"""Step definitions: the phrase catalog and its behave bridge."""

from phrasebook.steps.bridge import ASYNC_CONTEXT, phrase, step_context
from phrasebook.steps.parameters import PARAMETER_TYPES, parse_quoted_string

__all__ = [
    "ASYNC_CONTEXT",
    "PARAMETER_TYPES",
    "parse_quoted_string",
    "phrase",
    "step_context",
]
