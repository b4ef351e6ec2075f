"""Load the phrasebook phrase catalog; add project steps below."""

import phrasebook.steps.library  # noqa: F401
