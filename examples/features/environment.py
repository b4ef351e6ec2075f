"""behave hooks: browser session and run record from phrasebook."""

from phrasebook.environment import *  # noqa: F401,F403
