"""
Behave hooks - Browser session and run record lifecycle.

Re-export the hooks from a project's features/environment.py:

    from phrasebook.environment import *  # noqa: F401,F403

Configuration comes from behave userdata (-D name=value) layered over
the environment; see StepConfig.from_userdata. Passing
-D report_dir=<dir> also writes a JSON run record.
"""

import asyncio
import logging

from behave.api.async_step import use_or_create_async_context

from phrasebook.core.config import StepConfig
from phrasebook.core.driver_factory import create_session
from phrasebook.reporters.step_recorder import StepRecorder
from phrasebook.steps.bridge import ASYNC_CONTEXT

__all__ = ["before_all", "after_feature", "after_all"]

logger = logging.getLogger(__name__)


def before_all(context):
    """Create the event loop, the browser session and the optional recorder."""
    userdata = context.config.userdata
    config = StepConfig.from_userdata(userdata)
    context.phrasebook_config = config

    use_or_create_async_context(context, ASYNC_CONTEXT, loop=asyncio.new_event_loop())
    context.session = create_session(config)

    report_dir = userdata.get("report_dir")
    context.recorder = StepRecorder(output_dir=report_dir) if report_dir else None

    logger.info(f"[Environment] Session ready (version '{config.version}', headless={config.headless})")


def after_feature(context, feature):
    if context.recorder is not None:
        context.recorder.log_feature(feature)


def after_all(context):
    """Close the browser and the event loop, then write the run record."""
    loop = getattr(context, ASYNC_CONTEXT).loop
    try:
        loop.run_until_complete(context.session.close())
    finally:
        loop.close()

    if context.recorder is not None:
        context.recorder.write()
