"""
Behave Bridge - Coroutine handlers as behave steps.

behave calls step functions synchronously with its own context. The
bridge runs each async handler on the run's event loop, threads an
explicit StepContext into it and holds the session lock for the
whole step, so two steps never interleave on one browser.
"""

import functools

from behave.api.async_step import async_run_until_complete

from phrasebook.core.context import StepContext

# behave context attribute holding the run's AsyncContext (set in before_all)
ASYNC_CONTEXT = "async_context"


def step_context(context) -> StepContext:
    """Build the StepContext for the scenario behave is executing."""
    scenario = context.scenario
    return StepContext(
        session=context.session,
        feature_location=scenario.filename,
        scenario_name=scenario.name,
        config=context.phrasebook_config,
    )


def phrase(handler):
    """
    Turn an async handler(ctx, **arguments) into a behave step function.

    Example:
        >>> @when("I open the menu {name:QuotedString}")
        ... @phrase
        ... async def open_menu(ctx, name):
        ...     await ctx.session.click(await ctx.session.find_element(f"#{name}"))
    """
    @functools.wraps(handler)
    async def run_in_session(context, *args, **kwargs):
        ctx = step_context(context)
        async with ctx.session.lock:
            return await handler(ctx, *args, **kwargs)

    return async_run_until_complete(async_context=ASYNC_CONTEXT)(run_in_session)
