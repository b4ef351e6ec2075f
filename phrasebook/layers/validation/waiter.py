"""
Waiter - Bounded polling assertions against asynchronous UI state.

Verification steps never sleep for a fixed time. They poll a pure
read until it satisfies the expectation or the budget runs out,
then re-read once more and compare explicitly, so a value that
flips back after the last successful tick still fails the step.
"""

from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TYPE_CHECKING
import asyncio
import logging

from phrasebook.core.errors import FinalAssertionMismatch, PredicateTimeoutError

if TYPE_CHECKING:
    from phrasebook.core.context import StepContext
    from phrasebook.core.session import ElementHandle

logger = logging.getLogger(__name__)

Predicate = Callable[[], Awaitable[bool]]

DEFAULT_INTERVAL_MS = 100


@dataclass(frozen=True)
class WaitBudget:
    """How long a poll may retry, and what to say when it gives up."""
    duration_ms: int
    message: str


async def poll_until(
    predicate: Predicate,
    budget: WaitBudget,
    interval_ms: int = DEFAULT_INTERVAL_MS,
) -> float:
    """
    Evaluate predicate until it returns True or the budget elapses.

    The first evaluation happens immediately. Between ticks control
    goes back to the event loop via asyncio.sleep.

    Args:
        predicate: Async callable performing a side-effect-free read
        budget: Duration and failure message
        interval_ms: Pause between evaluations

    Returns:
        Milliseconds spent waiting

    Raises:
        PredicateTimeoutError: predicate never held within the budget
    """
    loop = asyncio.get_running_loop()
    start = loop.time()
    deadline = start + budget.duration_ms / 1000
    ticks = 0

    while True:
        ticks += 1
        if await predicate():
            elapsed_ms = (loop.time() - start) * 1000
            logger.debug(f"[Waiter] Condition met after {ticks} tick(s), {elapsed_ms:.0f}ms")
            return elapsed_ms

        remaining = deadline - loop.time()
        if remaining <= 0:
            break
        await asyncio.sleep(min(interval_ms / 1000, remaining))

    logger.debug(f"[Waiter] Gave up after {ticks} tick(s)")
    raise PredicateTimeoutError(budget.message, budget.duration_ms)


async def verify_url(ctx: "StepContext", expected: str) -> str:
    """Wait until the current URL equals expected exactly."""
    session = ctx.session
    budget = WaitBudget(
        ctx.config.poll_timeout_ms,
        f'URL did not change to "{expected}"',
    )

    async def url_matches() -> bool:
        return await session.get_url() == expected

    await poll_until(url_matches, budget, ctx.config.poll_interval_ms)

    final_url = await session.get_url()
    if final_url != expected:
        raise FinalAssertionMismatch(f'Expected URL "{expected}" but was "{final_url}"')
    return final_url


async def verify_text(
    ctx: "StepContext",
    element: "ElementHandle",
    expected: str,
    selector: str,
) -> str:
    """Wait until the element's visible text contains expected."""
    session = ctx.session
    budget = WaitBudget(
        ctx.config.poll_timeout_ms,
        f'Text "{expected}" did not appear in element "{selector}"',
    )

    async def text_contains() -> bool:
        return expected in (await session.get_text(element) or "")

    await poll_until(text_contains, budget, ctx.config.poll_interval_ms)

    final_text = await session.get_text(element) or ""
    logger.info(f'[Waiter] Final text in "{selector}": "{final_text}"')
    if expected not in final_text:
        raise FinalAssertionMismatch(
            f'Text "{expected}" not found in element "{selector}" (was "{final_text}")'
        )
    return final_text


async def verify_attribute(
    ctx: "StepContext",
    element: "ElementHandle",
    name: str,
    expected: str,
    selector: str,
) -> Optional[str]:
    """Wait until the element's attribute exists and contains expected."""
    session = ctx.session
    budget = WaitBudget(
        ctx.config.poll_timeout_ms,
        f'Value "{expected}" did not appear in attribute "{name}" of element "{selector}"',
    )

    async def attribute_contains() -> bool:
        value = await session.get_attribute(element, name)
        return value is not None and expected in value

    await poll_until(attribute_contains, budget, ctx.config.poll_interval_ms)

    final_value = await session.get_attribute(element, name)
    logger.info(f'[Waiter] Final value of attribute "{name}" on "{selector}": "{final_value}"')
    if final_value is None or expected not in final_value:
        raise FinalAssertionMismatch(
            f'Expected attribute "{name}" of "{selector}" to contain "{expected}" but was "{final_value}"'
        )
    return final_value
