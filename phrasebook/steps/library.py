"""
Step Library - The phrase catalog.

Importing this module registers every phrase with behave. Each
binding composes the locator, the action executor and the waiter;
handlers receive the StepContext explicitly as their first argument.

Load it from a project's features/steps/ directory:

    import phrasebook.steps.library  # noqa: F401
"""

from behave import given, register_type, then, use_step_matcher, when

from phrasebook.core.context import StepContext
from phrasebook.layers.action.executor import ActionExecutor
from phrasebook.layers.sense.locator import SearchScope, resolve_target
from phrasebook.layers.validation.waiter import verify_attribute, verify_text, verify_url
from phrasebook.steps.bridge import phrase
from phrasebook.steps.parameters import PARAMETER_TYPES

use_step_matcher("parse")
register_type(**PARAMETER_TYPES)


# ---------------------------------------------------------------------------
# Navigation, keys and screenshots
# ---------------------------------------------------------------------------

@given("I navigate to page {url:QuotedString}")
@phrase
async def navigate_to_page(ctx: StepContext, url: str):
    return await ActionExecutor(ctx).navigate(url)


@when("I press key {key_name:QuotedString}")
@phrase
async def press_key(ctx: StepContext, key_name: str):
    """Press Enter, Esc/Escape, Tab, ArrowDown or ArrowUp."""
    return await ActionExecutor(ctx).press_key(key_name)


@then("I take a screenshot")
@phrase
async def take_screenshot(ctx: StepContext):
    return await ActionExecutor(ctx).take_screenshot()


@then("I should be on the {expected_url:QuotedString} page")
@phrase
async def should_be_on_page(ctx: StepContext, expected_url: str):
    return await verify_url(ctx, expected_url)


# ---------------------------------------------------------------------------
# Click
# ---------------------------------------------------------------------------

@when("I click element {selector:QuotedString}")
@phrase
async def click_element(ctx: StepContext, selector: str):
    await ActionExecutor(ctx).click(SearchScope(selector))


@when("I click element {selector:QuotedString} in closest parent {parent_selector:QuotedString}")
@phrase
async def click_element_in_parent(ctx: StepContext, selector: str, parent_selector: str):
    await ActionExecutor(ctx).click(SearchScope(selector, parent=parent_selector))


@when(
    "I click element {selector:QuotedString} in closest parent {parent_selector:QuotedString}"
    " with child {child_selector:QuotedString}"
)
@phrase
async def click_element_in_parent_with_child(
    ctx: StepContext, selector: str, parent_selector: str, child_selector: str
):
    await ActionExecutor(ctx).click(
        SearchScope(selector, parent=parent_selector, anchor=child_selector)
    )


# ---------------------------------------------------------------------------
# Clear
# ---------------------------------------------------------------------------

@when("I clear element {selector:QuotedString}")
@phrase
async def clear_element(ctx: StepContext, selector: str):
    await ActionExecutor(ctx).clear(SearchScope(selector))


@when("I clear element {selector:QuotedString} in closest parent {parent_selector:QuotedString}")
@phrase
async def clear_element_in_parent(ctx: StepContext, selector: str, parent_selector: str):
    await ActionExecutor(ctx).clear(SearchScope(selector, parent=parent_selector))


@when(
    "I clear element {selector:QuotedString} in closest parent {parent_selector:QuotedString}"
    " with child {child_selector:QuotedString}"
)
@phrase
async def clear_element_in_parent_with_child(
    ctx: StepContext, selector: str, parent_selector: str, child_selector: str
):
    await ActionExecutor(ctx).clear(
        SearchScope(selector, parent=parent_selector, anchor=child_selector)
    )


# ---------------------------------------------------------------------------
# Enter text
# ---------------------------------------------------------------------------

@when("I enter {text:QuotedString} into element {selector:QuotedString}")
@phrase
async def enter_text(ctx: StepContext, text: str, selector: str):
    await ActionExecutor(ctx).enter_text(SearchScope(selector), text)


@when(
    "I enter {text:QuotedString} into element {selector:QuotedString}"
    " in closest parent {parent_selector:QuotedString}"
)
@phrase
async def enter_text_in_parent(ctx: StepContext, text: str, selector: str, parent_selector: str):
    await ActionExecutor(ctx).enter_text(SearchScope(selector, parent=parent_selector), text)


@when(
    "I enter {text:QuotedString} into element {selector:QuotedString}"
    " in closest parent {parent_selector:QuotedString} with child {base_selector:QuotedString}"
)
@phrase
async def enter_text_in_parent_with_child(
    ctx: StepContext, text: str, selector: str, parent_selector: str, base_selector: str
):
    await ActionExecutor(ctx).enter_text(
        SearchScope(selector, parent=parent_selector, anchor=base_selector), text
    )


# ---------------------------------------------------------------------------
# Verify text and attributes
# ---------------------------------------------------------------------------

@then("I should see {expected:QuotedString} in element {selector:QuotedString}")
@phrase
async def should_see_text(ctx: StepContext, expected: str, selector: str):
    element = await resolve_target(ctx, SearchScope(selector))
    return await verify_text(ctx, element, expected, selector)


@then(
    "I should see {expected:QuotedString} in element {selector:QuotedString}"
    " in closest parent {parent_selector:QuotedString}"
)
@phrase
async def should_see_text_in_parent(ctx: StepContext, expected: str, selector: str, parent_selector: str):
    element = await resolve_target(ctx, SearchScope(selector, parent=parent_selector))
    return await verify_text(ctx, element, expected, selector)


@then(
    "I should see {expected:QuotedString} in element {selector:QuotedString}"
    " in closest parent {parent_selector:QuotedString} with child {child_selector:QuotedString}"
)
@phrase
async def should_see_text_in_parent_with_child(
    ctx: StepContext, expected: str, selector: str, parent_selector: str, child_selector: str
):
    scope = SearchScope(selector, parent=parent_selector, anchor=child_selector)
    element = await resolve_target(ctx, scope)
    return await verify_text(ctx, element, expected, selector)


@then(
    "I should see {expected:QuotedString} in attribute {attribute:QuotedString}"
    " of element {selector:QuotedString}"
)
@phrase
async def should_see_attribute(ctx: StepContext, expected: str, attribute: str, selector: str):
    element = await resolve_target(ctx, SearchScope(selector))
    return await verify_attribute(ctx, element, attribute, expected, selector)
