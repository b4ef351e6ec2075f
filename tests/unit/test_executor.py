"""
Unit tests for ActionExecutor and key handling.
"""

import asyncio
import os

import pytest
from selenium.webdriver.common.keys import Keys

from fake_browser import FakeNode, FakeSession, page
from phrasebook.core.config import StepConfig
from phrasebook.core.context import StepContext
from phrasebook.core.errors import ClickableTimeoutError, DisplayTimeoutError, UnsupportedKeyError
from phrasebook.layers.action.executor import ActionExecutor, SpecialKey, screenshot_path
from phrasebook.layers.sense.locator import SearchScope


def make_executor(session, **config):
    ctx = StepContext(session=session, feature_location="features/login.feature", config=StepConfig(**config))
    return ActionExecutor(ctx)


class TestSpecialKey:
    @pytest.mark.parametrize("name, code", [
        ("Enter", "\ue007"),
        ("Esc", "\ue00c"),
        ("Escape", "\ue00c"),
        ("Tab", "\ue004"),
        ("ArrowDown", "\ue015"),
        ("ArrowUp", "\ue013"),
    ])
    def test_supported_names(self, name, code):
        assert SpecialKey.from_name(name).value == code

    def test_escape_aliases_share_a_member(self):
        assert SpecialKey.from_name("Esc") is SpecialKey.from_name("Escape") is SpecialKey.ESCAPE

    @pytest.mark.parametrize("name", ["PageDown", "enter", "", "ENTER"])
    def test_unsupported_names(self, name):
        with pytest.raises(UnsupportedKeyError) as exc_info:
            SpecialKey.from_name(name)
        assert exc_info.value.key_name == name

    def test_unsupported_key_sends_nothing(self):
        session = FakeSession(page())

        with pytest.raises(UnsupportedKeyError, match="PageDown"):
            asyncio.run(make_executor(session).press_key("PageDown"))

        assert session.calls == []

    def test_press_key_sends_control_code(self):
        session = FakeSession(page())

        asyncio.run(make_executor(session).press_key("Enter"))

        assert session.keys == [Keys.ENTER]


class TestClick:
    def test_waits_then_clicks_once(self):
        button = FakeNode("button", id="save")
        session = FakeSession(page(button))

        asyncio.run(make_executor(session).click(SearchScope("#save")))

        assert session.clicks == [button]
        waits = [c for c in session.calls if c.startswith("wait_for")]
        assert waits == ["wait_for_displayed", "wait_for_clickable"]
        assert session.calls.index("wait_for_clickable") < session.calls.index("click")

    def test_hidden_element_is_never_clicked(self):
        button = FakeNode("button", id="save", displayed=False)
        session = FakeSession(page(button))

        with pytest.raises(DisplayTimeoutError, match=r'"#save" was not displayed \(timed out after 5000ms\)'):
            asyncio.run(make_executor(session).click(SearchScope("#save")))

        assert session.clicks == []

    def test_disabled_element_is_never_clicked(self):
        button = FakeNode("button", id="save", clickable=False)
        session = FakeSession(page(button))

        with pytest.raises(ClickableTimeoutError, match='"#save"'):
            asyncio.run(make_executor(session).click(SearchScope("#save")))

        assert session.clicks == []


class TestTextEntry:
    def test_clear_selects_all_and_deletes(self):
        field = FakeNode("input", id="email")
        session = FakeSession(page(field))

        asyncio.run(make_executor(session).clear(SearchScope("#email")))

        assert session.clicks == [field]
        assert session.keys == ["<select-all>", Keys.BACKSPACE]

    def test_enter_text_types_after_clearing(self):
        field = FakeNode("input", id="email")
        session = FakeSession(page(field))

        asyncio.run(make_executor(session).enter_text(SearchScope("#email"), "user@example.com"))

        assert session.keys == ["<select-all>", Keys.BACKSPACE, "user@example.com"]
        assert "wait_for_displayed" in session.calls

    def test_scoped_entry_uses_keystrokes_too(self):
        label = FakeNode("label", id="email-label")
        field = FakeNode("input", classes="value")
        row = FakeNode("div", classes="form-row", children=[label, field])
        session = FakeSession(page(row))

        scope = SearchScope(".value", parent=".form-row", anchor="#email-label")
        asyncio.run(make_executor(session).enter_text(scope, "hello"))

        assert session.clicks == [field]
        assert session.keys[-1] == "hello"

    @pytest.mark.parametrize("action", [
        lambda executor, scope: executor.clear(scope),
        lambda executor, scope: executor.enter_text(scope, "hello"),
    ], ids=["clear", "enter_text"])
    def test_hidden_field_gets_no_click_and_no_keys(self, action):
        field = FakeNode("input", id="email", displayed=False)
        session = FakeSession(page(field))

        with pytest.raises(DisplayTimeoutError, match='"#email"'):
            asyncio.run(action(make_executor(session), SearchScope("#email")))

        assert session.clicks == []
        assert session.keys == []

    def test_hidden_scoped_field_names_the_whole_scope(self):
        label = FakeNode("label", id="email-label")
        field = FakeNode("input", classes="value", displayed=False)
        session = FakeSession(page(FakeNode("div", classes="form-row", children=[label, field])))

        scope = SearchScope(".value", parent=".form-row", anchor="#email-label")
        with pytest.raises(DisplayTimeoutError) as exc_info:
            asyncio.run(make_executor(session).clear(scope))

        message = str(exc_info.value)
        assert ".value" in message and ".form-row" in message and "#email-label" in message
        assert session.keys == []


class TestScreenshot:
    def test_path_uses_version_and_feature_stem(self):
        path = screenshot_path("screenshots", "v2", "/work/features/checkout.smoke.feature")
        assert path == os.path.join("screenshots", "v2", "checkout.png")

    def test_creates_directories_and_overwrites(self, tmp_path):
        session = FakeSession(page())
        executor = make_executor(session, screenshot_dir=str(tmp_path / "shots"), version="default")

        first = asyncio.run(executor.take_screenshot())
        second = asyncio.run(executor.take_screenshot())

        assert first == second == os.path.join(str(tmp_path / "shots"), "default", "login.png")
        assert os.path.isfile(first)
        assert session.screenshots == [first, first]


class TestNavigate:
    def test_relative_url_joins_base(self):
        session = FakeSession(page())
        executor = make_executor(session, base_url="https://staging.example.com/app/")

        url = asyncio.run(executor.navigate("login"))

        assert url == "https://staging.example.com/app/login"
        assert session.url == url

    def test_absolute_url_without_base(self):
        session = FakeSession(page())

        asyncio.run(make_executor(session).navigate("https://example.com"))

        assert session.url == "https://example.com"
