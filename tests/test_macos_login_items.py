"""Tests for the login-items adapter with a simulated System Events."""
import asyncio
import pathlib
import re

import pytest

from autorun.core import macos_login_items
from autorun.core.autorun import Autorun
from autorun.core.errors import (
    AutorunDisableFailed,
    AutorunEnableFailed,
    AutorunIsSetFailed,
    ChildProcessFailed,
)
from autorun.core.macos_login_items import (
    MacLoginItemsAdapter,
    applescript_string,
    osascript_args,
    render_script,
    run_osascript,
)
from autorun.core.models import AutorunContext

_LITERAL = r'"((?:[^"\\]|\\.)*)"'


def _unquote(text: str) -> str:
    return re.sub(r"\\(.)", r"\1", text)


class FakeSystemEvents:
    """Interprets the scripts the adapter sends against an in-memory list."""

    def __init__(self, items=None) -> None:
        self.items: list[str] = list(items or [])
        self.scripts: list[str] = []

    async def __call__(self, source: str):
        self.scripts.append(source)
        made = re.search(r"make login item at end with properties \{path:" + _LITERAL, source)
        if made:
            self.items.append(_unquote(made.group(1)))
            return None
        wanted = _unquote(re.search(r"is equal to " + _LITERAL + " then", source).group(1))
        if wanted not in self.items:
            return 0
        if "delete login item" in source:
            self.items.remove(wanted)
        return 1


class FailingSystemEvents:
    def __init__(self) -> None:
        self.calls = 0

    async def __call__(self, source: str):
        self.calls += 1
        raise RuntimeError("System Events got an error: Not authorized to send Apple events.")


@pytest.fixture
def target(tmp_path: pathlib.Path) -> str:
    path = tmp_path / "TestApp"
    path.write_text("", encoding="utf-8")
    return str(path)


def _returns(value):
    async def runner(source: str):
        return value

    return runner


def _ctx(path: str) -> AutorunContext:
    return AutorunContext(app_name="TestApp", executable_path=path)


class TestMacLoginItemsAdapter:
    def test_round_trip(self, target: str):
        events = FakeSystemEvents()
        autorun = Autorun("TestApp", target, platform="darwin", adapter=MacLoginItemsAdapter(script_runner=events))

        async def scenario():
            return [
                await autorun.enable(),
                await autorun.is_set(),
                await autorun.disable(),
                await autorun.is_set(),
            ]

        assert asyncio.run(scenario()) == [True, True, True, False]
        assert events.items == []

    def test_enable_twice_creates_duplicates_and_disable_removes_one(self, target: str):
        events = FakeSystemEvents()
        adapter = MacLoginItemsAdapter(script_runner=events)
        asyncio.run(adapter.enable(_ctx(target)))
        asyncio.run(adapter.enable(_ctx(target)))
        assert events.items == [target, target]

        assert asyncio.run(adapter.disable(_ctx(target))) is True
        assert events.items == [target]
        assert asyncio.run(adapter.is_set(_ctx(target))) is True

    def test_enable_nonexistent_path_fails_without_script(self):
        events = FakeSystemEvents()
        adapter = MacLoginItemsAdapter(script_runner=events)
        with pytest.raises(AutorunEnableFailed) as info:
            asyncio.run(adapter.enable(_ctx("/no/such/file")))
        assert info.value.cause is None
        assert info.value.platform == "darwin"
        assert events.scripts == []

    def test_enable_script_sets_path_and_visibility(self, target: str):
        events = FakeSystemEvents()
        asyncio.run(MacLoginItemsAdapter(script_runner=events).enable(_ctx(target)))
        assert events.scripts == [
            'tell application "System Events" to make login item at end'
            f' with properties {{path:"{target}", hidden:false}}'
        ]

    def test_disable_without_match_is_false(self):
        events = FakeSystemEvents(items=["/Applications/Other.app"])
        adapter = MacLoginItemsAdapter(script_runner=events)
        assert asyncio.run(adapter.disable(_ctx("/Applications/TestApp.app"))) is False
        assert events.items == ["/Applications/Other.app"]

    def test_is_set_matches_path_exactly(self):
        events = FakeSystemEvents(items=["/Applications/TestApp.app"])
        adapter = MacLoginItemsAdapter(script_runner=events)
        assert asyncio.run(adapter.is_set(_ctx("/Applications/TestApp.app"))) is True
        assert asyncio.run(adapter.is_set(_ctx("/applications/testapp.app"))) is False
        assert asyncio.run(adapter.is_set(_ctx("/Applications/TestApp.app/"))) is False

    def test_is_set_accepts_text_result(self):
        adapter = MacLoginItemsAdapter(script_runner=_returns("1\n"))
        assert asyncio.run(adapter.is_set(_ctx("/Applications/TestApp.app"))) is True

    def test_is_set_script_error_raises(self):
        events = FailingSystemEvents()
        adapter = MacLoginItemsAdapter(script_runner=events)
        with pytest.raises(AutorunIsSetFailed) as info:
            asyncio.run(adapter.is_set(_ctx("/Applications/TestApp.app")))
        assert isinstance(info.value.cause, RuntimeError)
        assert events.calls == 1

    def test_is_set_without_result_raises(self):
        adapter = MacLoginItemsAdapter(script_runner=_returns(None))
        with pytest.raises(AutorunIsSetFailed) as info:
            asyncio.run(adapter.is_set(_ctx("/Applications/TestApp.app")))
        assert info.value.cause is None

    def test_blank_result_raises(self):
        adapter = MacLoginItemsAdapter(script_runner=_returns("\n"))
        with pytest.raises(AutorunIsSetFailed):
            asyncio.run(adapter.is_set(_ctx("/Applications/TestApp.app")))

    def test_enable_script_error_raises(self, target: str):
        adapter = MacLoginItemsAdapter(script_runner=FailingSystemEvents())
        with pytest.raises(AutorunEnableFailed) as info:
            asyncio.run(adapter.enable(_ctx(target)))
        assert isinstance(info.value.cause, RuntimeError)

    def test_disable_script_error_raises(self):
        adapter = MacLoginItemsAdapter(script_runner=FailingSystemEvents())
        with pytest.raises(AutorunDisableFailed):
            asyncio.run(adapter.disable(_ctx("/Applications/TestApp.app")))

    def test_path_with_quotes_stays_inside_literal(self, tmp_path: pathlib.Path):
        path = tmp_path / 'Say "hi" \\ App'
        path.write_text("", encoding="utf-8")
        events = FakeSystemEvents()
        adapter = MacLoginItemsAdapter(script_runner=events)
        asyncio.run(adapter.enable(_ctx(str(path))))
        assert events.items == [str(path)]
        assert asyncio.run(adapter.is_set(_ctx(str(path)))) is True


class TestScriptTemplating:
    def test_applescript_string_escapes(self):
        assert applescript_string('a"b\\c') == '"a\\"b\\\\c"'

    def test_render_script_quotes_path(self):
        script = render_script("if path is equal to {path} then", '/tmp/x" & do shell script "rm')
        assert script == 'if path is equal to "/tmp/x\\" & do shell script \\"rm" then'


class TestOsascript:
    def test_each_line_becomes_an_e_argument(self):
        assert osascript_args('tell application "System Events"\nreturn 1\nend tell') == [
            "-e", 'tell application "System Events"',
            "-e", "return 1",
            "-e", "end tell",
        ]

    def test_runs_osascript_through_command_runner(self, monkeypatch):
        calls = []

        async def fake_output(command, args, **options):
            calls.append((command, list(args)))
            return 0, "1\n"

        monkeypatch.setattr(macos_login_items, "run_command_output", fake_output)
        assert asyncio.run(run_osascript("return 1")) == "1\n"
        assert calls == [("osascript", ["-e", "return 1"])]

    def test_nonzero_exit_fails(self, monkeypatch):
        async def fake_output(command, args, **options):
            return 1, ""

        monkeypatch.setattr(macos_login_items, "run_command_output", fake_output)
        with pytest.raises(ChildProcessFailed) as info:
            asyncio.run(run_osascript("return 1"))
        assert info.value.exit_code == 1

    def test_script_error_becomes_typed_failure(self, monkeypatch):
        async def fake_output(command, args, **options):
            raise ChildProcessFailed("execution error: Not authorized to send Apple events (-1743)", exit_code=1)

        monkeypatch.setattr(macos_login_items, "run_command_output", fake_output)
        with pytest.raises(AutorunDisableFailed) as info:
            asyncio.run(MacLoginItemsAdapter().disable(_ctx("/Applications/TestApp.app")))
        assert isinstance(info.value.cause, ChildProcessFailed)
