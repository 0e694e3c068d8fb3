"""Tests for the demo app, the terminal commands and the AppRunner."""

import pytest

from pyhooks.boot import AppRunner, find_instance, snapshot
from pyhooks.boot.terminal import dispatch, format_state, parse_command, resolve_todo_id
from pyhooks.components import App


def counter_ids():
    n = {"i": 0}

    def _next():
        n["i"] += 1
        return f"id{n['i']}"

    return _next


class TestParseCommand:
    def test_command_and_argument(self):
        assert parse_command("add buy milk") == ("add", "buy milk")

    def test_command_is_lowercased(self):
        assert parse_command("  THEME ") == ("theme", "")

    def test_slash_is_colon(self):
        assert parse_command("/q") == (":q", "")
        assert parse_command(": tree") == (":tree", "")

    def test_blank(self):
        assert parse_command("   ") == ("", "")
        assert parse_command(None) == ("", "")


class TestDemoApp:
    def test_tree_shape(self, scheduler):
        root = scheduler.mount(App, labels=("a", "b", "c"))
        keys = [child.key for child in root.children]
        assert keys == ["theme", "todos", "hover-0", "hover-1", "hover-2"]
        assert find_instance(root, "hover-2").output["label"] == "c"
        assert find_instance(root, "missing") is None

    def test_hover_cards_are_independent(self, scheduler):
        root = scheduler.mount(App)
        find_instance(root, "hover-0").output["handlers"]["on_pointer_enter"]()
        scheduler.flush()
        assert find_instance(root, "hover-0").output["hovering"] is True
        assert find_instance(root, "hover-1").output["hovering"] is False

    def test_snapshot_and_format(self, scheduler):
        root = scheduler.mount(App, id_factory=counter_ids())
        todos = find_instance(root, "todos")
        todos.output["handlers"]["add_item"]("buy milk")
        scheduler.flush()

        state = snapshot(root)
        assert "handlers" not in state["children"][1]["output"]
        assert resolve_todo_id(state, "#1") == "id1"
        assert resolve_todo_id(state, "#9") is None
        assert resolve_todo_id(state, "#x") is None
        assert resolve_todo_id(state, "id7") == "id7"

        text = format_state(state)
        assert "buy milk" in text
        assert "light" in text


class FakeApp:
    def __init__(self, state=None):
        self.calls = []
        self._state = state or {"children": []}

    def call(self, key, handler, *args):
        self.calls.append((key, handler, args))
        return self._state

    def state(self):
        return self._state


class TestDispatch:
    def test_routes_commands_to_handlers(self):
        app = FakeApp()
        dispatch(app, "add", "buy milk")
        dispatch(app, "type", "draft")
        dispatch(app, "submit", "")
        dispatch(app, "enter", "1")
        dispatch(app, "leave", "")
        dispatch(app, "theme", "")
        dispatch(app, "rm", "_abc")
        assert app.calls == [
            ("todos", "add_item", ("buy milk",)),
            ("todos", "set_input", ("draft",)),
            ("todos", "submit", ()),
            ("hover-1", "on_pointer_enter", ()),
            ("hover-0", "on_pointer_leave", ()),
            ("theme", "toggle", ()),
            ("todos", "remove_item", ("_abc",)),
        ]

    def test_remove_by_position(self):
        state = {
            "children": [
                {"key": "todos", "output": {"items": [{"key": "_x", "text": "a"}]}}
            ]
        }
        app = FakeApp(state)
        dispatch(app, "rm", "#1")
        dispatch(app, "rm", "#2")
        assert app.calls == [("todos", "remove_item", ("_x",))]

    def test_unknown_command(self):
        with pytest.raises(KeyError):
            dispatch(FakeApp(), "dance", "")


class TestAppRunner:
    def test_end_to_end(self):
        app = AppRunner(App, fps=100, trace=False)
        try:
            state = app.call("todos", "add_item", "buy milk")
            state = app.call("todos", "add_item", "walk dog")
            items = state["children"][1]["output"]["items"]
            assert [i["text"] for i in items] == ["buy milk", "walk dog"]

            state = app.call("todos", "remove_item", items[0]["key"])
            items = state["children"][1]["output"]["items"]
            assert [i["text"] for i in items] == ["walk dog"]

            state = app.call("hover-1", "on_pointer_enter")
            assert state["children"][3]["output"]["hovering"] is True
            assert state["children"][2]["output"]["hovering"] is False
        finally:
            app.shutdown()

    def test_unknown_handler(self):
        app = AppRunner(App, fps=100, trace=False)
        try:
            with pytest.raises(KeyError):
                app.call("todos", "fly")
            with pytest.raises(KeyError):
                app.call("nowhere", "add_item", "x")
        finally:
            app.shutdown()

    def test_trace_flag_turns_tracing_on_while_running(self):
        from pyhooks.core import debug

        app = AppRunner(App, fps=100, trace=True)
        try:
            assert debug.is_tracing_enabled()
            app.call("theme", "toggle")
            assert debug.last_trace()["root_name"] == "Theme"
        finally:
            app.shutdown()
        assert not debug.is_tracing_enabled()

    def test_leaves_tracing_enabled_by_caller(self):
        from pyhooks.core import debug

        debug.enable_tracing()
        app = AppRunner(App, fps=100, trace=True)
        app.shutdown()
        assert debug.is_tracing_enabled()
