"""Tests for the toggle and theme units."""

from pyhooks.units import DARK, LIGHT, use_theme, use_toggle


def ThemeBox(ctx, initial=LIGHT):
    theme, toggle = use_theme(ctx, initial)
    return {"theme": theme, "toggle": toggle}


class TestTheme:
    def test_starts_light(self, scheduler):
        ctx = scheduler.mount(ThemeBox)
        assert ctx.output["theme"] == LIGHT

    def test_toggle_switches_back_and_forth(self, scheduler):
        ctx = scheduler.mount(ThemeBox)
        ctx.output["toggle"]()
        scheduler.flush()
        assert ctx.output["theme"] == DARK
        ctx.output["toggle"]()
        scheduler.flush()
        assert ctx.output["theme"] == LIGHT

    def test_two_toggles_in_one_turn_compose(self, scheduler):
        ctx = scheduler.mount(ThemeBox, initial=DARK)
        ctx.output["toggle"]()
        ctx.output["toggle"]()
        scheduler.flush()
        assert ctx.output["theme"] == DARK

    def test_theme_is_one_cell(self, scheduler):
        ctx = scheduler.mount(ThemeBox)
        assert len(ctx.cells) == 1


class TestToggle:
    def test_custom_values(self, scheduler):
        def Switch(ctx):
            value, toggle, set_value = use_toggle(ctx, "on", "off")
            return {"value": value, "toggle": toggle, "set": set_value}

        ctx = scheduler.mount(Switch)
        assert ctx.output["value"] == "off"
        ctx.output["toggle"]()
        scheduler.flush()
        assert ctx.output["value"] == "on"
        ctx.output["set"]("off")
        scheduler.flush()
        assert ctx.output["value"] == "off"

    def test_can_start_at_none(self, scheduler):
        def Picker(ctx):
            value, toggle, _ = use_toggle(ctx, "picked", None, initial=None)
            return {"value": value, "toggle": toggle}

        ctx = scheduler.mount(Picker)
        assert ctx.output["value"] is None
        ctx.output["toggle"]()
        scheduler.flush()
        assert ctx.output["value"] == "picked"

    def test_initial_on_value(self, scheduler):
        def Switch(ctx):
            value, toggle, _ = use_toggle(ctx, None, "off", initial=None)
            return {"value": value, "toggle": toggle}

        ctx = scheduler.mount(Switch)
        assert ctx.output["value"] is None
        ctx.output["toggle"]()
        scheduler.flush()
        assert ctx.output["value"] == "off"

    def test_default_is_boolean(self, scheduler):
        def Flag(ctx):
            value, toggle, _ = use_toggle(ctx)
            return {"value": value, "toggle": toggle}

        ctx = scheduler.mount(Flag)
        assert ctx.output["value"] is False
        ctx.output["toggle"]()
        scheduler.flush()
        assert ctx.output["value"] is True
