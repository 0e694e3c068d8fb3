from typing import Any, Callable, Tuple

from pyhooks.core.hook import HookContext

LIGHT = "light"
DARK = "dark"

_UNSET = object()


def use_toggle(ctx: HookContext, on: Any = True, off: Any = False, *, initial=_UNSET):
    """Two-valued state. Returns ``(value, toggle, set_value)``."""
    value, set_value = ctx.use_state(off if initial is _UNSET else initial)

    def toggle():
        set_value(lambda v: off if v == on else on)

    return value, toggle, set_value


def use_theme(ctx: HookContext, initial: str = LIGHT) -> Tuple[str, Callable[[], None]]:
    theme, toggle, _set_theme = use_toggle(ctx, DARK, LIGHT, initial=initial)
    return theme, toggle
