from typing import Callable, Dict, Tuple

from pyhooks.core.hook import HookContext


def use_hover(ctx: HookContext) -> Tuple[bool, Dict[str, Callable[[], None]]]:
    """Track whether the pointer is over an element.

    Returns ``(is_hovering, handlers)``; bind ``handlers["on_pointer_enter"]``
    and ``handlers["on_pointer_leave"]`` to the element's pointer events.
    """
    is_hovering, set_hovering = ctx.use_state(False)

    def on_pointer_enter():
        set_hovering(True)

    def on_pointer_leave():
        set_hovering(False)

    return is_hovering, {
        "on_pointer_enter": on_pointer_enter,
        "on_pointer_leave": on_pointer_leave,
    }
