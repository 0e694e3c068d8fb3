import secrets
import string
from dataclasses import dataclass
from typing import Callable, Dict, Tuple

from pyhooks.core.hook import HookContext

_ALPHABET = string.digits + string.ascii_lowercase


@dataclass(frozen=True)
class TodoItem:
    id: str
    text: str


def generate_id(length: int = 9) -> str:
    """Short random identifier, e.g. ``'_k3v9x0a1q'``."""
    return "_" + "".join(secrets.choice(_ALPHABET) for _ in range(length))


def use_todo_list(
    ctx: HookContext, *, id_factory: Callable[[], str] = generate_id
) -> Tuple[Tuple[TodoItem, ...], str, Dict[str, Callable]]:
    """Todo list state: the items plus the text typed in the input box.

    Returns ``(todos, input_text, handlers)`` where ``handlers`` holds
    ``add_item(text)``, ``remove_item(id)``, ``set_input(text)`` and
    ``submit()``. Items keep insertion order.
    """
    todos, set_todos = ctx.use_state(())
    input_text, set_input = ctx.use_state("")

    def add_item(text: str) -> None:
        if not text or not text.strip():
            return

        def _append(items):
            taken = {item.id for item in items}
            new_id = id_factory()
            while new_id in taken:
                new_id = id_factory()
            return items + (TodoItem(new_id, text),)

        set_todos(_append)

    def remove_item(item_id: str) -> None:
        def _remove(items):
            for pos, item in enumerate(items):
                if item.id == item_id:
                    return items[:pos] + items[pos + 1 :]
            return items

        set_todos(_remove)

    def submit() -> None:
        # uses the input as of the last render, like an onClick handler would
        if not input_text.strip():
            return
        add_item(input_text)
        set_input("")

    return todos, input_text, {
        "add_item": add_item,
        "remove_item": remove_item,
        "set_input": set_input,
        "submit": submit,
    }
