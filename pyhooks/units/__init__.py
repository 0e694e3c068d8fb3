from .hover import use_hover
from .theme import DARK, LIGHT, use_theme, use_toggle
from .todos import TodoItem, generate_id, use_todo_list

__all__ = [
    "use_hover",
    "use_theme",
    "use_toggle",
    "LIGHT",
    "DARK",
    "TodoItem",
    "generate_id",
    "use_todo_list",
]
