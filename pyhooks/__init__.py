# pyhooks/__init__.py
from .core import (
    Cell,
    ConsistencyViolation,
    HookContext,
    HookError,
    HookOutsideRenderError,
    RenderLoopError,
    Scheduler,
    VNode,
    component,
    mount,
    run_renders,
    schedule_rerender,
)
from .units import TodoItem, generate_id, use_hover, use_theme, use_todo_list, use_toggle

__version__ = "0.1.0"

__all__ = [
    "Cell",
    "ConsistencyViolation",
    "HookContext",
    "HookError",
    "HookOutsideRenderError",
    "RenderLoopError",
    "Scheduler",
    "VNode",
    "component",
    "mount",
    "run_renders",
    "schedule_rerender",
    "TodoItem",
    "generate_id",
    "use_hover",
    "use_theme",
    "use_todo_list",
    "use_toggle",
]
