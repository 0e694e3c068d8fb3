# pyhooks/core/__init__.py
from .hook import Cell, HookContext, UpdateRequest
from .runtime import (
    Scheduler,
    get_default_scheduler,
    mount,
    run_renders,
    schedule_rerender,
)
from .core import VNode, component
from .errors import (
    ConsistencyViolation,
    HookError,
    HookOutsideRenderError,
    RenderLoopError,
)

__all__ = [
    "Cell",
    "HookContext",
    "UpdateRequest",
    "Scheduler",
    "get_default_scheduler",
    "mount",
    "run_renders",
    "schedule_rerender",
    "VNode",
    "component",
    "ConsistencyViolation",
    "HookError",
    "HookOutsideRenderError",
    "RenderLoopError",
]
