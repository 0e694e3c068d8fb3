# errors.py ----------------------------------------------------
from typing import Optional


class HookError(Exception):
    """Base class for every error raised by the hook runtime."""


class ConsistencyViolation(HookError):
    """The cell-call sequence of a component changed between two passes.

    Cells are identified by position only, so a hook hidden behind a condition
    or a loop shifts every cell after it. Rendering the instance again would
    bind state to the wrong calls, so the instance is marked failed instead.
    """

    def __init__(
        self,
        name: str,
        expected: int,
        actual: int,
        *,
        index: Optional[int] = None,
        expected_kind: Optional[str] = None,
        actual_kind: Optional[str] = None,
    ) -> None:
        self.name = name
        self.expected = expected
        self.actual = actual
        self.index = index
        self.expected_kind = expected_kind
        self.actual_kind = actual_kind

        if expected_kind is not None and expected_kind != actual_kind:
            detail = (
                f"cell[{index}] was allocated by use_{expected_kind}() on the "
                f"previous render but by use_{actual_kind}() now"
            )
        else:
            detail = f"expected {expected} cell calls, got {actual}"
        super().__init__(
            f"<{name}> rendered with a different hook order ({detail}). "
            "Hooks and behavior units must not be called inside conditions or "
            "variable-length loops."
        )


class HookOutsideRenderError(HookError, RuntimeError):
    def __init__(self, hook_name: str, name: Optional[str] = None) -> None:
        self.hook_name = hook_name
        where = f" of <{name}>" if name else ""
        super().__init__(
            f"{hook_name}() can only be used during a render pass{where}."
        )


class RenderLoopError(HookError):
    def __init__(self, name: str, limit: int) -> None:
        self.name = name
        self.limit = limit
        super().__init__(
            f"<{name}> re-rendered more than {limit} times in one turn; "
            "a state update during render is probably retriggering itself."
        )
