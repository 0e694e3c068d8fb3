"""Debug helpers for inspecting instances and render passes.

This module intentionally avoids importing from ``pyhooks.core.hook`` to
prevent circular imports. Functions operate on any object that exposes the
expected attributes: ``name``, optional ``key``, ``cells`` and ``children``
(iterable of similar nodes).
"""

import time
from contextvars import ContextVar
from typing import Any, Dict, List, Optional

# ANSI constants (single source for this module)
RESET = "\x1b[0m"
BOLD = "\x1b[1m"
DIM = "\x1b[2m"
FG_GRAY = "\x1b[90m"
FG_YELLOW = "\x1b[33m"
FG_MAGENTA = "\x1b[35m"
FG_CYAN = "\x1b[36m"
FG_BLUE = "\x1b[34m"
FG_GREEN = "\x1b[32m"
FG_RED = "\x1b[31m"


def _fmt_val(v, depth: int = 0) -> str:
    if depth > 1:
        return f"{DIM}…{RESET}"
    if v is None or isinstance(v, bool):
        return f"{FG_CYAN}{repr(v)}{RESET}"
    if isinstance(v, (int, float)):
        return f"{FG_BLUE}{repr(v)}{RESET}"
    if isinstance(v, str):
        s = v.replace("\n", "\\n")
        text = s if len(s) <= 40 else s[:37] + "…"
        return f"{FG_YELLOW}{repr(text)}{RESET}"
    if isinstance(v, (list, tuple)):
        return f"{FG_CYAN}[{len(v)}]{RESET}"
    if isinstance(v, dict):
        items = []
        for i, (k, val) in enumerate(v.items()):
            if i >= 5:
                items.append(f"{DIM}…{RESET}")
                break
            items.append(f"{FG_CYAN}{k}{RESET}={_fmt_val(val, depth + 1)}")
        return "{" + ", ".join(items) + "}"
    if callable(v):
        name = getattr(v, "__name__", None) or type(v).__name__
        return f"{FG_GREEN}<fn {name}>{RESET}"
    return f"{FG_GREEN}<{type(v).__name__}>{RESET}"


def render_tree(ctx, indent: int = 0) -> None:
    """Pretty-print the instance tree starting at ``ctx`` to stdout.

    Each line shows the instance name, its key and the current value of every
    cell in allocation order.
    """

    pad = "  " * indent
    name = getattr(ctx, "name", type(ctx).__name__)
    name_col = f"{FG_MAGENTA}{name}{RESET}"
    if getattr(ctx, "key", None) is not None:
        key_part = f" {FG_GRAY}key={RESET}{FG_YELLOW}{getattr(ctx, 'key')!r}{RESET}"
    else:
        key_part = ""

    cells = []
    for cell in getattr(ctx, "cells", []) or []:
        value = cell.value[0] if cell.kind in ("memo", "callback") else cell.value
        cells.append(f"{FG_GRAY}{cell.index}:{cell.kind}{RESET}={_fmt_val(value)}")
    cells_part = f" {FG_GRAY}cells={RESET}[{', '.join(cells)}]"

    failed_part = ""
    if getattr(ctx, "failed", None) is not None:
        failed_part = f" {FG_RED}FAILED{RESET}"

    print(f"{pad}{FG_GRAY}-{RESET} {name_col}{key_part}{cells_part}{failed_part}")

    for ch in getattr(ctx, "children", []) or []:
        render_tree(ch, indent + 1)


# ----------------------------------------------------------------------------
# Render trace instrumentation
# ----------------------------------------------------------------------------

_TRACE_CTX: ContextVar[Optional[Dict[str, Any]]] = ContextVar(
    "_TRACE_CTX", default=None
)
_TRACE_DEPTH: ContextVar[int] = ContextVar("_TRACE_DEPTH", default=0)
_TRACE_ENABLED: bool = False

# Keep a log of recent traces (each trace is a dict with events)
_TRACE_LOG: List[Dict[str, Any]] = []
_TRACE_LOG_LIMIT = 50


def _push_trace_event(event: Dict[str, Any]) -> None:
    trace = _TRACE_CTX.get()
    if trace is None:
        return
    trace["events"].append(event)


def record_schedule(ctx: Any, reason: Optional[str] = None) -> None:
    if not _TRACE_ENABLED:
        return
    reasons: List[str] = getattr(ctx, "_debug_reasons", [])
    if reason:
        reasons.append(reason)
    setattr(ctx, "_debug_reasons", reasons)


def start_trace(root_ctx: Any) -> None:
    if not _TRACE_ENABLED:
        return
    reasons = getattr(root_ctx, "_debug_reasons", [])
    setattr(root_ctx, "_debug_reasons", [])  # consumed
    trace = {
        "id": f"tr-{int(time.time() * 1000)}-{id(root_ctx)}",
        "root_id": id(root_ctx),
        "root_name": getattr(root_ctx, "name", type(root_ctx).__name__),
        "reasons": list(reasons),
        "ts": time.time(),
        "events": [],
    }
    _TRACE_LOG.append(trace)
    if len(_TRACE_LOG) > _TRACE_LOG_LIMIT:
        del _TRACE_LOG[:-_TRACE_LOG_LIMIT]
    _TRACE_CTX.set(trace)
    _TRACE_DEPTH.set(0)


def end_trace() -> None:
    _TRACE_CTX.set(None)
    _TRACE_DEPTH.set(0)


def enter_render(ctx: Any) -> Any:
    if not _TRACE_ENABLED:
        return None
    depth = _TRACE_DEPTH.get()
    kind = "origin" if depth == 0 else "propagate"
    _push_trace_event(
        {
            "t": time.time(),
            "kind": kind,
            "depth": depth,
            "ctx_id": id(ctx),
            "name": getattr(ctx, "name", type(ctx).__name__),
            "key": getattr(ctx, "key", None),
        }
    )
    return _TRACE_DEPTH.set(depth + 1)


def exit_render(token: Any) -> None:
    if token is not None:
        _TRACE_DEPTH.reset(token)


def last_trace() -> Optional[Dict[str, Any]]:
    return _TRACE_LOG[-1] if _TRACE_LOG else None


def print_last_trace() -> None:
    trace = last_trace()
    if trace is None:
        print(f"{FG_GRAY}[debug]{RESET} no render trace available yet.")
        return
    print(f"\n{BOLD}{FG_CYAN}=== Render Trace ==={RESET}")
    print(f"{FG_GRAY}root:{RESET} {FG_YELLOW}{trace['root_name']}{RESET}")
    if trace["reasons"]:
        print(f"{FG_GRAY}reasons:{RESET} {FG_YELLOW}{trace['reasons']}{RESET}")
    for ev in trace["events"]:
        pad = "  " * int(ev.get("depth", 0))
        key = ev.get("key")
        key_part = f" key={key!r}" if key is not None else ""
        print(f"{pad}- {ev.get('kind', '?')}: {ev.get('name', '?')}{key_part}")
    print(f"{BOLD}{FG_CYAN}===================={RESET}\n")


def enable_tracing() -> None:
    global _TRACE_ENABLED
    _TRACE_ENABLED = True


def disable_tracing() -> None:
    global _TRACE_ENABLED
    _TRACE_ENABLED = False


def is_tracing_enabled() -> bool:
    return _TRACE_ENABLED


def clear_traces() -> None:
    del _TRACE_LOG[:]
