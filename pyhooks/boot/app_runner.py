import asyncio
import threading
from typing import Any, Optional

from pyhooks.config import get_settings
from pyhooks.core.debug import (
    FG_RED,
    RESET,
    clear_traces,
    disable_tracing,
    enable_tracing,
    is_tracing_enabled,
    print_last_trace,
)
from pyhooks.core.errors import HookError
from pyhooks.core.hook import HookContext
from pyhooks.core.runtime import Scheduler


def find_instance(root: Optional[HookContext], key) -> Optional[HookContext]:
    """Depth-first search for the instance mounted with ``key``."""
    if root is None:
        return None
    if root.key == key:
        return root
    for child in root.children:
        found = find_instance(child, key)
        if found is not None:
            return found
    return None


def snapshot(ctx: Optional[HookContext]) -> dict:
    """Plain-data view of an instance tree: outputs without handlers."""
    if ctx is None:
        return {}
    output = ctx.output
    if isinstance(output, dict):
        output = {k: v for k, v in output.items() if k not in ("handlers", "children")}
    return {
        "name": ctx.name,
        "key": ctx.key,
        "output": output,
        "children": [snapshot(ch) for ch in ctx.children],
    }


class AppRunner:
    """Background runner that owns the render loop for one root component.

    Handlers are always called on the runner's loop thread so the cells are
    never touched from two threads.

    Usage:
        app = AppRunner(App)
        app.call("todos", "add_item", "buy milk")
        ...
        app.shutdown()
    """

    def __init__(self, app_component_fn, *, fps: Optional[int] = None, trace: Optional[bool] = None):
        settings = get_settings()
        self._app_component_fn = app_component_fn
        self._fps: int = max(1, int(fps if fps is not None else settings.fps))
        self._trace: bool = settings.trace if trace is None else trace
        self._loop: asyncio.AbstractEventLoop = asyncio.new_event_loop()
        self._thread: threading.Thread = threading.Thread(
            target=self._thread_main, name="pyhooks-app-loop", daemon=True
        )
        self._stopping: bool = False
        self._ready: threading.Event = threading.Event()

        # Set on loop thread during startup
        self._scheduler: Optional[Scheduler] = None
        self._root_ctx: Optional[HookContext] = None
        self._startup_error: Optional[BaseException] = None

        self._thread.start()
        # Wait until the loop thread mounted the app
        self._ready.wait()
        if self._startup_error is not None:
            raise self._startup_error

    @property
    def root(self) -> Optional[HookContext]:
        return self._root_ctx

    # -------------------------------
    # Public API
    # -------------------------------
    def call(
        self,
        key,
        handler: str,
        *args: Any,
        wait: bool = True,
        timeout: Optional[float] = 2.0,
    ) -> dict:
        """Invoke ``handler`` from the output of the instance mounted with ``key``.

        If wait=True, blocks until the render queue is idle and returns a
        snapshot of the instance tree.
        """
        if self._stopping:
            return {}

        async def _do_call():
            target = find_instance(self._root_ctx, key)
            if target is None:
                raise KeyError(f"no mounted component with key {key!r}")
            handlers = (target.output or {}).get("handlers", {})
            if handler not in handlers:
                raise KeyError(f"<{target.name}> has no handler {handler!r}")
            handlers[handler](*args)
            if wait:
                # Let the render loop commit before returning
                await asyncio.sleep(0)
                await self._scheduler.get_render_idle().wait()
            return snapshot(self._root_ctx)

        fut = asyncio.run_coroutine_threadsafe(_do_call(), self._loop)
        if not wait:
            return {}
        return fut.result(timeout=timeout)

    def state(self, timeout: Optional[float] = 1.0) -> dict:
        async def _task():
            return snapshot(self._root_ctx)

        return asyncio.run_coroutine_threadsafe(_task(), self._loop).result(timeout=timeout)

    def shutdown(self) -> None:
        """Stop render loop and background thread."""
        if self._stopping:
            return
        self._stopping = True

        # Nudge the loop so the sleep wakes up promptly
        def _noop():
            return None

        try:
            self._loop.call_soon_threadsafe(_noop)
        except RuntimeError:
            pass  # loop already closed
        # Wait loop thread to exit
        self._thread.join(timeout=2.0)

    # -------------------------------
    # Debug helpers
    # -------------------------------
    def print_vnode_tree(self) -> None:
        if self._stopping or self._root_ctx is None:
            return

        async def _task():
            self._root_ctx.render_tree()

        asyncio.run_coroutine_threadsafe(_task(), self._loop).result(timeout=1.0)

    def print_render_trace(self) -> None:
        if self._stopping:
            return

        async def _task():
            print_last_trace()

        asyncio.run_coroutine_threadsafe(_task(), self._loop).result(timeout=1.0)

    # -------------------------------
    # Internal: loop thread
    # -------------------------------
    def _thread_main(self) -> None:
        asyncio.set_event_loop(self._loop)
        try:
            self._loop.run_until_complete(self._loop_main())
        finally:
            self._loop.close()

    async def _loop_main(self) -> None:
        # leave tracing alone if someone else already turned it on
        owns_tracing = self._trace and not is_tracing_enabled()
        if owns_tracing:
            clear_traces()
            enable_tracing()

        try:
            self._scheduler = Scheduler()
            self._scheduler.get_render_idle()
            self._root_ctx = self._scheduler.mount(self._app_component_fn)
        except BaseException as exc:
            self._startup_error = exc
            if owns_tracing:
                disable_tracing()
            self._ready.set()
            return

        # Signal readiness to callers
        self._ready.set()

        # Render loop
        interval = 1.0 / self._fps
        try:
            while not self._stopping:
                try:
                    await self._scheduler.run_renders()
                except HookError as exc:
                    # the failed instance stays frozen; the rest of the tree keeps rendering
                    print(f"{FG_RED}[pyhooks]{RESET} {exc}")
                await asyncio.sleep(interval)
        finally:
            # Graceful unmount
            if self._root_ctx is not None:
                self._root_ctx.unmount()
            if owns_tracing:
                disable_tracing()


def run_app(app_component_fn, *, fps: Optional[int] = None) -> AppRunner:
    """Create and start an AppRunner for the given root component."""
    return AppRunner(app_component_fn, fps=fps)
