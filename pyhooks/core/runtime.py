# runtime.py -------------------------------------------------
import asyncio
from collections import deque
from typing import Deque, Dict, Optional, Set

from .debug import end_trace, record_schedule, start_trace
from .errors import RenderLoopError


class Scheduler:
    """Coalescing render queue for ``HookContext`` instances.

    Everything runs on one thread: handlers queue updates and call
    ``schedule_render``; ``flush`` (or ``run_renders`` inside a loop) later
    drains the queue, running at most one pass per dirty instance.
    """

    def __init__(self, *, render_limit: Optional[int] = None) -> None:
        if render_limit is None:
            from pyhooks.config import get_settings

            render_limit = get_settings().render_limit
        self.render_limit = render_limit

        self._queue: Deque = deque()
        self._enqueued: Set = set()
        self._in_flight: Set = set()
        self._requeue: Set = set()  # dirtied while their own pass was running
        self._pass_counts: Dict = {}
        self._flushing: bool = False
        self._render_idle: Optional[asyncio.Event] = None  # created on demand

    # ---------------- instances ----------------
    def mount(self, component_fn, *, key=None, **props):
        """Create an instance of ``component_fn`` and run its first pass."""
        from .hook import HookContext  # import here to avoid a cycle

        ctx = HookContext(
            getattr(component_fn, "__name__", "component"),
            component_fn,
            props=props,
            key=key,
            scheduler=self,
        )
        self.run_pass(ctx)
        return ctx

    def unmount(self, ctx) -> None:
        ctx.unmount()

    def discard(self, ctx) -> None:
        # queued entries stay in the deque; flush skips anything not enqueued
        self._enqueued.discard(ctx)
        self._requeue.discard(ctx)

    def is_dirty(self, ctx) -> bool:
        return ctx in self._enqueued or ctx in self._requeue

    @property
    def pending(self) -> int:
        return len(self._enqueued)

    # ---------------- scheduling ----------------
    def schedule_render(self, ctx, reason: Optional[str] = None) -> None:
        record_schedule(ctx, reason)
        if not ctx.mounted or ctx.failed is not None:
            return
        if ctx in self._in_flight:
            self._requeue.add(ctx)
            return
        if ctx in self._enqueued:
            return
        self._enqueued.add(ctx)
        self._queue.append(ctx)
        if self._render_idle is not None:
            self._render_idle.clear()

    def run_pass(self, ctx):
        if not ctx.mounted:
            return None

        # a pass commits every queued update, so a queued entry becomes stale
        self._enqueued.discard(ctx)

        if self._flushing:
            count = self._pass_counts.get(ctx, 0) + 1
            if count > self.render_limit:
                raise RenderLoopError(ctx.name, self.render_limit)
            self._pass_counts[ctx] = count

        self._in_flight.add(ctx)
        try:
            output = ctx.render()
        finally:
            self._in_flight.discard(ctx)

        if ctx in self._requeue:
            self._requeue.discard(ctx)
            self.schedule_render(ctx, reason="update during render")
        return output

    def flush(self) -> int:
        """Run every queued pass; returns how many passes ran."""
        ran = 0
        self._flushing = True
        try:
            while self._queue:
                ctx = self._queue.popleft()
                if ctx not in self._enqueued:
                    continue
                start_trace(ctx)
                try:
                    self.run_pass(ctx)
                finally:
                    end_trace()
                ran += 1
        finally:
            self._flushing = False
            self._pass_counts.clear()
            if not self._enqueued and self._render_idle is not None:
                self._render_idle.set()
        return ran

    async def run_renders(self) -> int:
        ran = self.flush()
        if not self._enqueued:
            self.get_render_idle().set()
        return ran

    def get_render_idle(self) -> asyncio.Event:
        """Event set whenever the queue is drained.

        Created lazily so it belongs to the loop that first asks for it.
        """
        if self._render_idle is None:
            self._render_idle = asyncio.Event()
            if not self._enqueued:
                self._render_idle.set()  # start in the 'idle' state
        return self._render_idle


_default_scheduler: Optional[Scheduler] = None


def get_default_scheduler() -> Scheduler:
    global _default_scheduler
    if _default_scheduler is None:
        _default_scheduler = Scheduler()
    return _default_scheduler


def set_default_scheduler(scheduler: Optional[Scheduler]) -> None:
    global _default_scheduler
    _default_scheduler = scheduler


def mount(component_fn, *, key=None, **props):
    return get_default_scheduler().mount(component_fn, key=key, **props)


def schedule_rerender(ctx, reason: Optional[str] = None) -> None:
    ctx.scheduler.schedule_render(ctx, reason=reason)


async def run_renders() -> int:
    return await get_default_scheduler().run_renders()
