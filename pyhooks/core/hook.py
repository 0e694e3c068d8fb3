# hook.py ----------------------------------------------------
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional
import warnings

from .core import child_vnodes, render_fn_of
from .debug import enter_render, exit_render
from .errors import ConsistencyViolation, HookOutsideRenderError


@dataclass
class Cell:
    index: int
    value: Any
    kind: str = "state"


@dataclass
class UpdateRequest:
    index: int
    value: Any  # plain value, or an updater ``fn(prev) -> next``


class HookContext:
    """One mounted instance of a component and the cells it owns.

    Cells are identified only by the order in which the component (and any
    behavior unit it calls) asks for them during a render pass. The first pass
    fixes that order; every later pass must repeat it exactly.
    """

    def __init__(self, name, component_fn, *, props=None, key=None, scheduler=None):
        if scheduler is None:
            from .runtime import get_default_scheduler

            scheduler = get_default_scheduler()

        self.name = name
        self.component_fn = component_fn
        self.props = props or {}
        self.key = key
        self.scheduler = scheduler

        self.cells: List[Cell] = []
        self.children: List["HookContext"] = []
        self.output: Any = None
        self.render_version: int = 0

        self._cursor: int = 0
        self._expected_cells: Optional[int] = None  # fixed by the first pass
        self._pending: List[UpdateRequest] = []
        self._setters: Dict[int, Callable] = {}
        self._reducers: Dict[int, Callable] = {}
        self._rendering: bool = False
        self._mounted: bool = True
        self._failed: Optional[ConsistencyViolation] = None

    def __repr__(self):
        return f"<HookContext {self.name} cells={len(self.cells)} v{self.render_version}>"

    # ---------------- lifecycle flags ----------------
    @property
    def mounted(self) -> bool:
        return self._mounted

    @property
    def failed(self) -> Optional[ConsistencyViolation]:
        return self._failed

    @property
    def rendering(self) -> bool:
        return self._rendering

    @property
    def is_first_render(self) -> bool:
        return self._expected_cells is None

    @property
    def has_pending_updates(self) -> bool:
        return bool(self._pending)

    # ---------------- slot store ----------------
    def begin_render(self) -> None:
        if self._failed is not None:
            raise self._failed
        if self._expected_cells is None:
            # a first pass that raised may have left cells behind
            del self.cells[:]
            self._setters.clear()
            self._reducers.clear()
        self._cursor = 0
        self._rendering = True

    def next_cell(self, initial, kind: str = "state") -> Cell:
        self._ensure_rendering(f"use_{kind}")
        idx = self._cursor

        if self._expected_cells is None:  # first render
            cell = Cell(idx, initial, kind)
            self.cells.append(cell)
        else:
            if idx >= len(self.cells):
                self._fail(ConsistencyViolation(self.name, len(self.cells), idx + 1))
            cell = self.cells[idx]
            if cell.kind != kind:
                self._fail(
                    ConsistencyViolation(
                        self.name,
                        len(self.cells),
                        idx + 1,
                        index=idx,
                        expected_kind=cell.kind,
                        actual_kind=kind,
                    )
                )

        self._cursor += 1
        return cell

    def end_render(self) -> None:
        self._rendering = False
        actual = self._cursor
        if self._expected_cells is None:
            self._expected_cells = actual
        elif actual != self._expected_cells:
            self._fail(ConsistencyViolation(self.name, self._expected_cells, actual))
        self.render_version += 1

    def request_update(self, index: int, value) -> None:
        if not self._mounted:  # ignore updates after unmount
            return
        self._pending.append(UpdateRequest(index, value))
        self.scheduler.schedule_render(self, reason=f"cell[{index}] update")

    def commit_pending_updates(self) -> bool:
        pending, self._pending = self._pending, []
        changed = False
        for req in pending:
            cell = self.cells[req.index]
            value = req.value(cell.value) if callable(req.value) else req.value
            if value != cell.value:
                cell.value = value
                changed = True
        return changed

    def _ensure_rendering(self, hook_name: str) -> None:
        if not self._rendering:
            raise HookOutsideRenderError(hook_name, self.name)

    def _fail(self, exc: ConsistencyViolation) -> None:
        self._failed = exc
        self._rendering = False
        raise exc

    # ---------------- hooks ----------------
    def use_state(self, initial):
        if self.is_first_render and callable(initial):
            initial = initial()  # lazy initializer
        cell = self.next_cell(initial, "state")
        idx = cell.index

        set_state = self._setters.get(idx)
        if set_state is None:

            def set_state(val):
                self.request_update(idx, val)

            self._setters[idx] = set_state

        return cell.value, set_state

    def use_reducer(self, reducer, initial, *, init_fn=None):
        """
        Semantics similar to React.useReducer:
        - reducer(state, action) -> new_state
        - initial: initial state (used only on the first mount)
        - init_fn(optional): lazy initializer init_fn(initial) -> state

        ``dispatch`` always applies the reducer passed on the latest render.
        """
        if self.is_first_render and init_fn is not None:
            initial = init_fn(initial)
        cell = self.next_cell(initial, "reducer")
        idx = cell.index
        self._reducers[idx] = reducer

        dispatch = self._setters.get(idx)
        if dispatch is None:

            def dispatch(action):
                self.request_update(idx, lambda s: self._reducers[idx](s, action))

            self._setters[idx] = dispatch

        return cell.value, dispatch

    def _memo_cell(self, kind, factory, deps):
        deps_key = None if deps is None else tuple(deps)  # [] → () (immutable object)
        first = self.is_first_render
        cell = self.next_cell(None, kind)

        if first:
            cell.value = (factory(), deps_key)
        else:
            _value, old_deps = cell.value
            if deps_key is not None and old_deps != deps_key:  # deps changed
                cell.value = (factory(), deps_key)
        return cell.value[0]

    def use_memo(self, factory, deps=None):
        """Cache ``factory()``; recompute only when ``deps`` change.

        ``deps=None`` computes once and never again.
        """
        return self._memo_cell("memo", factory, deps)

    def use_callback(self, fn, deps=None):
        return self._memo_cell("callback", lambda: fn, deps)

    def use_ref(self, initial=None) -> Cell:
        # the cell itself is the ref; writing ``.value`` never schedules a render
        return self.next_cell(initial, "ref")

    # ---------------- render pass ----------------
    def render(self):
        token = enter_render(self)
        try:
            self.commit_pending_updates()
            self.begin_render()
            try:
                self.output = render_fn_of(self.component_fn)(self, **self.props)
            except BaseException:
                self._rendering = False
                raise
            self.end_render()
            self._reconcile(child_vnodes(self.output))
        finally:
            exit_render(token)
        return self.output

    def _reconcile(self, vnodes) -> None:
        old_children = self.children
        old_by_key = {}
        for pos, child in enumerate(old_children):
            slot = child.key if child.key is not None else f"__idx_{pos}"
            old_by_key[(child.component_fn, slot)] = child

        self.children = []
        seen_unkeyed = set()
        for pos, vnode in enumerate(vnodes):
            slot = vnode.key if vnode.key is not None else f"__idx_{pos}"

            if vnode.key is None:
                if vnode.component_fn in seen_unkeyed:
                    warnings.warn(
                        f"[HookContext] Sibling <{vnode.component_fn.__name__}> with no explicit 'key'; "
                        "its state is bound to its position in the list.",
                        RuntimeWarning,
                        stacklevel=2,
                    )
                seen_unkeyed.add(vnode.component_fn)

            matched = old_by_key.pop((vnode.component_fn, slot), None)
            if matched is None or not matched.mounted:
                matched = HookContext(
                    vnode.component_fn.__name__,
                    vnode.component_fn,
                    props=vnode.props,
                    key=vnode.key,
                    scheduler=self.scheduler,
                )
            else:
                matched.props = vnode.props
            self.children.append(matched)

        for orphan in old_by_key.values():
            orphan.unmount()

        for child in self.children:
            self.scheduler.run_pass(child)

    def unmount(self) -> None:
        for child in self.children:
            child.unmount()

        self.children.clear()
        self.cells.clear()
        self._pending.clear()
        self._setters.clear()
        self._reducers.clear()
        # mark as unmounted to skip future rerenders
        self._mounted = False
        self.scheduler.discard(self)

    # FOR DEBUGGING
    def render_tree(self, indent=0):
        from .debug import render_tree as _render_tree

        _render_tree(self, indent)
