# core.py ----------------------------------------------------
from functools import wraps


class VNode:
    """Description of a child component inside a render output."""

    def __init__(self, component_fn, props=None, key=None):
        self.component_fn = component_fn
        self.props = props or {}
        self.key = key

    def __repr__(self):
        name = getattr(self.component_fn, "__name__", "component")
        key_part = f" key={self.key!r}" if self.key is not None else ""
        return f"<VNode {name}{key_part}>"


def component(fn):
    """Turn ``fn(ctx, **props)`` into a component.

    Calling the decorated function only describes a child (a ``VNode``); the
    body runs later, inside a render pass, with the instance's ``HookContext``
    as first argument.
    """

    @wraps(fn)
    def wrapper(*, key=None, **props):
        return VNode(wrapper, props=props, key=key)

    wrapper.render_fn = fn
    return wrapper


def render_fn_of(component_fn):
    # plain functions can be mounted directly, without @component
    return getattr(component_fn, "render_fn", component_fn)


def child_vnodes(output) -> list:
    if isinstance(output, VNode):
        return [output]
    if isinstance(output, (list, tuple)):
        return [v for v in output if isinstance(v, VNode)]
    if isinstance(output, dict):
        return child_vnodes(output.get("children", []))
    return []
