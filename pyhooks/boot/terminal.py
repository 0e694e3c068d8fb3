import asyncio
from typing import Optional, Tuple

from pyhooks.core.debug import BOLD, FG_CYAN, FG_GRAY, FG_YELLOW, RESET

from .app_runner import AppRunner

HELP = """\
Commands:
  add <text>     add a todo item
  type <text>    set the todo input box
  submit         add the input box text and clear it
  rm <id|#n>     remove a todo by id, or by 1-based position
  enter <n>      pointer enters hover card n (0-based)
  leave <n>      pointer leaves hover card n
  theme          toggle light/dark
  list           show the current state
  :tree          print the instance tree with cell values
  :trace         print the last render trace
  :q             quit
"""


def parse_command(line: str) -> Tuple[str, str]:
    """Split ``line`` into ``(command, argument)``; both may be empty."""
    s = (line or "").strip()
    if not s:
        return "", ""
    if s[0] in ":/":
        s = ":" + s[1:].strip()
    parts = s.split(None, 1)
    return parts[0].lower(), parts[1] if len(parts) > 1 else ""


def _todo_items(state: dict) -> list:
    for child in state.get("children", []):
        if child.get("key") == "todos":
            return child["output"].get("items", [])
    return []


def resolve_todo_id(state: dict, ref: str) -> Optional[str]:
    """``#2`` → id of the second item; anything else is taken as an id."""
    ref = ref.strip()
    if ref.startswith("#"):
        items = _todo_items(state)
        try:
            pos = int(ref[1:]) - 1
        except ValueError:
            return None
        if 0 <= pos < len(items):
            return items[pos]["key"]
        return None
    return ref or None


def format_state(state: dict) -> str:
    lines = [f"{BOLD}{FG_CYAN}=== State ==={RESET}"]
    for child in state.get("children", []):
        out = child.get("output") or {}
        key = child.get("key")
        if key == "theme":
            lines.append(f"{FG_GRAY}theme:{RESET} {FG_YELLOW}{out.get('class_')}{RESET} {out.get('button')}")
        elif key == "todos":
            lines.append(f"{FG_GRAY}input:{RESET} {FG_YELLOW}{out.get('input')!r}{RESET}")
            items = out.get("items", [])
            if not items:
                lines.append(f"{FG_GRAY}  (no todos){RESET}")
            for pos, item in enumerate(items, 1):
                lines.append(f"  {pos}. {item['text']} {FG_GRAY}[{item['key']}]{RESET}")
        elif "hovering" in out:
            mark = "●" if out["hovering"] else "○"
            lines.append(f"{FG_GRAY}{key}:{RESET} {mark} {out.get('label')}")
    return "\n".join(lines)


def dispatch(app: AppRunner, cmd: str, arg: str) -> Optional[dict]:
    """Run one parsed command against ``app``; returns the new state, if any."""
    if cmd == "add":
        return app.call("todos", "add_item", arg)
    if cmd == "type":
        return app.call("todos", "set_input", arg)
    if cmd == "submit":
        return app.call("todos", "submit")
    if cmd in ("rm", "remove"):
        item_id = resolve_todo_id(app.state(), arg)
        if item_id is None:
            return None
        return app.call("todos", "remove_item", item_id)
    if cmd in ("enter", "leave"):
        handler = "on_pointer_enter" if cmd == "enter" else "on_pointer_leave"
        return app.call(f"hover-{arg.strip() or '0'}", handler)
    if cmd == "theme":
        return app.call("theme", "toggle")
    if cmd == "list":
        return app.state()
    raise KeyError(f"unknown command {cmd!r}")


async def read_terminal_and_invoke(app: AppRunner, *, prompt: str = "> "):
    """Minimal async loop that reads lines from stdin and drives the app.

    - Reading happens via run_in_executor to avoid blocking the event loop.
    - Stop the loop with :q / :quit / :exit or Ctrl+C.
    """
    loop = asyncio.get_running_loop()
    print(HELP)
    try:
        while True:
            txt = await loop.run_in_executor(None, input, prompt)
            cmd, arg = parse_command(txt)
            if not cmd:
                continue
            if cmd in (":q", ":quit", ":exit"):
                break
            if cmd == ":tree":
                app.print_vnode_tree()
                continue
            if cmd == ":trace":
                app.print_render_trace()
                continue
            if cmd in (":help", "help"):
                print(HELP)
                continue
            try:
                state = dispatch(app, cmd, arg)
            except KeyError as exc:
                print(f"{FG_GRAY}[pyhooks]{RESET} {exc.args[0]}")
                continue
            if state:
                print(format_state(state))
    except (KeyboardInterrupt, EOFError):
        pass
