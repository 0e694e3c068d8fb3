from .app_runner import AppRunner, find_instance, run_app, snapshot
from .terminal import read_terminal_and_invoke

__all__ = [
    "AppRunner",
    "find_instance",
    "run_app",
    "snapshot",
    "read_terminal_and_invoke",
]
