import os
from dataclasses import dataclass
from functools import lru_cache

import dotenv


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.getenv(name)
    try:
        value = int(raw) if raw else default
    except ValueError:
        value = default
    return max(minimum, value)


@dataclass(frozen=True)
class Settings:
    trace: bool = False  # record render traces (:trace in the terminal)
    fps: int = 20  # render loop ticks per second in AppRunner
    render_limit: int = 50  # passes of one instance allowed per scheduling turn
    prompt: str = "> "


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Read settings from the environment (and a ``.env`` file, if present)."""
    dotenv.load_dotenv()
    return Settings(
        trace=_env_bool("PYHOOKS_TRACE", False),
        fps=_env_int("PYHOOKS_FPS", 20),
        render_limit=_env_int("PYHOOKS_RENDER_LIMIT", 50),
        prompt=os.getenv("PYHOOKS_PROMPT", "> "),
    )
