import asyncio

from pyhooks.boot import read_terminal_and_invoke, run_app
from pyhooks.components import App
from pyhooks.config import get_settings


async def _run() -> None:
    settings = get_settings()
    myapp = run_app(App, fps=settings.fps)
    try:
        await read_terminal_and_invoke(myapp, prompt=settings.prompt)
    finally:
        myapp.shutdown()


def main() -> None:
    asyncio.run(_run())


if __name__ == "__main__":
    main()
