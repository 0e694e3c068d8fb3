import pytest

from pyhooks.config import get_settings
from pyhooks.core import debug
from pyhooks.core.runtime import Scheduler


@pytest.fixture
def scheduler():
    return Scheduler(render_limit=50)


@pytest.fixture(autouse=True)
def _reset_globals():
    yield
    debug.disable_tracing()
    debug.clear_traces()
    get_settings.cache_clear()
