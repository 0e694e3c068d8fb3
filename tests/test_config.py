"""Tests for environment-driven settings."""

from pyhooks.config import Settings, get_settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("PYHOOKS_TRACE", "PYHOOKS_FPS", "PYHOOKS_RENDER_LIMIT", "PYHOOKS_PROMPT"):
            monkeypatch.delenv(name, raising=False)
        get_settings.cache_clear()
        assert get_settings() == Settings()

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("PYHOOKS_TRACE", "yes")
        monkeypatch.setenv("PYHOOKS_FPS", "60")
        monkeypatch.setenv("PYHOOKS_RENDER_LIMIT", "7")
        monkeypatch.setenv("PYHOOKS_PROMPT", "$ ")
        get_settings.cache_clear()
        settings = get_settings()
        assert settings.trace is True
        assert settings.fps == 60
        assert settings.render_limit == 7
        assert settings.prompt == "$ "

    def test_bad_numbers_fall_back(self, monkeypatch):
        monkeypatch.setenv("PYHOOKS_FPS", "fast")
        monkeypatch.setenv("PYHOOKS_RENDER_LIMIT", "0")
        get_settings.cache_clear()
        settings = get_settings()
        assert settings.fps == 20
        assert settings.render_limit == 1

    def test_scheduler_uses_render_limit(self, monkeypatch):
        from pyhooks.core import Scheduler

        monkeypatch.setenv("PYHOOKS_RENDER_LIMIT", "3")
        get_settings.cache_clear()
        assert Scheduler().render_limit == 3
