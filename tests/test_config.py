"""
Tests for settings and .env loading.
"""

import os

import pytest

from careerlog.config import DEFAULT_ROSTER_URL, Settings
from careerlog.env import load_env


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.batch_size == 5
        assert settings.request_delay == 0.3
        assert settings.fetch_timeout == 15.0
        assert settings.roster_timeout == 60.0
        assert settings.retry_attempts == 3
        assert settings.retry_delay == 30.0
        assert settings.roster_url == DEFAULT_ROSTER_URL

    @pytest.mark.parametrize("pipeline,delay", [
        ("gamelogs", 4.0),
        ("injuries", 2.0),
        (None, 4.0),
    ])
    def test_batch_delay_per_pipeline(self, pipeline, delay):
        assert Settings.from_env(pipeline, environ={}).batch_delay == delay

    def test_environment_overrides(self):
        settings = Settings.from_env("injuries", environ={
            "BATCH_SIZE": "3",
            "BATCH_DELAY_MS": "500",
            "RETRY_ATTEMPTS": "5",
            "ROSTER_URL": "http://localhost:8000/api/players",
            "ROSTER_LIMIT": "",
        })
        assert settings.batch_size == 3
        assert settings.batch_delay == 0.5
        assert settings.retry_attempts == 5
        assert settings.roster_url == "http://localhost:8000/api/players"
        assert settings.roster_limit == 250

    def test_non_integer_rejected(self):
        with pytest.raises(ValueError, match="BATCH_SIZE must be an integer"):
            Settings.from_env(environ={"BATCH_SIZE": "five"})

    @pytest.mark.parametrize("changes", [
        {"batch_size": 0},
        {"retry_attempts": 0},
        {"request_delay_ms": -1},
        {"fetch_timeout_ms": 0},
        {"roster_limit": 0},
    ])
    def test_out_of_range_rejected(self, changes):
        with pytest.raises(ValueError):
            Settings(**changes)

    def test_override_skips_none(self):
        settings = Settings().override(batch_size=2, batch_delay_ms=None)
        assert settings.batch_size == 2
        assert settings.batch_delay_ms == 4000

    def test_override_validates(self):
        with pytest.raises(ValueError):
            Settings().override(batch_size=-1)


class TestLoadEnv:
    def test_reads_dotenv_without_clobbering(self, tmp_path, monkeypatch):
        (tmp_path / ".env").write_text("BATCH_SIZE=2\nROSTER_LIMIT=10\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("BATCH_SIZE", raising=False)
        monkeypatch.setenv("ROSTER_LIMIT", "50")

        try:
            load_env()
            settings = Settings.from_env()
        finally:
            os.environ.pop("BATCH_SIZE", None)

        assert settings.batch_size == 2
        assert settings.roster_limit == 50

    def test_missing_file_is_noop(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("BATCH_SIZE", raising=False)
        load_env()
        assert Settings.from_env().batch_size == 5
