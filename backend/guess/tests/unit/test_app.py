import logging
from unittest.mock import patch

import pytest

from guess.logic.rng import RandomNumberSource
from guess.logic.settings import GameSettings
from guess.server.app import create_context, get_context
from guess.server.settings import GuessServerSettings


@pytest.fixture
def _reset_root_logger():
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()


class TestCreateContext:
    def test_context_uses_configured_defaults(self):
        ctx = create_context(settings=GuessServerSettings(default_max_points=50, rng_seed=1))

        assert ctx.default_settings == GameSettings(max_points=50)
        assert isinstance(ctx.number_source, RandomNumberSource)
        assert len(ctx.players) == 0
        assert len(ctx.games) == 0

    def test_injected_number_source(self, number_source):
        ctx = create_context(settings=GuessServerSettings(), number_source=number_source)

        assert ctx.number_source is number_source


@pytest.mark.usefixtures("_reset_root_logger")
class TestGetContext:
    def test_configures_logging_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GUESS_LOG_DIR", str(tmp_path / "logs"))
        monkeypatch.setenv("GUESS_DEFAULT_MAX_GUESS", "20")
        monkeypatch.setenv("LOG_FORMAT", "json")
        monkeypatch.setenv("LOG_LEVEL", "INFO")

        with patch("shared.logging._is_test", return_value=False):
            ctx = get_context()

        assert ctx.default_settings.max_guess == 20
        [log_file] = (tmp_path / "logs").glob("guess-*.log")
        content = log_file.read_text()
        assert '"event": "guess server ready"' in content
        assert '"max_guess": 20' in content
