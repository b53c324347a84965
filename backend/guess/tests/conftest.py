import json
import logging
from unittest.mock import patch

import pytest

from guess.logic.settings import GameSettings
from guess.session.context import ServerContext
from guess.tests.mocks.number_source import ScriptedNumberSource
from shared.logging import setup_logging


@pytest.fixture
def number_source():
    return ScriptedNumberSource()


@pytest.fixture
def ctx(number_source):
    return ServerContext(number_source=number_source, default_settings=GameSettings())


@pytest.fixture
def json_log_file(tmp_path, monkeypatch):
    """Install JSON file logging for one test; yields a reader returning the parsed lines."""
    monkeypatch.setenv("LOG_FORMAT", "json")
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    with patch("shared.logging._is_test", return_value=False):
        path = setup_logging(log_dir=tmp_path / "logs")
    yield lambda: [json.loads(line) for line in path.read_text().splitlines()]
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
