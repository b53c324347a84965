"""structlog setup for the guessing game server.

Configured from the environment:
- LOG_FORMAT: "json" (one object per line) or "console"/unset.
- LOG_LEVEL: a stdlib level name, INFO when unset.

Facade verbs bind `action` and `player` into structlog contextvars, so
every line logged while a verb runs carries both. Game states, error codes
and settings models are flattened to plain values before rendering.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

import structlog
from pydantic import BaseModel

if TYPE_CHECKING:
    from collections.abc import MutableMapping
    from typing import Any

LOG_FILE_PREFIX = "guess"
LOG_FILE_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"

_LOG_FORMATS = ("json", "console")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [_plain(v) for v in value]
    return value


def flatten_values(
    _logger: object,
    _method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Processor: replace enums and pydantic models (also inside dicts and sequences) with plain values."""
    for key, value in event_dict.items():
        event_dict[key] = _plain(value)
    return event_dict


# Shared by setup_logging and the test suite's conftest.
PROCESSORS = (
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    flatten_values,
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
)


def _is_test() -> bool:
    return "pytest" in sys.modules


def _env_choice(name: str, choices: tuple[str, ...], default: str) -> str:
    value = os.environ.get(name, "").strip().upper() or default
    if value not in choices:
        msg = f"Invalid {name}={value.lower()!r}. Expected one of: {', '.join(c.lower() for c in choices)}."
        raise ValueError(msg)
    return value


def _formatter(*, json_mode: bool, colors: bool) -> logging.Formatter:
    renderer = structlog.processors.JSONRenderer() if json_mode else structlog.dev.ConsoleRenderer(colors=colors)
    return structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
    )


def log_file_path(log_dir: Path | str) -> Path:
    """Timestamped log file for a server started now, e.g. guess-2025-03-15_10-30-45.log."""
    timestamp = datetime.now(tz=UTC).strftime(LOG_FILE_TIMESTAMP_FORMAT)
    return Path(log_dir) / f"{LOG_FILE_PREFIX}-{timestamp}.log"


def setup_logging(
    log_dir: Path | str | None = None,
    level: int | None = None,
) -> Path | None:
    """Route structlog through the stdlib root logger: stdout always, a file when log_dir is set.

    Returns the log file path, or None when no file handler was installed.
    File output is skipped under pytest unless `_is_test` is patched.
    """
    json_mode = _env_choice("LOG_FORMAT", tuple(f.upper() for f in _LOG_FORMATS), "CONSOLE") == "JSON"
    if level is None:
        level = logging.getLevelNamesMapping()[_env_choice("LOG_LEVEL", _LOG_LEVELS, "INFO")]

    structlog.configure(
        processors=[*PROCESSORS, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()

    stdout = logging.StreamHandler(sys.stdout)
    stdout.setFormatter(_formatter(json_mode=json_mode, colors=sys.stdout.isatty()))
    root.addHandler(stdout)

    if log_dir is None or _is_test():
        return None

    path = log_file_path(log_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(path)
    file_handler.setFormatter(_formatter(json_mode=json_mode, colors=False))
    root.addHandler(file_handler)
    return path
