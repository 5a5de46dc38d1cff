"""Logging setup for the detector.

``configure_logging`` is called once by the CLI (or by whatever process
embeds ``AnalysisService``). Library modules only call ``get_logger`` with an
``fnd.<area>`` name and never touch handlers themselves.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from typing import List, Literal, Optional

LogOutput = Literal["stdout", "file", "both"]
LogFormat = Literal["text", "json"]

DEFAULT_LOG_FILE = "logs/fakenews-detector.log"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5

# Chatty HTTP internals stay at WARNING unless explicitly configured
NOISY_LOGGERS = ("urllib3", "requests")

_TEXT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(filename)s:%(lineno)d | %(message)s"
_JSON_FORMAT = (
    '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "name": "%(name)s", '
    '"file": "%(filename)s:%(lineno)d", "message": "%(message)s"}'
)


@dataclass(slots=True)
class LogSettings:
    level: str | int
    output: str
    file_path: str
    log_format: str

    @classmethod
    def from_env(cls) -> "LogSettings":
        """Read LOG_* variables at call time so a freshly loaded .env applies."""
        return cls(
            level=os.environ.get("LOG_LEVEL", "INFO").upper(),
            output=(os.environ.get("LOG_OUTPUT") or "stdout").lower(),
            file_path=os.environ.get("LOG_FILE_PATH") or DEFAULT_LOG_FILE,
            log_format=(os.environ.get("LOG_FORMAT") or "text").lower(),
        )


def _handlers(settings: LogSettings) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []
    if settings.output in ("stdout", "both"):
        # stderr, so --json output on stdout stays machine-readable
        handlers.append(logging.StreamHandler(sys.stderr))
    if settings.output in ("file", "both"):
        log_dir = os.path.dirname(settings.file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(RotatingFileHandler(settings.file_path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS))
    return handlers


def configure_logging(
    level: str | int | None = None,
    output: LogOutput | None = None,
    file_path: str | None = None,
    log_format: LogFormat | None = None,
    module: Optional[str] = None,
) -> None:
    """Install handlers on the root logger, replacing any existing ones.

    Explicit arguments override the LOG_LEVEL, LOG_OUTPUT, LOG_FILE_PATH and
    LOG_FORMAT environment variables. ``module`` (e.g. ``"fnd.ai"``) gets
    the same level set on its own logger.
    """
    settings = LogSettings.from_env()
    if level is not None:
        settings.level = level
    if output is not None:
        settings.output = output
    if file_path is not None:
        settings.file_path = file_path
    if log_format is not None:
        settings.log_format = log_format

    formatter = logging.Formatter(_JSON_FORMAT if settings.log_format == "json" else _TEXT_FORMAT)
    root = logging.getLogger()
    root.setLevel(settings.level)
    root.handlers.clear()
    for handler in _handlers(settings):
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(root.level, logging.WARNING))
    if module:
        logging.getLogger(module).setLevel(settings.level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
