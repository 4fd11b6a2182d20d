"""
Logging setup for the ScopeLock API.

Every line carries a short tag naming the part of the service that logged
it (AUTH, COMPOSER, QUOTA...). Tags are coloured when stdout is a terminal
and plain otherwise, so container logs stay free of escape codes.

Modules just do:
    logger = logging.getLogger(__name__)
"""

import logging
import sys

RESET = "\033[0m"
DIM = "\033[2m"

LEVEL_STYLES = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1;41m",
}

# logger-name prefix -> (tag, colour); the longest matching prefix wins
TAGS = {
    "main": ("SERVER", "\033[1m"),
    "scopelock.database": ("DB", "\033[34m"),
    "scopelock.admin": ("ADMIN", "\033[96m"),
    "scopelock.services.auth": ("AUTH", "\033[96m"),
    "scopelock.routers.auth": ("AUTH", "\033[96m"),
    "scopelock.services.llm": ("LLM", "\033[35m"),
    "scopelock.services.composer": ("COMPOSER", "\033[95m"),
    "scopelock.services.quota": ("QUOTA", "\033[93m"),
    "scopelock.services.lifecycle": ("LIFECYCLE", "\033[92m"),
    "scopelock.routers": ("API", "\033[37m"),
}

NOISY_LOGGERS = ("uvicorn.access", "httpcore", "httpx", "openai", "sqlalchemy.engine")


def resolve_tag(logger_name: str) -> tuple[str, str]:
    matches = [p for p in TAGS if logger_name == p or logger_name.startswith(p + ".")]
    if matches:
        return TAGS[max(matches, key=len)]
    return logger_name.rsplit(".", 1)[-1].upper()[:10], DIM


class ScopeLockFormatter(logging.Formatter):
    """`HH:MM:SS.mmm LEVEL [TAG] message`, optionally with ANSI colour."""

    def __init__(self, use_colour: bool = False):
        super().__init__(datefmt="%H:%M:%S")
        self.use_colour = use_colour

    def _paint(self, text: str, style: str) -> str:
        return f"{style}{text}{RESET}" if self.use_colour else text

    def formatTime(self, record, datefmt=None):
        return f"{super().formatTime(record, datefmt)}.{int(record.msecs):03d}"

    def format(self, record: logging.LogRecord) -> str:
        tag, tag_style = resolve_tag(record.name)
        line = " ".join((
            self._paint(self.formatTime(record, self.datefmt), DIM),
            self._paint(f"{record.levelname:<8}", LEVEL_STYLES.get(record.levelno, "")),
            self._paint(f"[{tag}]", tag_style),
            record.getMessage(),
        ))
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(level: str = "DEBUG", stream=None):
    """Route all records through one stdout handler. Called from the app lifespan."""
    stream = stream or sys.stdout
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.DEBUG))
    root.handlers.clear()

    handler = logging.StreamHandler(stream)
    handler.setFormatter(ScopeLockFormatter(use_colour=hasattr(stream, "isatty") and stream.isatty()))
    root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger("main").info("Logging initialised (level=%s)", level)
