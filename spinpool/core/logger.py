"""
Logging for Spinpool: one "spinpool" logger tree, a console handler
(coloured text or JSON lines) and an optional rotating plain-text file.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

import orjson

ROOT_LOGGER = "spinpool"
LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 3

_RESET = "\033[0m"
_DIM = "\033[90m"
_NAME = "\033[96m"
_LEVEL_ANSI = {
    logging.DEBUG: _DIM,
    logging.INFO: "\033[92m",
    logging.WARNING: "\033[93m",
    logging.ERROR: "\033[91m",
    logging.CRITICAL: "\033[95m",
}

# Fields every LogRecord has; the rest arrived through `extra=`
_STANDARD_FIELDS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class PlainFormatter(logging.Formatter):
    """`time | LEVEL | logger | message`, traceback on the following lines."""

    def _line(self, record, stamp: str, level: str, name: str) -> str:
        line = f"{stamp} | {level} | {name} | {record.getMessage()}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line

    def format(self, record):
        stamp = self.formatTime(record, "%Y-%m-%d %H:%M:%S")
        return self._line(record, stamp, f"{record.levelname:<8}", record.name)


class ColoredFormatter(PlainFormatter):
    def format(self, record):
        ansi = _LEVEL_ANSI.get(record.levelno, _RESET)
        stamp = self.formatTime(record, "%Y-%m-%d %H:%M:%S")
        return self._line(
            record,
            f"{_DIM}{stamp}{_RESET}",
            f"{ansi}{record.levelname:<8}{_RESET}",
            f"{_NAME}{record.name}{_RESET}",
        )


class JsonFormatter(logging.Formatter):
    """One JSON object per line; `extra=` fields are merged in at the top level."""

    def format(self, record):
        entry = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        entry.update(
            (key, value) for key, value in vars(record).items() if key not in _STANDARD_FIELDS
        )
        return orjson.dumps(entry, default=str).decode()


def _file_handler(path: Path) -> Optional[logging.Handler]:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(path, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS)
    except OSError as e:
        sys.stderr.write(f"WARNING: file logging disabled ({e}); console only\n")
        return None
    handler.setFormatter(PlainFormatter())
    return handler


def setup_logger(
    name: str = ROOT_LOGGER,
    level: str = "INFO",
    log_to_file: bool = False,
    log_file_path: Optional[Path] = None,
    formatter: str = "color",
) -> logging.Logger:
    """
    Configure `name` from scratch: existing handlers are closed and replaced,
    so calling this again (a reload, a second app) never duplicates output.
    """
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(JsonFormatter() if formatter == "json" else ColoredFormatter())
    logger.addHandler(console)

    if log_to_file:
        handler = _file_handler(log_file_path or Path("data") / "app.log")
        if handler is not None:
            logger.addHandler(handler)

    return logger


_configured = False


def get_logger(name: str = None) -> logging.Logger:
    """The app logger, or its child `spinpool.<name>`."""
    global _configured
    if not _configured:
        setup_logger()
        _configured = True
    logger = logging.getLogger(ROOT_LOGGER)
    return logger.getChild(name) if name else logger


def init_logging(
    level: str = "INFO",
    log_to_file: bool = False,
    formatter: str = "color",
    log_file_path: Optional[Path] = None,
) -> logging.Logger:
    global _configured
    logger = setup_logger(
        level=level,
        log_to_file=log_to_file,
        log_file_path=log_file_path,
        formatter=formatter,
    )
    _configured = True
    logger.debug(f"Logging configured: level={level} formatter={formatter} file={log_to_file}")
    return logger
