"""
Logger factory: stdout + optional RotatingFileHandler (10MB, 3 backups).
All rolegate loggers live under the "rolegate." namespace.
"""
from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path

_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
_DATEFMT = "%Y-%m-%dT%H:%M:%S"


def get_logger(name: str, log_dir: Path | None = None, level: str = "INFO") -> logging.Logger:
    if not name.startswith("rolegate"):
        name = f"rolegate.{name}"
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger  # already configured

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    fmt = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

    ch = logging.StreamHandler(sys.stdout)
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    if log_dir is not None:
        _add_file_handler(logger, Path(log_dir), fmt)

    logger.propagate = False
    return logger


def configure_logging(level: str = "INFO", log_dir: Path | None = None) -> None:
    """Re-level every rolegate logger created so far; attach file output if asked."""
    lvl = getattr(logging, level.upper(), logging.INFO)
    fmt = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)
    for name, obj in list(logging.Logger.manager.loggerDict.items()):
        if not name.startswith("rolegate") or not isinstance(obj, logging.Logger):
            continue
        obj.setLevel(lvl)
        if log_dir is not None and not any(
            isinstance(h, logging.handlers.RotatingFileHandler) for h in obj.handlers
        ):
            _add_file_handler(obj, Path(log_dir), fmt)


def _add_file_handler(logger: logging.Logger, log_dir: Path, fmt: logging.Formatter) -> None:
    log_dir.mkdir(parents=True, exist_ok=True)
    fh = logging.handlers.RotatingFileHandler(
        filename=log_dir / f"{logger.name.replace('.', '_')}.log",
        maxBytes=10 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    fh.setFormatter(fmt)
    logger.addHandler(fh)
